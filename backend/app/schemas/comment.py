from pydantic import Field
from datetime import datetime

from app.schemas.base import CamelModel


class CommentCreate(CamelModel):
    """コメントの作成・更新共通（contentは必須）"""
    content: str = Field(min_length=1)


class CommentSummary(CamelModel):
    """カーソル一覧用"""
    id: str
    content: str
    created_at: datetime


class Comment(CommentSummary):
    updated_at: datetime
    article_id: str


class ProductComment(CommentSummary):
    updated_at: datetime
    product_id: int
