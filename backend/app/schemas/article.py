from pydantic import Field, field_validator
from datetime import datetime
from typing import Optional

from app.schemas.base import CamelModel, reject_null


# Article関連のスキーマ
class ArticleBase(CamelModel):
    title: str = Field(min_length=1, max_length=200)
    content: str = Field(min_length=1)

class ArticleCreate(ArticleBase):
    pass

class ArticleUpdate(CamelModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    content: Optional[str] = Field(default=None, min_length=1)

    @field_validator('title', 'content')
    @classmethod
    def not_null(cls, v):
        return reject_null(v)

class ArticleDetail(CamelModel):
    """詳細取得・一覧用（更新日時を含まない）"""
    id: str
    title: str
    content: str
    created_at: datetime

class Article(ArticleDetail):
    updated_at: datetime
