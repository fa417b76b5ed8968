from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from typing import Optional

from app.core.exceptions import CommentNotFoundError, ProductCommentNotFoundError
from app.core.logging import get_logger
from app.crud.article import article_crud
from app.crud.product import product_crud
from app.crud.query import fetch_cursor_window
from app.models import Comment, ProductComment
from app.schemas import CommentCreate


class CommentCRUDBase:
    """コメント系リソース共通のCRUD操作

    サブクラスで対象モデル・所有者の外部キー名・所有者のCRUD・NotFound例外を指定する。
    """
    model = None
    owner_field: str = ""
    owner_crud = None
    not_found_error = None
    logger = get_logger(__name__)

    async def get(self, db: AsyncSession, id: str):
        """IDでコメントを取得"""
        self.logger.info(f"Retrieving {self.model.__name__} by id: {id}")
        result = await db.execute(select(self.model).where(self.model.id == id))
        comment = result.scalar_one_or_none()
        if comment is None:
            self.logger.info(f"{self.model.__name__} with id {id} not found")
            raise self.not_found_error(id)
        return comment

    async def get_multi(
        self,
        db: AsyncSession,
        cursor: Optional[str] = None,
        limit: int = 5,
        owner_id=None
    ) -> list:
        """カーソル方式のコメント一覧（新しい順、owner_id指定時はその所有者のみ）"""
        self.logger.info(
            f"Retrieving {self.model.__name__} list: cursor={cursor}, limit={limit}, owner={owner_id}"
        )
        criteria = []
        if owner_id is not None:
            # 所有者が存在しない場合は NotFound
            await self.owner_crud.get(db, owner_id)
            criteria.append(getattr(self.model, self.owner_field) == owner_id)
        return await fetch_cursor_window(db, self.model, cursor, limit, *criteria)

    async def create(self, db: AsyncSession, owner_id, obj_in: CommentCreate):
        """所有者を確認してからコメントを作成"""
        await self.owner_crud.get(db, owner_id)
        self.logger.info(f"Creating {self.model.__name__} for owner {owner_id}")
        db_obj = self.model(content=obj_in.content, **{self.owner_field: owner_id})
        db.add(db_obj)
        await db.flush()
        await db.refresh(db_obj)
        return db_obj

    async def update(self, db: AsyncSession, id: str, obj_in: CommentCreate):
        """コメント本文を更新"""
        db_obj = await self.get(db, id)
        self.logger.info(f"Updating {self.model.__name__}: {id}")
        for field, value in obj_in.model_dump(exclude_unset=True).items():
            setattr(db_obj, field, value)
        await db.flush()
        await db.refresh(db_obj)
        return db_obj

    async def delete(self, db: AsyncSession, id: str) -> None:
        """コメントを削除"""
        db_obj = await self.get(db, id)
        self.logger.info(f"Deleting {self.model.__name__}: {id}")
        await db.delete(db_obj)
        await db.flush()


class CommentCRUD(CommentCRUDBase):
    """記事コメントのCRUD操作"""
    model = Comment
    owner_field = "article_id"
    owner_crud = article_crud
    not_found_error = CommentNotFoundError


class ProductCommentCRUD(CommentCRUDBase):
    """商品コメントのCRUD操作"""
    model = ProductComment
    owner_field = "product_id"
    owner_crud = product_crud
    not_found_error = ProductCommentNotFoundError


# シングルトンインスタンス
comment_crud = CommentCRUD()
product_comment_crud = ProductCommentCRUD()
