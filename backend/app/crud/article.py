from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from typing import List

from app.core.exceptions import ArticleNotFoundError, InvalidParameterError
from app.core.logging import get_logger
from app.crud.query import keyword_filter, resolve_order
from app.models import Article
from app.schemas import ArticleCreate, ArticleUpdate


ARTICLE_ORDERS = {
    "recent": [Article.created_at.desc(), Article.id.desc()],
    "oldest": [Article.created_at.asc(), Article.id.asc()],
}


class ArticleCRUD:
    """記事関連のCRUD操作"""
    logger = get_logger(__name__)

    async def get(self, db: AsyncSession, id: str) -> Article:
        """IDで記事を取得（存在しない場合は ArticleNotFoundError）"""
        if not id:
            self.logger.error("Article ID is required")
            raise InvalidParameterError("id", id, "記事IDが必要です")

        self.logger.info(f"Retrieving article by id: {id}")
        result = await db.execute(select(Article).where(Article.id == id))
        article = result.scalar_one_or_none()

        if article is None:
            self.logger.info(f"Article with id {id} not found")
            raise ArticleNotFoundError(id)

        self.logger.info(f"Found article with id: {id}")
        return article

    async def get_multi(
        self,
        db: AsyncSession,
        keyword: str = "",
        order: str = "recent",
        skip: int = 0,
        limit: int = 10
    ) -> List[Article]:
        """記事一覧を取得（キーワード検索・並び順・ページング）"""
        self.logger.info(f"Retrieving articles: keyword={keyword!r}, order={order}, skip={skip}, limit={limit}")
        stmt = select(Article)

        condition = keyword_filter([Article.title, Article.content], keyword)
        if condition is not None:
            stmt = stmt.where(condition)

        stmt = stmt.order_by(*resolve_order(order, ARTICLE_ORDERS)).offset(skip).limit(limit)
        result = await db.execute(stmt)
        articles = list(result.scalars().all())
        self.logger.info(f"Retrieved {len(articles)} articles")
        return articles

    async def create(self, db: AsyncSession, obj_in: ArticleCreate) -> Article:
        """新しい記事を作成"""
        self.logger.info(f"Creating new article: {obj_in.title}")
        db_obj = Article(
            title=obj_in.title,
            content=obj_in.content
        )
        db.add(db_obj)
        await db.flush()
        await db.refresh(db_obj)
        # commitはsessionのfinallyで行う
        return db_obj

    async def update(self, db: AsyncSession, id: str, obj_in: ArticleUpdate) -> Article:
        """記事を部分更新（指定されたフィールドのみ）"""
        db_obj = await self.get(db, id)
        update_data = obj_in.model_dump(exclude_unset=True)
        self.logger.info(f"Updating article {id}: fields={sorted(update_data)}")

        for field, value in update_data.items():
            setattr(db_obj, field, value)

        await db.flush()
        await db.refresh(db_obj)
        return db_obj

    async def delete(self, db: AsyncSession, id: str) -> None:
        """記事を削除（コメントはDB側でカスケード削除）"""
        db_obj = await self.get(db, id)
        self.logger.info(f"Deleting article: {id}")
        await db.delete(db_obj)
        await db.flush()


# シングルトンインスタンス
article_crud = ArticleCRUD()
