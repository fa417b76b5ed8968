from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
from typing import List, Tuple

from app.core.exceptions import ProductNotFoundError
from app.core.logging import get_logger
from app.crud.query import keyword_filter, resolve_order
from app.models import Product
from app.schemas import ProductCreate, ProductUpdate


PRODUCT_ORDERS = {
    "recent": [Product.created_at.desc(), Product.id.desc()],
    "favorite": [Product.favorite_count.desc(), Product.created_at.desc(), Product.id.desc()],
}

PRODUCT_SEARCH_COLUMNS = [Product.name, Product.description]


class ProductCRUD:
    """商品関連のCRUD操作"""
    logger = get_logger(__name__)

    async def get(self, db: AsyncSession, id: int) -> Product:
        """IDで商品を取得（存在しない場合は ProductNotFoundError）"""
        self.logger.info(f"Retrieving product by id: {id}")
        result = await db.execute(select(Product).where(Product.id == id))
        product = result.scalar_one_or_none()
        if product is None:
            self.logger.info(f"Product with id {id} not found")
            raise ProductNotFoundError(id)
        return product

    async def get_multi(
        self,
        db: AsyncSession,
        keyword: str = "",
        order: str = "recent",
        skip: int = 0,
        limit: int = 10
    ) -> List[Product]:
        """商品一覧を取得（キーワード検索・並び順・ページング）"""
        self.logger.info(f"Retrieving products: keyword={keyword!r}, order={order}, skip={skip}, limit={limit}")
        stmt = select(Product)
        condition = keyword_filter(PRODUCT_SEARCH_COLUMNS, keyword)
        if condition is not None:
            stmt = stmt.where(condition)

        stmt = stmt.order_by(*resolve_order(order, PRODUCT_ORDERS)).offset(skip).limit(limit)
        result = await db.execute(stmt)
        return list(result.scalars().all())

    async def count(self, db: AsyncSession, keyword: str = "") -> int:
        """キーワードに一致する商品の総数"""
        stmt = select(func.count()).select_from(Product)
        condition = keyword_filter(PRODUCT_SEARCH_COLUMNS, keyword)
        if condition is not None:
            stmt = stmt.where(condition)
        return (await db.execute(stmt)).scalar_one()

    async def get_page(
        self,
        db: AsyncSession,
        keyword: str = "",
        order: str = "recent",
        skip: int = 0,
        limit: int = 10
    ) -> Tuple[int, List[Product]]:
        """総件数と表示範囲の商品をまとめて取得"""
        products = await self.get_multi(db, keyword=keyword, order=order, skip=skip, limit=limit)
        total_count = await self.count(db, keyword=keyword)
        self.logger.info(f"Retrieved {len(products)} of {total_count} products")
        return total_count, products

    async def create(self, db: AsyncSession, obj_in: ProductCreate) -> Product:
        """新しい商品を登録"""
        self.logger.info(f"Creating new product: {obj_in.name}")
        db_obj = Product(
            name=obj_in.name,
            description=obj_in.description,
            price=obj_in.price,
            tags=list(obj_in.tags),
            favorite_count=obj_in.favorite_count
        )
        db.add(db_obj)
        await db.flush()
        await db.refresh(db_obj)
        return db_obj

    async def update(self, db: AsyncSession, id: int, obj_in: ProductUpdate) -> Product:
        """商品を部分更新（指定されたフィールドのみ）"""
        db_obj = await self.get(db, id)
        update_data = obj_in.model_dump(exclude_unset=True)
        self.logger.info(f"Updating product {id}: fields={sorted(update_data)}")

        for field, value in update_data.items():
            setattr(db_obj, field, value)

        await db.flush()
        await db.refresh(db_obj)
        return db_obj

    async def delete(self, db: AsyncSession, id: int) -> None:
        """商品を削除"""
        db_obj = await self.get(db, id)
        self.logger.info(f"Deleting product: {id}")
        await db.delete(db_obj)
        await db.flush()


# シングルトンインスタンス
product_crud = ProductCRUD()
