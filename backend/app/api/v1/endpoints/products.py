from fastapi import APIRouter, Depends, Query, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional

from app.api.errors import async_handler
from app.api.pagination import cursor_limit, page_window
from app.core.logging import get_request_logger
from app.crud import product_crud, product_comment_crud
from app.db.session import get_async_session
from app.schemas import (
    CommentCreate,
    CommentSummary,
    Product,
    ProductComment,
    ProductCreate,
    ProductList,
    ProductSummary,
    ProductUpdate
)

router = APIRouter()


@router.get("/products", response_model=ProductList)
@async_handler
async def read_products(
    request: Request,
    page: Optional[str] = None,
    page_size: Optional[str] = Query(None, alias="pageSize"),
    offset: Optional[str] = None,
    limit: Optional[str] = None,
    order: str = "recent",
    keyword: str = "",
    db: AsyncSession = Depends(get_async_session)
):
    """商品一覧を取得（総件数付き）"""
    logger = get_request_logger(request)
    window = page_window(page=page, page_size=page_size, offset=offset, limit=limit)
    logger.info(f"商品一覧取得リクエスト: skip={window.skip}, limit={window.limit}, order={order}, keyword={keyword!r}")

    total_count, products = await product_crud.get_page(
        db, keyword=keyword, order=order, skip=window.skip, limit=window.limit
    )
    return {"total_count": total_count, "products": products}


@router.get("/products/{id}", response_model=ProductSummary)
@async_handler
async def read_product(
    request: Request,
    id: int,
    db: AsyncSession = Depends(get_async_session)
):
    """商品詳細を取得"""
    get_request_logger(request).info(f"商品詳細取得リクエスト: 商品ID={id}")
    return await product_crud.get(db, id)


@router.post("/products", response_model=Product, status_code=status.HTTP_201_CREATED)
@async_handler
async def create_product(
    request: Request,
    product: ProductCreate,
    db: AsyncSession = Depends(get_async_session)
):
    """商品を登録"""
    logger = get_request_logger(request)
    logger.info(f"商品登録リクエスト: 商品名={product.name}")
    db_product = await product_crud.create(db, obj_in=product)
    logger.info(f"商品登録成功: 商品ID={db_product.id}")
    return db_product


@router.patch("/products/{id}", response_model=Product)
@async_handler
async def update_product(
    request: Request,
    id: int,
    product: ProductUpdate,
    db: AsyncSession = Depends(get_async_session)
):
    """商品を部分更新"""
    get_request_logger(request).info(f"商品更新リクエスト: 商品ID={id}")
    return await product_crud.update(db, id, obj_in=product)


@router.delete("/products/{id}", status_code=status.HTTP_204_NO_CONTENT)
@async_handler
async def delete_product(
    request: Request,
    id: int,
    db: AsyncSession = Depends(get_async_session)
):
    """商品を削除"""
    get_request_logger(request).info(f"商品削除リクエスト: 商品ID={id}")
    await product_crud.delete(db, id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/product/{id}/comment", response_model=ProductComment, status_code=status.HTTP_201_CREATED)
@async_handler
async def create_product_comment(
    request: Request,
    id: int,
    comment: CommentCreate,
    db: AsyncSession = Depends(get_async_session)
):
    """商品にコメントを登録"""
    get_request_logger(request).info(f"商品コメント登録リクエスト: 商品ID={id}")
    return await product_comment_crud.create(db, owner_id=id, obj_in=comment)


@router.get("/product/{id}/comment", response_model=List[CommentSummary])
@async_handler
async def read_product_comments(
    request: Request,
    id: int,
    cursor: Optional[str] = None,
    limit: Optional[str] = None,
    db: AsyncSession = Depends(get_async_session)
):
    """商品のコメント一覧を取得（カーソル方式）"""
    get_request_logger(request).info(f"商品コメント一覧取得リクエスト: 商品ID={id}, cursor={cursor}")
    return await product_comment_crud.get_multi(db, cursor=cursor, limit=cursor_limit(limit), owner_id=id)
