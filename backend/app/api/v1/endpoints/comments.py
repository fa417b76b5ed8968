from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional

from app.api.errors import async_handler
from app.api.pagination import cursor_limit
from app.core.logging import get_request_logger
from app.crud import comment_crud, product_comment_crud
from app.db.session import get_async_session
from app.schemas import Comment, CommentCreate, CommentSummary, ProductComment

router = APIRouter()


# 記事コメント
@router.get("/comment", response_model=List[CommentSummary])
@async_handler
async def read_comments(
    request: Request,
    cursor: Optional[str] = None,
    limit: Optional[str] = None,
    db: AsyncSession = Depends(get_async_session)
):
    """記事コメント一覧を取得（カーソル方式）"""
    get_request_logger(request).info(f"コメント一覧取得リクエスト: cursor={cursor}, limit={limit}")
    return await comment_crud.get_multi(db, cursor=cursor, limit=cursor_limit(limit))


@router.patch("/comment/{id}", response_model=Comment)
@async_handler
async def update_comment(
    request: Request,
    id: str,
    comment: CommentCreate,
    db: AsyncSession = Depends(get_async_session)
):
    """記事コメントを更新"""
    get_request_logger(request).info(f"コメント更新リクエスト: コメントID={id}")
    return await comment_crud.update(db, id, obj_in=comment)


@router.delete("/comment/{id}", status_code=status.HTTP_204_NO_CONTENT)
@async_handler
async def delete_comment(
    request: Request,
    id: str,
    db: AsyncSession = Depends(get_async_session)
):
    """記事コメントを削除"""
    get_request_logger(request).info(f"コメント削除リクエスト: コメントID={id}")
    await comment_crud.delete(db, id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# 商品コメント
@router.get("/productcomment", response_model=List[CommentSummary])
@async_handler
async def read_product_comments(
    request: Request,
    cursor: Optional[str] = None,
    limit: Optional[str] = None,
    db: AsyncSession = Depends(get_async_session)
):
    """商品コメント一覧を取得（カーソル方式）"""
    get_request_logger(request).info(f"商品コメント一覧取得リクエスト: cursor={cursor}, limit={limit}")
    return await product_comment_crud.get_multi(db, cursor=cursor, limit=cursor_limit(limit))


@router.patch("/productcomment/{id}", response_model=ProductComment)
@async_handler
async def update_product_comment(
    request: Request,
    id: str,
    comment: CommentCreate,
    db: AsyncSession = Depends(get_async_session)
):
    """商品コメントを更新"""
    get_request_logger(request).info(f"商品コメント更新リクエスト: コメントID={id}")
    return await product_comment_crud.update(db, id, obj_in=comment)


@router.delete("/productcomment/{id}", status_code=status.HTTP_204_NO_CONTENT)
@async_handler
async def delete_product_comment(
    request: Request,
    id: str,
    db: AsyncSession = Depends(get_async_session)
):
    """商品コメントを削除"""
    get_request_logger(request).info(f"商品コメント削除リクエスト: コメントID={id}")
    await product_comment_crud.delete(db, id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
