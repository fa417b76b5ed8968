from fastapi import APIRouter, Depends, Query, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional

from app.api.errors import async_handler
from app.api.pagination import cursor_limit, page_window
from app.core.logging import get_request_logger
from app.crud import article_crud, comment_crud
from app.db.session import get_async_session
from app.schemas import (
    Article,
    ArticleCreate,
    ArticleDetail,
    ArticleUpdate,
    Comment,
    CommentCreate,
    CommentSummary
)

router = APIRouter()


@router.post("/article", response_model=Article, status_code=status.HTTP_201_CREATED)
@async_handler
async def create_article(
    request: Request,
    article: ArticleCreate,
    db: AsyncSession = Depends(get_async_session)
):
    """記事を登録"""
    logger = get_request_logger(request)
    logger.info(f"記事登録リクエスト: タイトル={article.title}")
    db_article = await article_crud.create(db, obj_in=article)
    logger.info(f"記事登録成功: 記事ID={db_article.id}")
    return db_article


@router.get("/article", response_model=List[ArticleDetail])
@async_handler
async def read_articles(
    request: Request,
    page: Optional[str] = None,
    page_size: Optional[str] = Query(None, alias="pageSize"),
    offset: Optional[str] = None,
    limit: Optional[str] = None,
    order: str = "recent",
    keyword: str = "",
    db: AsyncSession = Depends(get_async_session)
):
    """記事一覧を取得（ページ・並び順・キーワード検索）"""
    logger = get_request_logger(request)
    window = page_window(page=page, page_size=page_size, offset=offset, limit=limit)
    logger.info(f"記事一覧取得リクエスト: skip={window.skip}, limit={window.limit}, order={order}, keyword={keyword!r}")
    return await article_crud.get_multi(
        db, keyword=keyword, order=order, skip=window.skip, limit=window.limit
    )


@router.get("/article/{id}", response_model=ArticleDetail)
@async_handler
async def read_article(
    request: Request,
    id: str,
    db: AsyncSession = Depends(get_async_session)
):
    """記事詳細を取得"""
    get_request_logger(request).info(f"記事詳細取得リクエスト: 記事ID={id}")
    return await article_crud.get(db, id)


@router.patch("/article/{id}", response_model=Article)
@async_handler
async def update_article(
    request: Request,
    id: str,
    article: ArticleUpdate,
    db: AsyncSession = Depends(get_async_session)
):
    """記事を部分更新"""
    get_request_logger(request).info(f"記事更新リクエスト: 記事ID={id}")
    return await article_crud.update(db, id, obj_in=article)


@router.delete("/article/{id}", status_code=status.HTTP_204_NO_CONTENT)
@async_handler
async def delete_article(
    request: Request,
    id: str,
    db: AsyncSession = Depends(get_async_session)
):
    """記事を削除"""
    get_request_logger(request).info(f"記事削除リクエスト: 記事ID={id}")
    await article_crud.delete(db, id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/article/{id}/comment", response_model=Comment, status_code=status.HTTP_201_CREATED)
@async_handler
async def create_article_comment(
    request: Request,
    id: str,
    comment: CommentCreate,
    db: AsyncSession = Depends(get_async_session)
):
    """記事にコメントを登録"""
    get_request_logger(request).info(f"記事コメント登録リクエスト: 記事ID={id}")
    return await comment_crud.create(db, owner_id=id, obj_in=comment)


@router.get("/article/{id}/comment", response_model=List[CommentSummary])
@async_handler
async def read_article_comments(
    request: Request,
    id: str,
    cursor: Optional[str] = None,
    limit: Optional[str] = None,
    db: AsyncSession = Depends(get_async_session)
):
    """記事のコメント一覧を取得（カーソル方式）"""
    get_request_logger(request).info(f"記事コメント一覧取得リクエスト: 記事ID={id}, cursor={cursor}")
    return await comment_crud.get_multi(db, cursor=cursor, limit=cursor_limit(limit), owner_id=id)
