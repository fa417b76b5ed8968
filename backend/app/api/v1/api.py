from fastapi import APIRouter

from app.api.v1.endpoints import articles, comments, products

api_router = APIRouter()

# 各エンドポイントのルーターを登録
api_router.include_router(articles.router, tags=["記事"])
api_router.include_router(comments.router, tags=["コメント"])
api_router.include_router(products.router, tags=["中古マーケット"])
