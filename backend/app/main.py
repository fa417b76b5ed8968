from contextlib import asynccontextmanager
import time
import uuid

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from app.api.errors import register_exception_handlers
from app.api.v1.api import api_router
from app.core.config import settings
from app.core.logging import app_logger, get_request_logger
from app.db.session import close_db, init_db


@asynccontextmanager
async def lifespan(app: FastAPI):
    """アプリケーションのライフサイクルを管理"""
    # 起動の処理
    try:
        # テーブル作成
        await init_db()
        app_logger.info("Database initialized successfully")
    except Exception as e:
        app_logger.error(f"Initialization failed: {str(e)}")
        raise

    yield  # アプリケーションの実行中

    # シャットダウンの処理
    app_logger.info("Shutting down application...")

    try:
        await close_db()
    except Exception as e:
        app_logger.error(f"Error closing database connections: {str(e)}")


# FastAPIアプリケーションの作成
app = FastAPI(
    title=settings.APP_NAME,
    description="自由掲示板・中古マーケットAPI",
    version=settings.APP_VERSION,
    lifespan=lifespan
)

# CORSミドルウェアの設定
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
    allow_methods=settings.CORS_ALLOW_METHODS,
    allow_headers=settings.CORS_ALLOW_HEADERS,
)


# リクエストIDとロギングミドルウェア
@app.middleware("http")
async def request_middleware(request: Request, call_next):
    # リクエストIDを生成
    request_id = str(uuid.uuid4())
    request.state.request_id = request_id

    # リクエストロガーの取得
    logger = get_request_logger(request)

    # リクエスト情報のロギング
    logger.info(
        f"Request started: {request.method} {request.url.path} "
        f"(Client: {request.client.host if request.client else 'unknown'})"
    )

    # 処理時間の計測
    start_time = time.time()

    try:
        # リクエスト処理
        response = await call_next(request)
        process_time = time.time() - start_time

        # レスポンスヘッダーの設定
        response.headers["X-Request-ID"] = request_id
        response.headers["X-Process-Time"] = str(process_time)

        # レスポンス情報のロギング
        logger.info(
            f"Request completed: {request.method} {request.url.path} "
            f"Status: {response.status_code} "
            f"Process time: {process_time:.3f}s"
        )

        return response
    except Exception as e:
        # 例外発生時のロギング
        process_time = time.time() - start_time
        logger.error(
            f"Request failed: {request.method} {request.url.path} "
            f"Error: {str(e)} "
            f"Process time: {process_time:.3f}s",
            exc_info=True
        )
        raise


# エラー種別ごとの例外ハンドラー
register_exception_handlers(app)

# APIルーターの登録
app.include_router(api_router, prefix=settings.API_PREFIX)

# ルートエンドポイント
@app.get("/")
async def root():
    return {
        "message": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "docs_url": "/docs"
    }

# ヘルスチェックエンドポイント
@app.get("/health")
async def health_check():
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn

    # アプリケーション起動時のログ
    app_logger.info(
        f"Starting {settings.APP_NAME} in {settings.ENVIRONMENT} mode "
        f"(Log level: {settings.LOG_LEVEL})"
    )

    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
