from typing import AsyncGenerator, Optional

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from app.core.config import settings
from app.core.logging import get_logger
from app.db.base import Base
import app.models  # noqa: F401  メタデータへのモデル登録

logger = get_logger(__name__)


def register_sqlite_pragmas(engine: AsyncEngine) -> None:
    """SQLiteの接続ごとに外部キー制約と大文字小文字を区別するLIKEを有効化"""
    if engine.dialect.name != "sqlite":
        return

    @event.listens_for(engine.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.execute("PRAGMA case_sensitive_like=ON")
        cursor.close()


async_engine = create_async_engine(
    settings.DATABASE_URL,
    echo=settings.SQLALCHEMY_ECHO,
    future=True,
)
register_sqlite_pragmas(async_engine)

AsyncSessionLocal = async_sessionmaker(
    async_engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def init_db(engine: Optional[AsyncEngine] = None) -> None:
    """未作成のテーブル（articles, products, comments, product_comments）を作成"""
    engine = engine or async_engine
    logger.info(f"Creating tables on {engine.url.render_as_string(hide_password=True)}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def close_db(engine: Optional[AsyncEngine] = None) -> None:
    """コネクションプールを破棄"""
    await (engine or async_engine).dispose()
    logger.info("Database connections closed")


async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    """リクエスト単位のDBセッション（成功時コミット、失敗時ロールバック）"""
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
