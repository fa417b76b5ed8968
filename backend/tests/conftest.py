"""
テスト用の共通フィクスチャとセットアップ
"""
import pytest
import pytest_asyncio
from datetime import datetime, timedelta, timezone
from typing import AsyncGenerator
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

from app.db.base import Base
from app.db.session import get_async_session, register_sqlite_pragmas
from app.main import app
from app.models import Article, Product, Comment, ProductComment
from app.schemas import ArticleCreate, ProductCreate, CommentCreate


# テスト用のインメモリSQLiteデータベース設定
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

# 作成日時の基準（フィクスチャの並び順を固定するため）
BASE_TIME = datetime(2024, 1, 1, 9, 0, 0, tzinfo=timezone.utc)


@pytest_asyncio.fixture
async def test_engine():
    """テスト用データベースエンジン（テストごとに新しいインメモリDB）"""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={
            "check_same_thread": False,
        },
    )
    register_sqlite_pragmas(engine)

    # テーブル作成
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    # クリーンアップ
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """テスト用データベースセッション"""
    async_session = async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False
    )

    async with async_session() as session:
        yield session


@pytest_asyncio.fixture
async def async_client(db_session: AsyncSession):
    """非同期テストクライアント"""
    # データベースセッションをオーバーライド
    async def override_get_async_session():
        yield db_session

    app.dependency_overrides[get_async_session] = override_get_async_session

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    # オーバーライドをクリア
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def sample_article(db_session: AsyncSession) -> Article:
    """サンプル記事"""
    article = Article(
        title="Sample Article",
        content="This is a sample article content.",
        created_at=BASE_TIME
    )
    db_session.add(article)
    await db_session.flush()
    await db_session.refresh(article)
    return article


@pytest_asyncio.fixture
async def sample_product(db_session: AsyncSession) -> Product:
    """サンプル商品"""
    product = Product(
        name="アイパッド ミニ",
        description="ほぼ新品のタブレットです",
        price=35000,
        tags=["電子機器", "タブレット"],
        favorite_count=3,
        created_at=BASE_TIME
    )
    db_session.add(product)
    await db_session.flush()
    await db_session.refresh(product)
    return product


@pytest_asyncio.fixture
async def sample_comment(db_session: AsyncSession, sample_article: Article) -> Comment:
    """サンプル記事コメント"""
    comment = Comment(
        content="最初のコメントです",
        article_id=sample_article.id,
        created_at=BASE_TIME
    )
    db_session.add(comment)
    await db_session.flush()
    await db_session.refresh(comment)
    return comment


@pytest_asyncio.fixture
async def sample_product_comment(db_session: AsyncSession, sample_product: Product) -> ProductComment:
    """サンプル商品コメント"""
    comment = ProductComment(
        content="まだ購入できますか？",
        product_id=sample_product.id,
        created_at=BASE_TIME
    )
    db_session.add(comment)
    await db_session.flush()
    await db_session.refresh(comment)
    return comment


# テストデータ作成用のヘルパー関数
class TestDataFactory:
    """テストデータ作成用ファクトリー"""

    @staticmethod
    def create_article_data(**kwargs) -> ArticleCreate:
        """記事作成データ"""
        defaults = {
            "title": "Test Article",
            "content": "Test content"
        }
        defaults.update(kwargs)
        return ArticleCreate(**defaults)

    @staticmethod
    def create_product_data(**kwargs) -> ProductCreate:
        """商品作成データ"""
        defaults = {
            "name": "Test Product",
            "description": "Test description",
            "price": 1000,
            "tags": ["test"],
        }
        defaults.update(kwargs)
        return ProductCreate(**defaults)

    @staticmethod
    def create_comment_data(**kwargs) -> CommentCreate:
        """コメント作成データ"""
        defaults = {"content": "Test comment"}
        defaults.update(kwargs)
        return CommentCreate(**defaults)


@pytest.fixture
def test_data_factory():
    """テストデータファクトリーのフィクスチャ"""
    return TestDataFactory


# 複数のテストデータを作成するヘルパー
@pytest_asyncio.fixture
async def multiple_articles(db_session: AsyncSession) -> list[Article]:
    """複数の記事を作成（インデックスが大きいほど新しい）

    偶数番号のタイトルは "Python"、奇数番号は "python" を含む。
    """
    articles = []
    for i in range(12):
        article = Article(
            title=f"Python tips {i}" if i % 2 == 0 else f"python notes {i}",
            content=f"Content for article {i}",
            created_at=BASE_TIME + timedelta(minutes=i)
        )
        db_session.add(article)
        articles.append(article)

    await db_session.flush()
    for article in articles:
        await db_session.refresh(article)

    return articles


@pytest_asyncio.fixture
async def multiple_products(db_session: AsyncSession) -> list[Product]:
    """複数の商品を作成（インデックスが大きいほど新しい、いいね数はすべて異なる）"""
    products = []
    for i in range(12):
        product = Product(
            name=f"Laptop {i}" if i % 3 == 0 else f"Chair {i}",
            description=f"Used item number {i}",
            price=1000 * (i + 1),
            tags=["used"],
            favorite_count=(i * 7) % 12,
            created_at=BASE_TIME + timedelta(hours=i)
        )
        db_session.add(product)
        products.append(product)

    await db_session.flush()
    for product in products:
        await db_session.refresh(product)

    return products


@pytest_asyncio.fixture
async def multiple_comments(db_session: AsyncSession, sample_article: Article) -> list[Comment]:
    """サンプル記事に複数のコメントを作成（インデックスが大きいほど新しい）"""
    comments = []
    for i in range(8):
        comment = Comment(
            content=f"Comment {i}",
            article_id=sample_article.id,
            created_at=BASE_TIME + timedelta(seconds=i + 1)
        )
        db_session.add(comment)
        comments.append(comment)

    await db_session.flush()
    for comment in comments:
        await db_session.refresh(comment)

    return comments


@pytest_asyncio.fixture
async def multiple_product_comments(db_session: AsyncSession, sample_product: Product) -> list[ProductComment]:
    """サンプル商品に複数のコメントを作成（インデックスが大きいほど新しい）"""
    comments = []
    for i in range(8):
        comment = ProductComment(
            content=f"Product comment {i}",
            product_id=sample_product.id,
            created_at=BASE_TIME + timedelta(seconds=i + 1)
        )
        db_session.add(comment)
        comments.append(comment)

    await db_session.flush()
    for comment in comments:
        await db_session.refresh(comment)

    return comments
