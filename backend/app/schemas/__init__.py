# Article schemas
from .article import (
    ArticleBase,
    ArticleCreate,
    ArticleUpdate,
    ArticleDetail,
    Article
)

# Product schemas
from .product import (
    ProductBase,
    ProductCreate,
    ProductUpdate,
    ProductSummary,
    Product,
    ProductList
)

# Comment schemas
from .comment import (
    CommentCreate,
    CommentSummary,
    Comment,
    ProductComment
)

__all__ = [
    # Article schemas
    "ArticleBase",
    "ArticleCreate",
    "ArticleUpdate",
    "ArticleDetail",
    "Article",

    # Product schemas
    "ProductBase",
    "ProductCreate",
    "ProductUpdate",
    "ProductSummary",
    "Product",
    "ProductList",

    # Comment schemas
    "CommentCreate",
    "CommentSummary",
    "Comment",
    "ProductComment"
]
