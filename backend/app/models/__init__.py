# モデルのインポート
from app.models.article import Article
from app.models.product import Product
from app.models.comment import Comment, ProductComment

# すべてのモデルをエクスポート
__all__ = [
    "Article",
    "Product",
    "Comment",
    "ProductComment"
]
