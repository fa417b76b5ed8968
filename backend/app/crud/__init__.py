# CRUD操作のインポート
from app.crud.article import article_crud
from app.crud.product import product_crud
from app.crud.comment import comment_crud, product_comment_crud

# すべてのCRUDをエクスポート
__all__ = [
    "article_crud",
    "product_crud",
    "comment_crud",
    "product_comment_crud"
]
