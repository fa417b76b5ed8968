import enum
from typing import Any, Dict, Optional

import pydantic
from fastapi import status
from sqlalchemy.exc import (
    ArgumentError,
    InterfaceError,
    InternalError,
    NoResultFound,
    OperationalError,
    StatementError,
)


class ErrorKind(enum.Enum):
    """エラー種別（HTTPステータスへの対応は STATUS_BY_KIND で定義）"""
    validation = "validation"
    store = "store"
    not_found = "not_found"
    unknown = "unknown"


STATUS_BY_KIND: Dict[ErrorKind, int] = {
    ErrorKind.validation: status.HTTP_400_BAD_REQUEST,
    ErrorKind.store: status.HTTP_400_BAD_REQUEST,
    ErrorKind.not_found: status.HTTP_404_NOT_FOUND,
    ErrorKind.unknown: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


class MarketBoardException(Exception):
    """掲示板・マーケットアプリケーションの基底例外クラス"""
    kind: ErrorKind = ErrorKind.unknown

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        error_code: Optional[str] = None
    ):
        self.message = message
        self.details = details or {}
        self.error_code = error_code
        super().__init__(self.message)

    @property
    def status_code(self) -> int:
        return STATUS_BY_KIND[self.kind]


class ValidationError(MarketBoardException):
    """リクエスト形式のバリデーションエラー"""
    kind = ErrorKind.validation

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message=message, details=details, error_code="VALIDATION_ERROR")


class StoreError(MarketBoardException):
    """永続化層に不正な引数が渡されたエラー"""
    kind = ErrorKind.store

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None, error_code: str = "STORE_ERROR"):
        super().__init__(message=message, details=details, error_code=error_code)


class NotFoundError(MarketBoardException):
    """リソースが見つからないエラー"""
    kind = ErrorKind.not_found


class UnknownError(MarketBoardException):
    """分類できないエラー"""
    kind = ErrorKind.unknown

    def __init__(self, message: str):
        super().__init__(message=message, error_code="INTERNAL_ERROR")


# 具体的な例外クラス
class ArticleNotFoundError(NotFoundError):
    """記事が見つからないエラー"""

    def __init__(self, article_id: Optional[str] = None):
        if article_id:
            message = f"記事ID '{article_id}' が見つかりません"
            details = {"article_id": article_id}
        else:
            message = "記事が見つかりません"
            details = {}
        super().__init__(message=message, details=details, error_code="ARTICLE_NOT_FOUND")


class ProductNotFoundError(NotFoundError):
    """商品が見つからないエラー"""

    def __init__(self, product_id: Optional[int] = None):
        if product_id is not None:
            message = f"商品ID '{product_id}' が見つかりません"
            details = {"product_id": product_id}
        else:
            message = "商品が見つかりません"
            details = {}
        super().__init__(message=message, details=details, error_code="PRODUCT_NOT_FOUND")


class CommentNotFoundError(NotFoundError):
    """記事コメントが見つからないエラー"""

    def __init__(self, comment_id: Optional[str] = None):
        if comment_id:
            message = f"コメントID '{comment_id}' が見つかりません"
            details = {"comment_id": comment_id}
        else:
            message = "コメントが見つかりません"
            details = {}
        super().__init__(message=message, details=details, error_code="COMMENT_NOT_FOUND")


class ProductCommentNotFoundError(NotFoundError):
    """商品コメントが見つからないエラー"""

    def __init__(self, comment_id: Optional[str] = None):
        if comment_id:
            message = f"商品コメントID '{comment_id}' が見つかりません"
            details = {"comment_id": comment_id}
        else:
            message = "商品コメントが見つかりません"
            details = {}
        super().__init__(message=message, details=details, error_code="PRODUCT_COMMENT_NOT_FOUND")


class InvalidParameterError(StoreError):
    """無効なパラメータエラー"""

    def __init__(self, parameter: str, value: Any, reason: str):
        message = f"パラメータ '{parameter}' の値 '{value}' が無効です: {reason}"
        details = {"parameter": parameter, "value": value, "reason": reason}
        super().__init__(message=message, details=details, error_code="INVALID_PARAMETER")


def format_validation_errors(errors: list) -> str:
    """pydanticのエラー一覧を1行のメッセージにまとめる"""
    parts = []
    for error in errors:
        loc = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        msg = error.get("msg", "invalid value")
        parts.append(f"{loc}: {msg}" if loc else msg)
    return "; ".join(parts) or "リクエストの形式が正しくありません"


def classify_exception(exc: Exception) -> MarketBoardException:
    """任意の例外をアプリケーションのエラー種別に分類する"""
    if isinstance(exc, MarketBoardException):
        return exc
    if isinstance(exc, pydantic.ValidationError):
        return ValidationError(format_validation_errors(exc.errors()))
    if isinstance(exc, NoResultFound):
        return NotFoundError(message=str(exc), error_code="NOT_FOUND")
    # 接続断などのDBAPIエラーは引数の問題ではない
    if isinstance(exc, (OperationalError, InterfaceError, InternalError)):
        return UnknownError(str(exc))
    if isinstance(exc, (StatementError, ArgumentError)):
        return StoreError(str(exc))
    # SQLiteのINTEGER範囲を超える値のバインド
    if isinstance(exc, OverflowError):
        return StoreError(str(exc))
    return UnknownError(str(exc) or exc.__class__.__name__)
