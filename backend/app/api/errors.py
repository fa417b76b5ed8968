"""
リクエストラッパーと例外ハンドラー

ハンドラー内では例外を捕捉せず、async_handler で分類してから
アプリケーションの例外ハンドラーで1回だけエラーレスポンスを返す。
"""
import functools

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from app.core.exceptions import (
    ErrorKind,
    MarketBoardException,
    ValidationError,
    classify_exception,
    format_validation_errors,
)
from app.core.logging import get_request_logger


def async_handler(handler):
    """ルートハンドラーをラップし、発生した例外をエラー種別に分類する"""

    @functools.wraps(handler)
    async def wrapper(*args, **kwargs):
        try:
            return await handler(*args, **kwargs)
        except MarketBoardException:
            raise
        except Exception as e:
            raise classify_exception(e) from e

    return wrapper


def error_response(exc: MarketBoardException) -> Response:
    """エラー種別からレスポンスを生成（404は空ボディ）"""
    if exc.kind is ErrorKind.not_found:
        return Response(status_code=exc.status_code)
    content = {"message": exc.message}
    if exc.error_code:
        content["error_code"] = exc.error_code
    return JSONResponse(status_code=exc.status_code, content=content)


def _log_error(request: Request, exc: MarketBoardException) -> None:
    logger = get_request_logger(request)
    if exc.kind is ErrorKind.unknown:
        logger.error(
            f"Unhandled error: {request.method} {request.url.path} {exc.message}",
            exc_info=exc.__cause__ or exc
        )
    else:
        logger.warning(f"{exc.kind.value} error: {request.method} {request.url.path} {exc.message}")


async def market_board_exception_handler(request: Request, exc: MarketBoardException):
    _log_error(request, exc)
    return error_response(exc)


async def request_validation_exception_handler(request: Request, exc: RequestValidationError):
    # ボディ・パラメータの形式エラーは422ではなく400として返す
    error = ValidationError(format_validation_errors(exc.errors()))
    _log_error(request, error)
    return error_response(error)


async def sqlalchemy_exception_handler(request: Request, exc: SQLAlchemyError):
    # セッションのコミット時など、ラッパーの外で発生したDBエラー
    error = classify_exception(exc)
    _log_error(request, error)
    return error_response(error)


def register_exception_handlers(app: FastAPI) -> None:
    """アプリケーションに例外ハンドラーを登録"""
    app.add_exception_handler(MarketBoardException, market_board_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.add_exception_handler(SQLAlchemyError, sqlalchemy_exception_handler)
