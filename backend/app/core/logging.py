import logging
import os
import sys
from logging.handlers import RotatingFileHandler

from fastapi import Request

from app.core.config import settings


LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s - %(message)s"

# SQLAlchemyなど外部ライブラリのロガー
_NOISY_LOGGERS = ["sqlalchemy.engine", "sqlalchemy.pool", "aiosqlite"]


def _parse_level(raw: str) -> int:
    """ログレベル文字列を数値に変換（不明な値はINFO）"""
    numeric = getattr(logging, raw.upper(), None)
    if isinstance(numeric, int):
        return numeric
    return logging.INFO


def setup_logging() -> logging.Logger:
    """アプリケーション全体のロギング設定"""
    level = _parse_level(settings.LOG_LEVEL)
    logger = logging.getLogger("app")
    logger.setLevel(level)

    if not logger.handlers:
        formatter = logging.Formatter(LOG_FORMAT)

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

        if settings.LOG_TO_FILE:
            log_dir = os.path.dirname(settings.LOG_FILE_PATH)
            if log_dir and not os.path.exists(log_dir):
                os.makedirs(log_dir)
            file_handler = RotatingFileHandler(
                settings.LOG_FILE_PATH,
                maxBytes=10 * 1024 * 1024,
                backupCount=5,
                encoding="utf-8"
            )
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

    # SQLエコーが無効な場合はSQLAlchemyのログを抑制
    if not settings.SQLALCHEMY_ECHO:
        for name in _NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    return logger


app_logger = setup_logging()


def get_logger(name: str) -> logging.Logger:
    """モジュール用のロガーを取得（app配下に集約）"""
    if name.startswith("app"):
        return logging.getLogger(name)
    return logging.getLogger(f"app.{name}")


class RequestLoggerAdapter(logging.LoggerAdapter):
    """リクエストIDをメッセージに付与するアダプター"""

    def process(self, msg, kwargs):
        return f"[{self.extra['request_id']}] {msg}", kwargs


def get_request_logger(request: Request) -> logging.LoggerAdapter:
    """リクエスト単位のロガーを取得"""
    request_id = getattr(request.state, "request_id", "-")
    return RequestLoggerAdapter(logging.getLogger("app.request"), {"request_id": request_id})
