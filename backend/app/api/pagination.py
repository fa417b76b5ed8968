from dataclasses import dataclass
from typing import Optional

from app.core.config import settings


@dataclass(frozen=True)
class PageWindow:
    skip: int
    limit: int


def coerce_int(value: Optional[str], default: int, minimum: int = 1) -> int:
    """数値に変換できない値・minimum未満の値は既定値にする"""
    try:
        number = int(value)
    except (TypeError, ValueError):
        try:
            # "2.0" のような小数表記は切り捨て
            number = int(float(value))
        except (TypeError, ValueError, OverflowError):
            return default
    if number < minimum:
        return default
    return number


def page_window(
    page: Optional[str] = None,
    page_size: Optional[str] = None,
    offset: Optional[str] = None,
    limit: Optional[str] = None
) -> PageWindow:
    """ページ番号（1始まり）とページサイズ、または offset/limit から取得範囲を計算"""
    if offset is not None or limit is not None:
        size = min(coerce_int(limit, settings.DEFAULT_PAGE_SIZE), settings.MAX_PAGE_SIZE)
        return PageWindow(skip=coerce_int(offset, 0, minimum=0), limit=size)

    page_num = coerce_int(page, 1)
    size = min(coerce_int(page_size, settings.DEFAULT_PAGE_SIZE), settings.MAX_PAGE_SIZE)
    return PageWindow(skip=(page_num - 1) * size, limit=size)


def cursor_limit(limit: Optional[str]) -> int:
    """カーソル方式一覧の取得件数"""
    return min(coerce_int(limit, settings.DEFAULT_COMMENT_LIMIT), settings.MAX_PAGE_SIZE)
