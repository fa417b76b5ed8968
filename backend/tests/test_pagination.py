"""
ページング範囲計算のテスト
"""
import pytest

from app.api.pagination import PageWindow, coerce_int, cursor_limit, page_window
from app.core.config import settings


class TestCoerceInt:

    @pytest.mark.parametrize("value, expected", [
        ("3", 3),
        ("2.0", 2),
        (None, 7),
        ("", 7),
        ("abc", 7),
        ("0", 7),
        ("-4", 7),
        ("nan", 7),
        ("inf", 7),
    ])
    def test_coerce(self, value, expected):
        assert coerce_int(value, 7) == expected

    def test_zero_allowed_with_minimum_zero(self):
        assert coerce_int("0", 5, minimum=0) == 0


class TestPageWindow:

    def test_defaults(self):
        assert page_window() == PageWindow(skip=0, limit=settings.DEFAULT_PAGE_SIZE)

    def test_second_page(self):
        assert page_window(page="2", page_size="5") == PageWindow(skip=5, limit=5)

    def test_non_numeric_inputs_use_defaults(self):
        assert page_window(page="x", page_size="y") == PageWindow(skip=0, limit=10)

    def test_offset_and_limit_take_precedence(self):
        assert page_window(page="3", page_size="5", offset="4", limit="2") == PageWindow(skip=4, limit=2)

    def test_negative_offset_becomes_zero(self):
        assert page_window(offset="-3") == PageWindow(skip=0, limit=10)

    def test_page_size_is_clamped(self):
        assert page_window(page_size="100000").limit == settings.MAX_PAGE_SIZE


class TestCursorLimit:

    def test_default(self):
        assert cursor_limit(None) == 5

    def test_explicit(self):
        assert cursor_limit("3") == 3

    def test_invalid(self):
        assert cursor_limit("lots") == 5

    def test_zero_uses_default(self):
        assert cursor_limit("0") == 5
