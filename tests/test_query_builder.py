"""Testy budowania i parsowania query stringa filtrow katalogu."""

import pytest

from app.domain.schemas import FilterState
from app.services.query_builder import (
    build_query,
    format_price,
    page_query,
    page_window,
    parse_query,
)


class TestBuildQuery:
    def test_defaults_only_emit_page(self):
        assert build_query(FilterState(category="All", search="", page=1)) == "page=1"

    def test_fixed_parameter_order(self):
        filters = FilterState(
            page=3, max_price=50, min_price=10, category="Books", search="python"
        )
        assert build_query(filters) == "search=python&category=Books&minPrice=10&maxPrice=50&page=3"

    def test_values_are_encoded(self):
        query = build_query(FilterState(search="tea & cake", category="Home"))
        assert query == "search=tea+%26+cake&category=Home&page=1"

    def test_only_max_price(self):
        assert build_query(FilterState(max_price=9.99)) == "maxPrice=9.99&page=1"

    def test_zero_price_is_emitted(self):
        assert build_query(FilterState(min_price=0)) == "minPrice=0&page=1"


class TestParseQuery:
    def test_empty(self):
        assert parse_query("") == FilterState(category="All", page=1)

    def test_leading_question_mark(self):
        assert parse_query("?page=2").page == 2

    def test_all_fields(self):
        filters = parse_query("search=lamp&category=Home&minPrice=5&maxPrice=20.5&page=4")
        assert filters == FilterState(
            search="lamp", category="Home", min_price=5.0, max_price=20.5, page=4
        )

    @pytest.mark.parametrize("raw", ["0", "-3", "abc", "1.5", ""])
    def test_bad_page_defaults_to_one(self, raw):
        assert parse_query(f"page={raw}").page == 1

    @pytest.mark.parametrize("raw", ["", "abc", "nan", "inf", "-inf"])
    def test_bad_price_is_absent(self, raw):
        filters = parse_query(f"minPrice={raw}&maxPrice={raw}")
        assert filters.min_price is None
        assert filters.max_price is None

    def test_empty_values_fall_back(self):
        filters = parse_query("search=&category=")
        assert filters.search is None
        assert filters.category == "All"

    def test_first_value_wins(self):
        assert parse_query("category=Books&category=Home").category == "Books"


class TestRoundTrip:
    @pytest.mark.parametrize(
        "query",
        [
            "",
            "page=1",
            "category=All&page=2",
            "search=a+b&category=Books",
            "minPrice=10.0&maxPrice=1e3",
            "maxPrice=0.1&page=7&search=%C5%BC%C3%B3%C5%82w",
            "page=-5&minPrice=abc&category=",
            "unknown=1&page=3",
        ],
    )
    def test_parse_build_parse_is_stable(self, query):
        once = parse_query(query)
        assert parse_query(build_query(once)) == once

    def test_all_is_never_serialized(self):
        assert "category" not in build_query(parse_query("category=All"))


class TestFormatPrice:
    def test_whole_number(self):
        assert format_price(10.0) == "10"

    def test_fraction(self):
        assert format_price(9.99) == "9.99"


class TestPagination:
    def test_page_query_keeps_filters(self):
        filters = FilterState(category="Books", search="py", page=1)
        assert page_query(filters, 2) == "search=py&category=Books&page=2"

    @pytest.mark.parametrize(
        "current,total,expected",
        [
            (1, 0, []),
            (1, 1, []),
            (2, 3, [1, 2, 3]),
            (1, 10, [1, 2, 3, 4, 5]),
            (3, 10, [1, 2, 3, 4, 5]),
            (4, 10, [2, 3, 4, 5, 6]),
            (8, 10, [6, 7, 8, 9, 10]),
            (10, 10, [6, 7, 8, 9, 10]),
        ],
    )
    def test_page_window(self, current, total, expected):
        assert page_window(current, total) == expected
