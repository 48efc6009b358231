"""
Tests for query_builder.py - WHERE/AND filter construction.
"""

import pytest

from jobly.errors import BadRequestError
from jobly.query_builder import (
    CONTAINS,
    GTE,
    LTE,
    POSITIVE,
    FilterField,
    build_filtered_query,
)

BASE = "SELECT id FROM things"

FIELDS = (
    FilterField("name", "name", CONTAINS),
    FilterField("min", "size", GTE),
    FilterField("max", "size", LTE),
    FilterField("flag", "share", POSITIVE),
)


class TestBuildFilteredQuery:
    """Test clause joining and parameter numbering."""

    def test_no_filters_no_where(self):
        sql, values = build_filtered_query(BASE, FIELDS, {})

        assert sql == BASE
        assert "WHERE" not in sql
        assert values == []

    def test_none_criteria(self):
        sql, values = build_filtered_query(BASE, FIELDS, None)

        assert sql == BASE
        assert values == []

    def test_absent_values_ignored(self):
        sql, values = build_filtered_query(BASE, FIELDS, {"name": None, "min": None})

        assert sql == BASE
        assert values == []

    def test_single_filter(self):
        sql, values = build_filtered_query(BASE, FIELDS, {"min": 5})

        assert sql == f"{BASE} WHERE size >= $1"
        assert values == [5]

    def test_two_filters_one_where_one_and(self):
        """Second filter is attached with AND regardless of which it is."""
        sql, values = build_filtered_query(BASE, FIELDS, {"min": 2, "max": 9})

        assert sql.count("WHERE") == 1
        assert sql.count(" AND ") == 1
        assert len(values) == 2
        assert sql == f"{BASE} WHERE size >= $1 AND size <= $2"
        assert values == [2, 9]

    def test_later_filter_alone_uses_where(self):
        sql, values = build_filtered_query(BASE, FIELDS, {"max": 9})

        assert sql == f"{BASE} WHERE size <= $1"
        assert values == [9]

    def test_contains_wraps_and_lowercases(self):
        sql, values = build_filtered_query(BASE, FIELDS, {"name": "NeT"})

        assert sql == f"{BASE} WHERE lower(name) LIKE $1 ESCAPE '\\'"
        assert values == ["%net%"]

    def test_contains_escapes_wildcards(self):
        _, values = build_filtered_query(BASE, FIELDS, {"name": "50%_off\\"})

        assert values == ["%50\\%\\_off\\\\%"]

    def test_all_filters_positions_contiguous(self):
        """The flag takes no parameter, so it never consumes a position."""
        sql, values = build_filtered_query(
            BASE, FIELDS, {"flag": True, "max": 3, "name": "x", "min": 1}
        )

        assert sql == (
            f"{BASE} WHERE lower(name) LIKE $1 ESCAPE '\\' AND size >= $2"
            " AND size <= $3 AND share > 0"
        )
        assert values == ["%x%", 1, 3]

    def test_flag_false_adds_nothing(self):
        sql, values = build_filtered_query(BASE, FIELDS, {"flag": False})

        assert sql == BASE
        assert values == []

    def test_flag_first_then_param_starts_at_one(self):
        fields = (FilterField("flag", "share", POSITIVE), FilterField("min", "size", GTE))

        sql, values = build_filtered_query(BASE, fields, {"flag": True, "min": 4})

        assert sql == f"{BASE} WHERE share > 0 AND size >= $1"
        assert values == [4]

    def test_zero_is_a_real_bound(self):
        sql, values = build_filtered_query(BASE, FIELDS, {"min": 0})

        assert sql == f"{BASE} WHERE size >= $1"
        assert values == [0]

    def test_min_above_max_is_not_validated(self):
        sql, values = build_filtered_query(BASE, FIELDS, {"min": 10, "max": 1})

        assert values == [10, 1]

    def test_order_by_appended_last(self):
        sql, _ = build_filtered_query(BASE, FIELDS, {"min": 1}, order_by="name")

        assert sql == f"{BASE} WHERE size >= $1 ORDER BY name"

    def test_custom_start_position(self):
        sql, values = build_filtered_query(BASE, FIELDS, {"min": 1, "max": 2}, start=3)

        assert sql == f"{BASE} WHERE size >= $3 AND size <= $4"
        assert values == [1, 2]

    def test_unknown_filter_fails(self):
        with pytest.raises(BadRequestError) as exc_info:
            build_filtered_query(BASE, FIELDS, {"color": "red"})

        assert "color" in exc_info.value.message


class TestFilterField:
    """Test field definitions."""

    def test_unknown_operator_rejected(self):
        with pytest.raises(ValueError):
            FilterField("x", "x", "between")
