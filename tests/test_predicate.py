# ==============================================
# Tests for the Query Module
# ==============================================

import pytest

from fastdb.errors import UsageError
from fastdb.query import (
    distinct_values,
    is_empty_query,
    matches,
    page_slice,
    strict_equal,
    validate_page,
)


class TestMatches:
    """Partial-match predicate."""

    def test_all_query_fields_must_match(self):
        record = {"Name": "John", "ID": 1}
        assert matches(record, {"Name": "John"})
        assert matches(record, {"Name": "John", "ID": 1})
        assert not matches(record, {"Name": "John", "ID": 2})

    def test_fields_absent_from_query_unconstrained(self):
        assert matches({"Name": "John", "ID": 1, "Extra": [1]}, {"ID": 1})

    def test_missing_record_field_never_matches(self):
        assert not matches({"Name": "John"}, {"Age": None})

    def test_none_matches_explicit_none(self):
        assert matches({"Age": None}, {"Age": None})

    def test_empty_query_matches_everything(self):
        assert matches({"Name": "John"}, {})
        assert matches({}, None)

    def test_bool_is_not_int(self):
        assert not matches({"Active": 1}, {"Active": True})
        assert not matches({"ID": 0}, {"ID": False})

    def test_int_equals_float(self):
        assert matches({"ID": 1.0}, {"ID": 1})

    def test_nested_values_compare_by_identity(self):
        tags = ["a", "b"]
        record = {"Tags": tags}
        assert matches(record, {"Tags": tags})
        assert not matches(record, {"Tags": ["a", "b"]})
        assert not matches({"Meta": {"x": 1}}, {"Meta": {"x": 1}})


class TestHelpers:
    """strict_equal / is_empty_query."""

    def test_strict_equal(self):
        assert strict_equal("a", "a")
        assert not strict_equal("1", 1)
        assert not strict_equal(True, 1)
        assert strict_equal(False, False)

    def test_is_empty_query(self):
        assert is_empty_query(None)
        assert is_empty_query({})
        assert not is_empty_query({"Name": "John"})


class TestViews:
    """distinct_values / page_slice."""

    def test_distinct_keeps_first_seen_order(self, sample_records):
        assert distinct_values(sample_records, "Name") == ["John", "Jane", "Mark", "Anna"]

    def test_distinct_skips_missing_field(self, sample_records):
        assert distinct_values(sample_records, "Active") == [False]

    def test_distinct_does_not_merge_bool_and_int(self):
        records = [{"v": 1}, {"v": True}, {"v": 1}]
        assert distinct_values(records, "v") == [1, True]

    def test_distinct_scalars_and_containers(self):
        shared = ["a"]
        records = [
            {"v": 1}, {"v": 1.0}, {"v": "1"}, {"v": False}, {"v": 0},
            {"v": None}, {"v": shared}, {"v": shared}, {"v": ["a"]}, {"v": None},
        ]
        result = distinct_values(records, "v")
        assert result[:6] == [1, "1", False, 0, None, shared]
        assert len(result) == 7
        assert result[5] is shared
        assert result[6] is not shared

    def test_distinct_large_input(self):
        records = [{"v": i % 100} for i in range(20000)]
        assert distinct_values(records, "v") == list(range(100))

    def test_page_slice(self, sample_records):
        assert page_slice(sample_records, 1, 2) == sample_records[0:2]
        assert page_slice(sample_records, 2, 3) == sample_records[3:5]
        assert page_slice(sample_records, 4, 2) == []

    @pytest.mark.parametrize("page, page_size", [
        (0, 1), (1, 0), (-1, 5), (1, -5), (None, 1), (1, None), (True, 1), (1.5, 2),
    ])
    def test_invalid_page_arguments(self, page, page_size):
        with pytest.raises(UsageError):
            validate_page(page, page_size)
