# ==============================================
# Predicate (partial-match selection)
# ==============================================
#
# PURPOSE:
#   The single matching rule used by get / delete / data_exists /
#   count_entries. Keeping it in one place guarantees:
#
#     data_exists(q) == (count_entries(q) > 0)
#     count_entries(q) == len([r for r in records if matches(r, q)])
#
# RULES:
# ------
#   - Every field in the query must be present in the record and
#     strictly equal to the query value.
#   - Fields absent from the query are unconstrained.
#   - Strict equality:
#       * True / False never equal 1 / 0
#       * dict and list values compare by identity only
#         (no deep structural comparison)
#   - An empty query matches every record.
#
# ==============================================

from typing import Any, Mapping, Optional

_MISSING = object()

_CONTAINER_TYPES = (dict, list)


def strict_equal(left: Any, right: Any) -> bool:
    """
    Shallow, type-strict equality between two field values.

    Args:
        left: First value
        right: Second value

    Returns:
        True if the values are considered the same field value
    """
    if left is right:
        return True
    if isinstance(left, _CONTAINER_TYPES) or isinstance(right, _CONTAINER_TYPES):
        return False
    if isinstance(left, bool) != isinstance(right, bool):
        return False
    return left == right


def is_empty_query(query: Optional[Mapping[str, Any]]) -> bool:
    """True for None or a mapping without keys."""
    return not query


def matches(record: Mapping[str, Any], query: Optional[Mapping[str, Any]]) -> bool:
    """
    Check whether a record satisfies a partial query.

    Args:
        record: Stored record
        query: Field -> required value

    Returns:
        True if every query field matches
    """
    if not query:
        return True

    for key, expected in query.items():
        actual = record.get(key, _MISSING)
        if actual is _MISSING or not strict_equal(actual, expected):
            return False
    return True
