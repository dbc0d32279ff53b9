from typing import Any, Dict, List

from fastdb.errors import UsageError
from .predicate import strict_equal


def distinct_values(records: List[Dict[str, Any]], field: str) -> List[Any]:
    """
    Collect the distinct values of one field across records.

    Values keep first-seen order. Records without the field are skipped.

    Args:
        records: Record sequence to scan
        field: Field name

    Returns:
        List of distinct values
    """
    values: List[Any] = []
    seen_scalars = set()
    seen_containers = set()
    unhashable: List[Any] = []

    for record in records:
        if field not in record:
            continue
        value = record[field]

        # dict / list only ever equal themselves
        if isinstance(value, (dict, list)):
            if id(value) in seen_containers:
                continue
            seen_containers.add(id(value))
            values.append(value)
            continue

        try:
            key = (isinstance(value, bool), value)
            if key in seen_scalars:
                continue
            seen_scalars.add(key)
        except TypeError:
            if any(strict_equal(value, seen) for seen in unhashable):
                continue
            unhashable.append(value)

        values.append(value)
    return values


def _is_positive_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def validate_page(page: Any, page_size: Any) -> None:
    """
    Reject missing, zero, negative or non-integer page arguments.

    Raises:
        UsageError: If either argument is invalid
    """
    if not _is_positive_int(page) or not _is_positive_int(page_size):
        raise UsageError(
            f"Invalid parameters for pagination: page={page!r}, page_size={page_size!r}"
        )


def page_slice(records: List[Dict[str, Any]], page: int, page_size: int) -> List[Dict[str, Any]]:
    """
    Return one page of records (pages start at 1).

    A page past the end yields a short or empty list, not an error.
    """
    validate_page(page, page_size)
    start = (page - 1) * page_size
    return records[start:start + page_size]
