# ==============================================
# QUERY (selection + derived views)
# ==============================================
#
# Modules:
# --------
# - predicate.py  → matches(), strict_equal(), is_empty_query()
# - views.py      → distinct_values(), page_slice(), validate_page()
#
# ==============================================

from .predicate import is_empty_query, matches, strict_equal
from .views import distinct_values, page_slice, validate_page

__all__ = [
    "matches",
    "strict_equal",
    "is_empty_query",
    "distinct_values",
    "page_slice",
    "validate_page"
]
