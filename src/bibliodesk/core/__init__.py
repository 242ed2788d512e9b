"""Toolkit-independent list filtering and pagination."""

from .paging import DEFAULT_PAGE_SIZE, PagedListModel, PageWindow
from .search import ALL_FIELDS, SearchCriteria, make_predicate, matches, safe_contains

__all__ = [
    "ALL_FIELDS",
    "DEFAULT_PAGE_SIZE",
    "PageWindow",
    "PagedListModel",
    "SearchCriteria",
    "make_predicate",
    "matches",
    "safe_contains",
]
