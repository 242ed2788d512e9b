"""Field-selector + free-text matching for list screens.

Records are opaque; the only way to look inside one is through an accessor
map of ``field key -> callable(record) -> value | None``.  Matching is a
case-insensitive substring test on the ``str()`` of the accessor value.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Final, Mapping, Optional, TypeVar

T = TypeVar("T")

FieldAccessor = Callable[[T], Optional[Any]]
Predicate = Callable[[T, "SearchCriteria"], bool]

ALL_FIELDS: Final[str] = "__all__"


@dataclass(frozen=True)
class SearchCriteria:
    """Which field to inspect and the text to look for."""

    field: str = ALL_FIELDS
    query: str = ""

    @property
    def normalized_query(self) -> str:
        return (self.query or "").strip().casefold()

    @property
    def is_empty(self) -> bool:
        return not self.normalized_query


def safe_contains(value: Optional[Any], query: Optional[str]) -> bool:
    """Return ``True`` when *value* contains *query*, ignoring case.

    ``None`` on either side never matches.
    """

    if value is None or query is None:
        return False
    return query.casefold() in str(value).casefold()


def matches(
    record: T,
    criteria: SearchCriteria,
    accessors: Mapping[str, FieldAccessor],
) -> bool:
    """Decide whether *record* satisfies *criteria*.

    An empty query matches everything.  A field key without an accessor is
    searched like :data:`ALL_FIELDS`.
    """

    query = criteria.normalized_query
    if not query:
        return True

    accessor = accessors.get(criteria.field) if criteria.field != ALL_FIELDS else None
    if accessor is not None:
        return safe_contains(accessor(record), query)
    return any(safe_contains(get(record), query) for get in accessors.values())


def make_predicate(accessors: Mapping[str, FieldAccessor]) -> Predicate:
    """Bind *accessors* into a ``(record, criteria) -> bool`` predicate."""

    frozen = dict(accessors)

    def _predicate(record: T, criteria: SearchCriteria) -> bool:
        return matches(record, criteria, frozen)

    return _predicate


__all__ = [
    "ALL_FIELDS",
    "FieldAccessor",
    "Predicate",
    "SearchCriteria",
    "make_predicate",
    "matches",
    "safe_contains",
]
