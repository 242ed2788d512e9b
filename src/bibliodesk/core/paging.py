"""In-memory master/filtered/paged list state shared by every list screen."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Generic, Iterable, Mapping, Optional, Tuple, TypeVar

from ..utils.signal import Signal
from .search import FieldAccessor, Predicate, SearchCriteria, make_predicate

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_PAGE_SIZE: int = 10


@dataclass(frozen=True)
class PageWindow(Generic[T]):
    """Snapshot of the visible page."""

    page_size: int
    page_index: int
    total_pages: int
    total_items: int
    items: Tuple[T, ...]

    @property
    def has_next(self) -> bool:
        return self.total_items > 0 and self.page_index < self.total_pages - 1

    @property
    def has_previous(self) -> bool:
        return self.page_index > 0


class PagedListModel(Generic[T]):
    """Master list plus the filtered list and page window derived from it.

    Every mutator recomputes the derived state synchronously and then emits
    :attr:`changed`.  Nothing here performs I/O or raises for valid inputs;
    an empty master list still reports one (empty) page.

    Without accessors or a predicate there is no field to search, so only an
    empty query matches.
    """

    def __init__(
        self,
        page_size: int = DEFAULT_PAGE_SIZE,
        *,
        accessors: Optional[Mapping[str, FieldAccessor]] = None,
        predicate: Optional[Predicate] = None,
    ) -> None:
        if page_size < 1:
            raise ValueError(f"page_size must be >= 1, got {page_size}")
        if predicate is not None and accessors is not None:
            raise ValueError("pass either accessors or predicate, not both")

        self._page_size = int(page_size)
        if predicate is not None:
            self._predicate: Predicate = predicate
        elif accessors is not None:
            self._predicate = make_predicate(accessors)
        else:
            self._predicate = make_predicate({})

        self._master: list[T] = []
        self._filtered: Tuple[T, ...] = ()
        self._criteria = SearchCriteria()
        self._page_index = 0

        self.changed = Signal()

    # -- properties --------------------------------------------------------

    @property
    def page_size(self) -> int:
        return self._page_size

    @property
    def master(self) -> Tuple[T, ...]:
        return tuple(self._master)

    @property
    def filtered(self) -> Tuple[T, ...]:
        return self._filtered

    @property
    def criteria(self) -> SearchCriteria:
        return self._criteria

    @property
    def page_index(self) -> int:
        return self._page_index

    @property
    def total_pages(self) -> int:
        count = len(self._filtered)
        return max(1, (count + self._page_size - 1) // self._page_size)

    # -- master list -------------------------------------------------------

    def set_master(self, records: Iterable[T]) -> None:
        """Replace the master list and go back to the first page."""

        self._master = list(records) if records is not None else []
        self._refilter()

    def remove_one(self, predicate: Callable[[T], bool]) -> bool:
        """Remove the first master record satisfying *predicate*.

        Returns ``True`` when a record was removed.
        """

        for index, record in enumerate(self._master):
            if predicate(record):
                del self._master[index]
                self._refilter()
                return True
        return False

    def insert_one(self, record: T, index: Optional[int] = None) -> None:
        """Insert *record* into the master list (appended by default)."""

        if index is None:
            self._master.append(record)
        else:
            self._master.insert(index, record)
        self._refilter()

    # -- criteria ----------------------------------------------------------

    def set_criteria(self, criteria: SearchCriteria) -> None:
        self._criteria = criteria
        self._refilter()

    # -- navigation --------------------------------------------------------

    def can_go_next(self) -> bool:
        return bool(self._filtered) and self._page_index < self.total_pages - 1

    def can_go_previous(self) -> bool:
        return self._page_index > 0

    def next_page(self) -> None:
        if self._page_index < self.total_pages - 1:
            self._page_index += 1
            self.changed.emit()

    def previous_page(self) -> None:
        if self._page_index > 0:
            self._page_index -= 1
            self.changed.emit()

    def go_to_page(self, index: int) -> None:
        """Jump to *index*, clamped into ``[0, total_pages)``."""

        clamped = min(max(0, int(index)), self.total_pages - 1)
        if clamped != self._page_index:
            self._page_index = clamped
            self.changed.emit()

    # -- page contents -----------------------------------------------------

    def current_page(self) -> Tuple[T, ...]:
        start = self._page_index * self._page_size
        if start >= len(self._filtered):
            return ()
        return self._filtered[start:start + self._page_size]

    def page_window(self) -> PageWindow[T]:
        return PageWindow(
            page_size=self._page_size,
            page_index=self._page_index,
            total_pages=self.total_pages,
            total_items=len(self._filtered),
            items=self.current_page(),
        )

    # -- internal ----------------------------------------------------------

    def _refilter(self) -> None:
        criteria = self._criteria
        predicate = self._predicate
        self._filtered = tuple(r for r in self._master if predicate(r, criteria))
        self._page_index = 0
        LOGGER.debug(
            "Filtered %d of %d records (field=%s)",
            len(self._filtered),
            len(self._master),
            criteria.field,
        )
        self.changed.emit()


__all__ = ["DEFAULT_PAGE_SIZE", "PageWindow", "PagedListModel"]
