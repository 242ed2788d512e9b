"""Reusable controller for list screens: async load, filter, paginate."""

from __future__ import annotations

import logging
from typing import Any, Callable, Generic, Mapping, Optional, Sequence, TypeVar

from ..core.paging import DEFAULT_PAGE_SIZE, PagedListModel
from ..core.search import FieldAccessor, SearchCriteria
from ..errors.handler import ErrorHandler, ErrorSeverity
from ..events.app_events import RecordsLoadedEvent, RecordsLoadFailedEvent
from ..events.bus import EventBus
from ..utils.signal import ObservableProperty, Signal
from .async_loader import AsyncLoader, LoadHandle, RequestSequencer
from .viewmodels.base import BaseViewModel

T = TypeVar("T")


class ListScreenController(BaseViewModel, Generic[T]):
    """Own one :class:`PagedListModel` and keep it fed from a collaborator.

    Subclasses implement :meth:`fetch_records` (or pass ``fetch``).  Only the
    latest :meth:`reload` is allowed to replace the master list; results of
    superseded reloads, and anything arriving after :meth:`dispose`, are
    dropped.  A failed reload keeps the records already shown.
    """

    source_name = "records"

    def __init__(
        self,
        loader: AsyncLoader,
        *,
        fetch: Optional[Callable[[], Sequence[T]]] = None,
        accessors: Optional[Mapping[str, FieldAccessor]] = None,
        page_size: int = DEFAULT_PAGE_SIZE,
        error_handler: Optional[ErrorHandler] = None,
        event_bus: Optional[EventBus] = None,
    ) -> None:
        super().__init__()
        self._loader = loader
        self._fetch = fetch
        self._error_handler = error_handler
        self._event_bus = event_bus
        self._sequence = RequestSequencer()
        self._logger = logging.getLogger(__name__)

        self.model: PagedListModel[T] = PagedListModel(page_size, accessors=accessors)
        self.loading = ObservableProperty(False)
        self.last_error: Optional[BaseException] = None

        self.records_loaded = Signal()
        self.record_removed = Signal()
        self.record_added = Signal()
        self.error_occurred = Signal()

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------
    def fetch_records(self) -> Sequence[T]:
        """Return the full record list; runs on a worker thread."""
        if self._fetch is None:
            raise NotImplementedError(f"{type(self).__name__} must implement fetch_records()")
        return self._fetch()

    def reload(self) -> LoadHandle:
        token = self._sequence.issue()
        self.loading.value = True
        return self._loader.run(
            self.fetch_records,
            lambda records: self._on_loaded(token, records),
            lambda error: self._on_load_failed(token, error),
            label=f"load-{self.source_name}",
        )

    def _on_loaded(self, token: int, records: Sequence[T]) -> None:
        if self.disposed or not self._sequence.is_current(token):
            self._logger.debug("Discarding stale %s load #%d", self.source_name, token)
            return
        self.loading.value = False
        self.last_error = None
        self.model.set_master(records)
        count = len(self.model.master)
        self.records_loaded.emit(count)
        if self._event_bus is not None:
            self._event_bus.publish(RecordsLoadedEvent(source=self.source_name, count=count))

    def _on_load_failed(self, token: int, error: BaseException) -> None:
        if self.disposed or not self._sequence.is_current(token):
            self._logger.debug("Discarding stale %s failure #%d: %s", self.source_name, token, error)
            return
        self.loading.value = False
        self._report(error, "load")
        if self._event_bus is not None:
            self._event_bus.publish(RecordsLoadFailedEvent(source=self.source_name, message=str(error)))

    # ------------------------------------------------------------------
    # Search and paging
    # ------------------------------------------------------------------
    def search(self, field: str, query: str) -> None:
        self.model.set_criteria(SearchCriteria(field=field, query=query))

    def next_page(self) -> None:
        self.model.next_page()

    def previous_page(self) -> None:
        self.model.previous_page()

    # ------------------------------------------------------------------
    # Single-record mutations
    # ------------------------------------------------------------------
    def delete(self, record: T, action: Callable[[], Any]) -> LoadHandle:
        """Run *action* in the background and drop *record* once it succeeds."""

        def _done(_result: Any) -> None:
            if not self.disposed and self.model.remove_one(lambda candidate: candidate is record):
                self.record_removed.emit(record)

        def _failed(error: BaseException) -> None:
            if not self.disposed:
                self._report(error, "delete")

        return self._loader.run(action, _done, _failed, label=f"delete-{self.source_name}")

    def add(self, action: Callable[[], T]) -> LoadHandle:
        """Run *action* in the background and append the record it returns."""

        def _done(created: T) -> None:
            if not self.disposed and created is not None:
                self.model.insert_one(created)
                self.record_added.emit(created)

        def _failed(error: BaseException) -> None:
            if not self.disposed:
                self._report(error, "create")

        return self._loader.run(action, _done, _failed, label=f"create-{self.source_name}")

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _report(self, error: BaseException, action: str) -> None:
        self.last_error = error
        if self._error_handler is not None:
            self._error_handler.handle(
                error,
                ErrorSeverity.ERROR,
                context={"source": self.source_name, "action": action},
            )
        else:
            self._logger.warning("%s %s failed: %s", self.source_name, action, error)
        self.error_occurred.emit(str(error))


__all__ = ["ListScreenController"]
