"""Run blocking producers on the shared thread pool and report back on the GUI thread."""

from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Generic, Optional, TypeVar

from PySide6.QtCore import QObject, QRunnable, QThreadPool, Signal, Slot

LOGGER = logging.getLogger(__name__)

R = TypeVar("R")


@dataclass(frozen=True)
class LoadHandle:
    """Identifies one submitted producer."""

    task_id: int
    label: str = ""


@dataclass
class _TaskRecord(Generic[R]):
    handle: LoadHandle
    on_success: Callable[[R], None]
    on_failure: Optional[Callable[[BaseException], None]]


class _LoadSignals(QObject):
    """Lives on the GUI thread; emitted from pool threads."""

    succeeded = Signal(int, object)
    failed = Signal(int, object)


class _ProducerRunnable(QRunnable):
    def __init__(self, task_id: int, producer: Callable[[], Any], signals: _LoadSignals) -> None:
        super().__init__()
        self.setAutoDelete(True)
        self._task_id = task_id
        self._producer = producer
        self._signals = signals

    def run(self) -> None:  # pragma: no cover - runs in background thread
        try:
            result = self._producer()
        except Exception as exc:
            self._signals.failed.emit(self._task_id, exc)
            return
        self._signals.succeeded.emit(self._task_id, result)


class AsyncLoader(QObject):
    """Submit producers to a worker pool and marshal results to the GUI thread.

    The loader must be created on the GUI thread.  Callbacks are delivered
    through queued signal connections, so they always run there regardless of
    which pool thread executed the producer.

    There is no retry and no cancellation.  Two loads in flight may complete
    in either order; callers that need "last request wins" use a
    :class:`RequestSequencer`.
    """

    taskStarted = Signal(int, str)
    taskFinished = Signal(int)
    taskFailed = Signal(int, str)

    def __init__(
        self,
        *,
        thread_pool: Optional[QThreadPool] = None,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self._thread_pool = thread_pool or QThreadPool.globalInstance()
        self._ids = itertools.count(1)
        self._active: Dict[int, _TaskRecord] = {}

        self._signals = _LoadSignals(self)
        self._signals.succeeded.connect(self._on_succeeded)
        self._signals.failed.connect(self._on_failed)

    # ------------------------------------------------------------------
    # Introspection helpers
    # ------------------------------------------------------------------
    def is_busy(self) -> bool:
        """Return ``True`` while any submitted producer has not reported back."""

        return bool(self._active)

    def active_count(self) -> int:
        return len(self._active)

    # ------------------------------------------------------------------
    # Submission
    # ------------------------------------------------------------------
    def run(
        self,
        producer: Callable[[], R],
        on_success: Callable[[R], None],
        on_failure: Optional[Callable[[BaseException], None]] = None,
        *,
        label: str = "",
    ) -> LoadHandle:
        """Execute *producer* on the pool.

        *on_success* receives the return value, *on_failure* the raised
        exception.  Exactly one of them is invoked, once, on the GUI thread.
        """

        handle = LoadHandle(task_id=next(self._ids), label=label)
        self._active[handle.task_id] = _TaskRecord(handle, on_success, on_failure)
        self.taskStarted.emit(handle.task_id, label)
        self._thread_pool.start(_ProducerRunnable(handle.task_id, producer, self._signals))
        return handle

    # ------------------------------------------------------------------
    # Completion slots (GUI thread)
    # ------------------------------------------------------------------
    @Slot(int, object)
    def _on_succeeded(self, task_id: int, result: object) -> None:
        record = self._active.pop(task_id, None)
        if record is None:
            return
        try:
            record.on_success(result)
        finally:
            self.taskFinished.emit(task_id)

    @Slot(int, object)
    def _on_failed(self, task_id: int, error: object) -> None:
        record = self._active.pop(task_id, None)
        if record is None:
            return
        try:
            if record.on_failure is not None:
                record.on_failure(error)  # type: ignore[arg-type]
            else:
                LOGGER.warning(
                    "Background load %s (%s) failed: %s",
                    task_id,
                    record.handle.label or "unnamed",
                    error,
                )
        finally:
            self.taskFailed.emit(task_id, str(error))


class RequestSequencer:
    """Issue increasing tokens so late results of superseded requests can be dropped."""

    def __init__(self) -> None:
        self._latest = 0

    def issue(self) -> int:
        self._latest += 1
        return self._latest

    def is_current(self, token: int) -> bool:
        return token == self._latest

    @property
    def latest(self) -> int:
        return self._latest


__all__ = ["AsyncLoader", "LoadHandle", "RequestSequencer"]
