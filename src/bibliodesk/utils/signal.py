"""Qt-free observer primitives for models and controllers.

``Signal`` is what :class:`~bibliodesk.core.paging.PagedListModel` and the
list controllers use to announce state changes; ``ObservableProperty`` holds
a single value (e.g. a loading flag) that widgets can mirror.
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import Any, Callable, Iterator

_logger = logging.getLogger(__name__)


class Signal:
    """Minimal callback list.

    Handlers run in connection order on the emitting thread.  A handler that
    raises is logged and skipped so the remaining handlers still run.
    """

    def __init__(self) -> None:
        self._handlers: list[Callable] = []
        self._lock = threading.Lock()
        self._blocked = False

    def connect(self, handler: Callable) -> Callable:
        with self._lock:
            if handler not in self._handlers:
                self._handlers.append(handler)
        return handler

    def disconnect(self, handler: Callable) -> None:
        with self._lock:
            self._handlers.remove(handler)

    def emit(self, *args: Any, **kwargs: Any) -> None:
        if self._blocked:
            return
        with self._lock:
            handlers = list(self._handlers)
        for handler in handlers:
            try:
                handler(*args, **kwargs)
            except Exception:
                _logger.exception("Signal handler %r failed", handler)

    @contextmanager
    def blocked(self) -> Iterator[None]:
        """Suppress emissions for the duration of the ``with`` block."""
        previous = self._blocked
        self._blocked = True
        try:
            yield
        finally:
            self._blocked = previous

    @property
    def handler_count(self) -> int:
        with self._lock:
            return len(self._handlers)


class ObservableProperty:
    """Single value that emits ``changed(new, old)`` when it changes."""

    def __init__(self, initial_value: Any = None) -> None:
        self._value = initial_value
        self.changed = Signal()

    @property
    def value(self) -> Any:
        return self._value

    @value.setter
    def value(self, new_value: Any) -> None:
        if self._value != new_value:
            old_value = self._value
            self._value = new_value
            self.changed.emit(new_value, old_value)
