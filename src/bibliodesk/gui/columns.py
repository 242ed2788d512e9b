"""Typed table columns and a Qt model exposing the current page of a list."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, Optional, Sequence, Tuple, TypeVar

from PySide6.QtCore import QAbstractTableModel, QModelIndex, QPersistentModelIndex, Qt

from ..core.paging import PagedListModel

T = TypeVar("T")

RecordRole = int(Qt.ItemDataRole.UserRole) + 1


@dataclass(frozen=True)
class ColumnDescriptor(Generic[T]):
    """One table column: a header and how to read its value from a record."""

    title: str
    accessor: Callable[[T], Any]
    width: Optional[int] = None
    alignment: Optional[Qt.AlignmentFlag] = None

    def display(self, record: T) -> str:
        value = self.accessor(record)
        return "" if value is None else str(value)


class PageTableModel(QAbstractTableModel):
    """Read-only table over ``PagedListModel.current_page()``.

    The model resets itself whenever the paged list announces a change, so
    views always show the in-range slice of the current page.
    """

    def __init__(
        self,
        paged: PagedListModel[T],
        columns: Sequence[ColumnDescriptor[T]],
        parent=None,
    ) -> None:
        super().__init__(parent)
        self._paged = paged
        self._columns: Tuple[ColumnDescriptor[T], ...] = tuple(columns)
        self._rows: Tuple[T, ...] = paged.current_page()
        paged.changed.connect(self._on_page_changed)

    # ------------------------------------------------------------------
    # Public helpers
    # ------------------------------------------------------------------
    @property
    def columns(self) -> Tuple[ColumnDescriptor[T], ...]:
        return self._columns

    def record_at(self, row: int) -> Optional[T]:
        if 0 <= row < len(self._rows):
            return self._rows[row]
        return None

    def detach(self) -> None:
        """Stop following the paged list (call before discarding the model)."""
        try:
            self._paged.changed.disconnect(self._on_page_changed)
        except ValueError:
            pass

    # ------------------------------------------------------------------
    # QAbstractTableModel overrides
    # ------------------------------------------------------------------
    def rowCount(self, parent: QModelIndex | QPersistentModelIndex = QModelIndex()) -> int:  # noqa: B008
        if parent.isValid():
            return 0
        return len(self._rows)

    def columnCount(self, parent: QModelIndex | QPersistentModelIndex = QModelIndex()) -> int:  # noqa: B008
        if parent.isValid():
            return 0
        return len(self._columns)

    def data(self, index: QModelIndex | QPersistentModelIndex, role: int = Qt.ItemDataRole.DisplayRole) -> Any:
        if not index.isValid():
            return None
        record = self.record_at(index.row())
        if record is None or not 0 <= index.column() < len(self._columns):
            return None
        column = self._columns[index.column()]
        if role == Qt.ItemDataRole.DisplayRole:
            return column.display(record)
        if role == Qt.ItemDataRole.TextAlignmentRole and column.alignment is not None:
            return column.alignment
        if role == RecordRole:
            return record
        return None

    def headerData(
        self,
        section: int,
        orientation: Qt.Orientation,
        role: int = Qt.ItemDataRole.DisplayRole,
    ) -> Any:
        if role != Qt.ItemDataRole.DisplayRole:
            return None
        if orientation == Qt.Orientation.Horizontal and 0 <= section < len(self._columns):
            return self._columns[section].title
        if orientation == Qt.Orientation.Vertical:
            return str(self._paged.page_index * self._paged.page_size + section + 1)
        return None

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _on_page_changed(self) -> None:
        self.beginResetModel()
        self._rows = self._paged.current_page()
        self.endResetModel()


__all__ = ["ColumnDescriptor", "PageTableModel", "RecordRole"]
