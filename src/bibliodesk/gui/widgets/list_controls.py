"""Search and pagination widgets bound to a :class:`PagedListModel`."""

from __future__ import annotations

from typing import Optional, Sequence, Tuple

from PySide6.QtCore import Signal
from PySide6.QtWidgets import (
    QComboBox,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QWidget,
)

from ...core.paging import PagedListModel
from ...core.search import ALL_FIELDS, SearchCriteria

PAGE_LABEL_FORMAT = "Page {current} of {total}"


class SearchBar(QWidget):
    """Field selector plus free-text box; every edit re-filters the model."""

    criteriaChanged = Signal(object)

    def __init__(
        self,
        paged: PagedListModel,
        fields: Sequence[Tuple[str, str]],
        *,
        all_label: str = "All",
        placeholder: str = "Search…",
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self.setObjectName("searchBar")
        self._paged = paged

        self.field_combo = QComboBox(self)
        self.field_combo.setObjectName("searchFieldCombo")
        self.field_combo.addItem(all_label, ALL_FIELDS)
        for key, label in fields:
            self.field_combo.addItem(label, key)

        self.query_edit = QLineEdit(self)
        self.query_edit.setObjectName("searchField")
        self.query_edit.setPlaceholderText(placeholder)
        self.query_edit.setClearButtonEnabled(True)

        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(self.field_combo)
        layout.addWidget(self.query_edit, 1)

        self.query_edit.textChanged.connect(self._apply)
        self.field_combo.currentIndexChanged.connect(self._apply)

    def criteria(self) -> SearchCriteria:
        field = self.field_combo.currentData() or ALL_FIELDS
        return SearchCriteria(field=field, query=self.query_edit.text())

    def _apply(self, *_args) -> None:
        criteria = self.criteria()
        self._paged.set_criteria(criteria)
        self.criteriaChanged.emit(criteria)


class PaginationBar(QWidget):
    """Previous/next buttons and a "Page x of y" label that mirror the model."""

    def __init__(self, paged: PagedListModel, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setObjectName("paginationBar")
        self._paged = paged

        self.previous_button = QPushButton("‹", self)
        self.previous_button.setObjectName("prevPageButton")
        self.next_button = QPushButton("›", self)
        self.next_button.setObjectName("nextPageButton")
        self.page_label = QLabel(self)
        self.page_label.setObjectName("pageInfoLabel")

        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addStretch(1)
        layout.addWidget(self.previous_button)
        layout.addWidget(self.page_label)
        layout.addWidget(self.next_button)
        layout.addStretch(1)

        self.previous_button.clicked.connect(lambda: paged.previous_page())
        self.next_button.clicked.connect(lambda: paged.next_page())
        paged.changed.connect(self.refresh)
        self.refresh()

    def refresh(self) -> None:
        self.page_label.setText(
            PAGE_LABEL_FORMAT.format(
                current=self._paged.page_index + 1,
                total=self._paged.total_pages,
            )
        )
        self.previous_button.setEnabled(self._paged.can_go_previous())
        self.next_button.setEnabled(self._paged.can_go_next())

    def detach(self) -> None:
        try:
            self._paged.changed.disconnect(self.refresh)
        except ValueError:
            pass
