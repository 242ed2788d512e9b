"""Book list screen: searchable, paginated catalog table."""

from __future__ import annotations

import re
from functools import partial
from typing import Callable, Dict, Optional

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QAbstractItemView,
    QHBoxLayout,
    QHeaderView,
    QLabel,
    QLineEdit,
    QMessageBox,
    QPushButton,
    QTableView,
    QVBoxLayout,
    QWidget,
)

from ...core.paging import DEFAULT_PAGE_SIZE
from ...core.search import FieldAccessor
from ...domain.models import Book
from ...errors import RecordConflictError
from ...errors.handler import ErrorHandler
from ...events.bus import EventBus
from ...services.catalog import CatalogService
from ...utils.signal import Signal
from ..async_loader import AsyncLoader, LoadHandle
from ..columns import ColumnDescriptor, PageTableModel
from ..list_controller import ListScreenController
from ..widgets import PaginationBar, SearchBar
from .view_ids import BOOKS_VIEW


BOOK_ACCESSORS: Dict[str, FieldAccessor] = {
    "isbn": lambda book: book.isbn,
    "title": lambda book: book.title,
    "publisher": lambda book: book.publisher,
    "author": lambda book: book.author_name,
}

BOOK_SEARCH_FIELDS = (
    ("isbn", "ISBN"),
    ("title", "Title"),
    ("publisher", "Publisher"),
    ("author", "Author"),
)

BOOK_COLUMNS = (
    ColumnDescriptor("ID", lambda book: book.id, width=60, alignment=Qt.AlignmentFlag.AlignCenter),
    ColumnDescriptor("ISBN", lambda book: book.isbn, width=140),
    ColumnDescriptor("Title", lambda book: book.title),
    ColumnDescriptor("Author", lambda book: book.author_name, width=200),
    ColumnDescriptor("Publisher", lambda book: book.publisher, width=160),
)

_NUMERIC_ID = re.compile(r"^\d+$")


class BookListController(ListScreenController[Book]):
    """Load the catalog, filter it and page through it."""

    source_name = "books"

    def __init__(
        self,
        catalog: CatalogService,
        loader: AsyncLoader,
        *,
        page_size: int = DEFAULT_PAGE_SIZE,
        error_handler: Optional[ErrorHandler] = None,
        event_bus: Optional[EventBus] = None,
    ) -> None:
        super().__init__(
            loader,
            accessors=BOOK_ACCESSORS,
            page_size=page_size,
            error_handler=error_handler,
            event_bus=event_bus,
        )
        self._catalog = catalog
        self.read_only = False
        self.notice = Signal()
        self.book_found = Signal()
        self.record_removed.connect(lambda book: self.notice.emit("Book deleted."))
        self.record_added.connect(lambda book: self.notice.emit(f"Book '{book.title}' created."))

    def fetch_records(self):
        return self._catalog.list_books()

    def on_view_shown(self) -> None:
        self.reload()

    def delete_book(self, book: Book) -> Optional[LoadHandle]:
        if self.read_only:
            self.notice.emit("Only administrators can delete books.")
            return None
        return self.delete(book, partial(self._catalog.delete_book, book.id))

    def create_book(self, book: Book) -> LoadHandle:
        return self.add(partial(self._catalog.create_book, book))

    def find_by_id(self, raw: str) -> Optional[LoadHandle]:
        """Look one book up by numeric id; validation problems go to ``notice``."""
        text = (raw or "").strip()
        if not text:
            self.notice.emit("Enter an ID.")
            return None
        if not _NUMERIC_ID.match(text):
            self.notice.emit("The ID must be numeric.")
            return None

        def _failed(error: BaseException) -> None:
            if not self.disposed:
                self._report(error, "lookup")

        def _found(book: Book) -> None:
            if not self.disposed:
                self.book_found.emit(book)

        return self._loader.run(
            partial(self._catalog.get_book, int(text)),
            _found,
            _failed,
            label="lookup-book",
        )

    def describe_error(self, error: BaseException) -> str:
        if isinstance(error, RecordConflictError):
            return "This book still has copies and cannot be deleted."
        return str(error) or error.__class__.__name__


class BookListView(QWidget):
    """Widget tree for :class:`BookListController`."""

    def __init__(
        self,
        controller: BookListController,
        *,
        confirm: Optional[Callable[[Book], bool]] = None,
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self.setObjectName("booksView")
        self._controller = controller
        self._confirm = confirm or self._ask_confirmation

        title = QLabel("Books", self)
        title.setObjectName("viewTitle")

        self.search_bar = SearchBar(controller.model, BOOK_SEARCH_FIELDS, parent=self)

        self.id_edit = QLineEdit(self)
        self.id_edit.setObjectName("searchByIdField")
        self.id_edit.setPlaceholderText("ID")
        self.id_edit.setMaximumWidth(90)
        find_button = QPushButton("Find", self)
        find_button.clicked.connect(lambda: controller.find_by_id(self.id_edit.text()))

        self.table_model = PageTableModel(controller.model, BOOK_COLUMNS, parent=self)
        self.table = QTableView(self)
        self.table.setObjectName("booksTable")
        self.table.setModel(self.table_model)
        self.table.setSelectionBehavior(QAbstractItemView.SelectionBehavior.SelectRows)
        self.table.setSelectionMode(QAbstractItemView.SelectionMode.SingleSelection)
        self.table.setEditTriggers(QAbstractItemView.EditTrigger.NoEditTriggers)
        header = self.table.horizontalHeader()
        for section, column in enumerate(BOOK_COLUMNS):
            if column.width is None:
                header.setSectionResizeMode(section, QHeaderView.ResizeMode.Stretch)
            else:
                self.table.setColumnWidth(section, column.width)

        self.pagination = PaginationBar(controller.model, self)

        self.refresh_button = QPushButton("Refresh", self)
        self.refresh_button.setObjectName("refreshButton")
        self.refresh_button.clicked.connect(lambda: controller.reload())
        self.delete_button = QPushButton("Delete", self)
        self.delete_button.setObjectName("deleteButton")
        self.delete_button.clicked.connect(self._delete_selected)
        self.delete_button.setVisible(not controller.read_only)

        self.status_label = QLabel(self)
        self.status_label.setObjectName("statusLabel")

        toolbar = QHBoxLayout()
        toolbar.addWidget(self.search_bar, 1)
        toolbar.addWidget(self.id_edit)
        toolbar.addWidget(find_button)
        toolbar.addWidget(self.refresh_button)
        toolbar.addWidget(self.delete_button)

        layout = QVBoxLayout(self)
        layout.addWidget(title)
        layout.addLayout(toolbar)
        layout.addWidget(self.table, 1)
        layout.addWidget(self.pagination)
        layout.addWidget(self.status_label)

        connections = [
            (controller.loading.changed, controller.loading.changed.connect(self._on_loading)),
            (controller.notice, controller.notice.connect(self.status_label.setText)),
            (controller.error_occurred, controller.error_occurred.connect(self._on_error)),
            (controller.book_found, controller.book_found.connect(self._on_book_found)),
            (controller.model.changed, controller.model.changed.connect(self.table.scrollToTop)),
        ]
        table_model = self.table_model
        pagination = self.pagination

        def _teardown(*_args) -> None:
            for signal, handler in connections:
                signal.disconnect(handler)
            table_model.detach()
            pagination.detach()
            controller.dispose()

        self.destroyed.connect(_teardown)

    def selected_book(self) -> Optional[Book]:
        indexes = self.table.selectionModel().selectedRows()
        if not indexes:
            return None
        return self.table_model.record_at(indexes[0].row())

    def _delete_selected(self) -> None:
        book = self.selected_book()
        if book is None:
            self.status_label.setText("Select a book first.")
            return
        if self._confirm(book):
            self._controller.delete_book(book)

    def _ask_confirmation(self, book: Book) -> bool:
        answer = QMessageBox.question(
            self,
            "Confirm deletion",
            f"Delete '{book.title}'?",
        )
        return answer == QMessageBox.StandardButton.Yes

    def _on_loading(self, loading: bool, _old: bool) -> None:
        self.refresh_button.setEnabled(not loading)
        if loading:
            self.status_label.setText("Loading…")
        else:
            self.status_label.clear()

    def _on_book_found(self, book: Book) -> None:
        author = f" by {book.author_name}" if book.author_name else ""
        self.status_label.setText(f"#{book.id}: {book.title}{author}")

    def _on_error(self, _message: str) -> None:
        error = self._controller.last_error
        if error is not None:
            self.status_label.setText(self._controller.describe_error(error))


def build_books_view(controller: BookListController) -> QWidget:
    return BookListView(controller)


__all__ = [
    "BOOKS_VIEW",
    "BOOK_ACCESSORS",
    "BOOK_COLUMNS",
    "BOOK_SEARCH_FIELDS",
    "BookListController",
    "BookListView",
    "build_books_view",
]
