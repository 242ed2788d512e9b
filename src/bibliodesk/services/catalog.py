"""Catalog collaborators used by the book screens."""

from __future__ import annotations

import copy
import itertools
import logging
import threading
import time
from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Set

from ..domain.models import Author, Book
from ..errors import RecordConflictError, RecordNotFoundError

LOGGER = logging.getLogger(__name__)


class CatalogService(ABC):
    """Blocking data access for books.

    Implementations are called from worker threads through the async loader
    and must never touch widgets.
    """

    @abstractmethod
    def list_books(self) -> List[Book]:
        pass

    @abstractmethod
    def get_book(self, book_id: int) -> Book:
        """Return the book with *book_id* or raise ``RecordNotFoundError``."""
        pass

    @abstractmethod
    def delete_book(self, book_id: int) -> None:
        """Remove a book; ``RecordConflictError`` when copies still reference it."""
        pass

    @abstractmethod
    def create_book(self, book: Book) -> Book:
        pass


class InMemoryCatalogService(CatalogService):
    """Process-local catalog used in mock mode and by the tests."""

    def __init__(
        self,
        books: Iterable[Book] = (),
        *,
        protected_ids: Iterable[int] = (),
        latency: float = 0.0,
    ) -> None:
        self._lock = threading.Lock()
        self._books: Dict[int, Book] = {}
        self._protected: Set[int] = set(protected_ids)
        self._latency = latency
        for book in books:
            self._books[self._require_id(book)] = copy.deepcopy(book)
        start = max(self._books, default=0) + 1
        self._ids = itertools.count(start)

    @staticmethod
    def _require_id(book: Book) -> int:
        if book.id is None:
            raise ValueError(f"Seed book {book.isbn!r} has no id")
        return book.id

    def _pause(self) -> None:
        if self._latency > 0:
            time.sleep(self._latency)

    def list_books(self) -> List[Book]:
        self._pause()
        with self._lock:
            return [copy.deepcopy(book) for book in self._books.values()]

    def get_book(self, book_id: int) -> Book:
        self._pause()
        with self._lock:
            book = self._books.get(book_id)
            if book is None:
                raise RecordNotFoundError(f"Book {book_id} not found")
            return copy.deepcopy(book)

    def delete_book(self, book_id: int) -> None:
        self._pause()
        with self._lock:
            if book_id not in self._books:
                raise RecordNotFoundError(f"Book {book_id} not found")
            if book_id in self._protected:
                raise RecordConflictError(
                    f"Book {book_id} cannot be deleted while copies are registered"
                )
            del self._books[book_id]
        LOGGER.info("Deleted book %s", book_id)

    def create_book(self, book: Book) -> Book:
        self._pause()
        with self._lock:
            created = copy.deepcopy(book)
            created.id = next(self._ids)
            self._books[created.id] = created
            LOGGER.info("Created book %s (%s)", created.id, created.isbn)
            return copy.deepcopy(created)


def sample_books() -> List[Book]:
    """Seed data for mock mode."""

    authors = {
        "rodoreda": Author(1, "Mercè Rodoreda"),
        "monzo": Author(2, "Quim Monzó"),
        "sanchez": Author(3, "Albert Sánchez Piñol"),
        "cabre": Author(4, "Jaume Cabré"),
        "llull": Author(5, "Ramon Llull"),
    }
    rows = [
        ("9788475961557", "La plaça del Diamant", 256, "Club Editor", "rodoreda"),
        ("9788497870745", "Mirall trencat", 384, "Club Editor", "rodoreda"),
        ("9788433915481", "Mil cretins", 176, "Quaderns Crema", "monzo"),
        ("9788477274150", "Vuitanta-sis contes", 608, "Quaderns Crema", "monzo"),
        ("9788466404728", "La pell freda", 272, "La Campana", "sanchez"),
        ("9788496735236", "Victus", 608, "La Campana", "sanchez"),
        ("9788497871063", "Jo confesso", 1008, "Proa", "cabre"),
        ("9788482640704", "Les veus del Pamano", 720, "Proa", "cabre"),
        ("9788497664344", "Senyoria", 320, "Proa", "cabre"),
        ("9788498244460", "Llibre de les bèsties", 128, "Barcino", "llull"),
        ("9788472268512", "Blanquerna", 512, "Barcino", "llull"),
        ("9788475966903", "Aloma", 224, "Club Editor", "rodoreda"),
    ]
    return [
        Book(id=index, isbn=isbn, title=title, pages=pages, publisher=publisher, author=authors[key])
        for index, (isbn, title, pages, publisher, key) in enumerate(rows, start=1)
    ]


def default_catalog() -> InMemoryCatalogService:
    return InMemoryCatalogService(sample_books(), protected_ids=(7,))


__all__ = [
    "CatalogService",
    "InMemoryCatalogService",
    "default_catalog",
    "sample_books",
]
