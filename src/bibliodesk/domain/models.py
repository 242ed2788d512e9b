from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass
class Author:
    id: Optional[int]
    name: str

    def __str__(self) -> str:
        return self.name


@dataclass
class Book:
    id: Optional[int]
    isbn: str
    title: str
    pages: int = 0
    publisher: Optional[str] = None
    author: Optional[Author] = None

    @property
    def author_name(self) -> Optional[str]:
        return self.author.name if self.author is not None else None
