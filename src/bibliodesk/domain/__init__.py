from .models import Author, Book

__all__ = ["Author", "Book"]
