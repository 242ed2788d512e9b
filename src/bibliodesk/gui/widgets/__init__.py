from .list_controls import PaginationBar, SearchBar

__all__ = ["PaginationBar", "SearchBar"]
