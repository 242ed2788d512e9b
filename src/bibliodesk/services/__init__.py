from .auth import AuthService, MockAuthService
from .catalog import CatalogService, InMemoryCatalogService, default_catalog, sample_books

__all__ = [
    "AuthService",
    "CatalogService",
    "InMemoryCatalogService",
    "MockAuthService",
    "default_catalog",
    "sample_books",
]
