"""Custom exception hierarchy for bibliodesk."""

from __future__ import annotations


class BiblioError(Exception):
    """Base class for all custom errors raised by bibliodesk."""


# --- Layer bases ---

class NavigationError(BiblioError):
    """Base class for view resolution and navigation failures."""


class DependencyError(BiblioError):
    """Base class for dependency-container failures."""


class SettingsError(BiblioError):
    """Base class for settings related failures."""


class CatalogError(BiblioError):
    """Base class for errors reported by catalog collaborators."""


class AuthError(BiblioError):
    """Base class for sign-in and sign-out failures."""


# --- Navigation errors ---

class ViewNotFoundError(NavigationError):
    """Raised when a view identifier has no registered definition."""

    def __init__(self, view_id: str) -> None:
        super().__init__(f"View not found: {view_id}")
        self.view_id = view_id


class ViewLoadError(NavigationError):
    """Raised when a resolved view or its controller could not be built.

    The underlying failure is chained as ``__cause__``.
    """

    def __init__(self, view_id: str, message: str) -> None:
        super().__init__(f"Error loading view '{view_id}': {message}")
        self.view_id = view_id


class NavigatorUsageError(NavigationError):
    """Raised when the navigator is driven in an order it does not support."""


class ContentAreaNotRegisteredError(NavigatorUsageError):
    """Raised when embedding into a content area that was never registered."""

    def __init__(self, area: str) -> None:
        super().__init__(f"Content area '{area}' is not registered")
        self.area = area


class NavigatorNotAttachedError(NavigatorUsageError):
    """Raised when navigating before a window has been attached."""


# --- DI-specific errors ---

class CircularDependencyError(DependencyError):
    """Raised when a circular dependency is detected during resolution."""


class ResolutionError(DependencyError):
    """Raised when a dependency cannot be resolved."""


# --- Settings errors ---

class SettingsLoadError(SettingsError):
    """Raised when the settings file cannot be parsed or loaded."""


class SettingsValidationError(SettingsError):
    """Raised when settings data fails schema validation."""


# --- Catalog errors ---

class RecordNotFoundError(CatalogError):
    """Raised when a catalog record cannot be located."""


class RecordConflictError(CatalogError):
    """Raised when a record cannot be removed because others depend on it."""


# --- Auth errors ---

class AuthenticationError(AuthError):
    """Raised when credentials are rejected."""
