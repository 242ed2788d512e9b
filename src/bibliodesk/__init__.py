"""Desktop client core for the library-management system."""

__version__ = "1.0.0"
