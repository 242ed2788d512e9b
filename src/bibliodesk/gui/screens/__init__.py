from .books import BookListController, build_books_view
from .dashboard import DashboardController, build_dashboard_view
from .login import LoginController, build_login_view
from .view_ids import APP_TITLE, BOOKS_VIEW, DASHBOARD_VIEW, LOGIN_VIEW

__all__ = [
    "APP_TITLE",
    "BOOKS_VIEW",
    "DASHBOARD_VIEW",
    "LOGIN_VIEW",
    "BookListController",
    "DashboardController",
    "LoginController",
    "build_books_view",
    "build_dashboard_view",
    "build_login_view",
]
