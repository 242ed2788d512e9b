"""Identifiers of the bundled views."""

LOGIN_VIEW = "login"
DASHBOARD_VIEW = "dashboard"
BOOKS_VIEW = "books"

APP_TITLE = "BiblioDesk"
