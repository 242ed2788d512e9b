"""Default stylesheet registrations for the bundled views."""

from __future__ import annotations

from .navigator import Navigator
from .screens.view_ids import BOOKS_VIEW, DASHBOARD_VIEW, LOGIN_VIEW

APP_STYLE = "styles/app.qss"
LIST_STYLE = "styles/list.qss"
DASHBOARD_STYLE = "styles/dashboard.qss"
LOGIN_STYLE = "styles/login.qss"


def register_default_styles(navigator: Navigator) -> None:
    navigator.register_global_style(APP_STYLE)
    navigator.register_view_style(LOGIN_VIEW, LOGIN_STYLE)
    navigator.register_view_style(DASHBOARD_VIEW, DASHBOARD_STYLE)
    navigator.register_view_style(BOOKS_VIEW, LIST_STYLE)


__all__ = ["APP_STYLE", "DASHBOARD_STYLE", "LIST_STYLE", "LOGIN_STYLE", "register_default_styles"]
