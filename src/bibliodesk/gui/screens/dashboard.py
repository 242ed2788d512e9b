"""Dashboard shell: role-aware sidebar plus the main content area other views embed into."""

from __future__ import annotations

import logging
from typing import Optional

from PySide6.QtWidgets import (
    QFrame,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from ...errors import AuthError
from ...events.app_events import SessionEndedEvent
from ...events.bus import EventBus
from ...services.auth import AuthService
from ...session import SessionContext, SessionStore
from ..navigator import Navigator
from .books import BookListController
from .view_ids import APP_TITLE, BOOKS_VIEW, DASHBOARD_VIEW, LOGIN_VIEW

LOGGER = logging.getLogger(__name__)


class DashboardController:
    """Owns the shell and decides which view fills the main area.

    Administrators get the management group and the badge; everyone else
    gets the reader group, where the book list opens read-only.
    """

    default_view = BOOKS_VIEW

    def __init__(
        self,
        navigator: Navigator,
        session: Optional[SessionContext] = None,
        *,
        auth: Optional[AuthService] = None,
        sessions: Optional[SessionStore] = None,
        event_bus: Optional[EventBus] = None,
        login_size: tuple = (None, None),
    ) -> None:
        self._navigator = navigator
        self.session = session or SessionContext.anonymous()
        self._auth = auth
        self._sessions = sessions
        self._event_bus = event_bus
        self._login_size = login_size
        self.content_area: Optional[QWidget] = None

    def attach_content_area(self, container: QWidget) -> None:
        self.content_area = container
        self._navigator.register_main_content_area(container)

    @property
    def is_admin(self) -> bool:
        return self.session.is_admin

    @property
    def greeting(self) -> str:
        name = self.session.display_name
        return f"Welcome, {name}" if name else "Welcome"

    @property
    def user_id_text(self) -> str:
        return f"ID: {self.session.user_id}" if self.session.user_id else ""

    def on_view_shown(self) -> None:
        self.open_view(self.default_view)

    def open_view(self, view_id: str):
        LOGGER.debug("Dashboard opening %s", view_id)
        if view_id == BOOKS_VIEW and not self.is_admin:
            return self._navigator.show_main_view(view_id, configure=_make_read_only)
        return self._navigator.show_main_view(view_id)

    def logout(self):
        """End the session and return to the standalone sign-in view."""
        ended = self._sessions.sign_out() if self._sessions is not None else self.session
        if self._auth is not None:
            try:
                self._auth.logout(ended)
            except AuthError as exc:
                LOGGER.warning("Sign-out request failed for user %s: %s", ended.user_id, exc)
        if self._event_bus is not None:
            self._event_bus.publish(SessionEndedEvent(user_id=ended.user_id or ""))
        width, height = self._login_size
        return self._navigator.go_to(
            LOGIN_VIEW,
            title=f"{APP_TITLE} - Sign in",
            width=width,
            height=height,
        )


def _make_read_only(controller: BookListController) -> None:
    controller.read_only = True


def _nav_button(text: str, name: str, parent: QWidget) -> QPushButton:
    button = QPushButton(text, parent)
    button.setObjectName(name)
    return button


def build_dashboard_view(controller: DashboardController) -> QWidget:
    root = QWidget()
    root.setObjectName("dashboardView")

    sidebar = QFrame(root)
    sidebar.setObjectName("sidebar")
    sidebar_layout = QVBoxLayout(sidebar)

    greeting = QLabel(controller.greeting, sidebar)
    greeting.setObjectName("greetingLabel")
    greeting.setWordWrap(True)
    user_id = QLabel(controller.user_id_text, sidebar)
    user_id.setObjectName("userIdLabel")
    badge = QLabel("ADMIN", sidebar)
    badge.setObjectName("adminBadge")
    sidebar_layout.addWidget(greeting)
    sidebar_layout.addWidget(user_id)
    sidebar_layout.addWidget(badge)

    admin_group = QFrame(sidebar)
    admin_group.setObjectName("adminGroup")
    admin_layout = QVBoxLayout(admin_group)
    admin_layout.setContentsMargins(0, 0, 0, 0)
    manage_books = _nav_button("Manage books", "booksNavButton", admin_group)
    manage_books.clicked.connect(lambda: controller.open_view(BOOKS_VIEW))
    admin_layout.addWidget(manage_books)

    user_group = QFrame(sidebar)
    user_group.setObjectName("userGroup")
    user_layout = QVBoxLayout(user_group)
    user_layout.setContentsMargins(0, 0, 0, 0)
    browse_books = _nav_button("Browse catalog", "catalogNavButton", user_group)
    browse_books.clicked.connect(lambda: controller.open_view(BOOKS_VIEW))
    user_layout.addWidget(browse_books)

    admin = controller.is_admin
    admin_group.setVisible(admin)
    badge.setVisible(admin)
    user_group.setVisible(not admin)

    sidebar_layout.addWidget(admin_group)
    sidebar_layout.addWidget(user_group)
    sidebar_layout.addStretch(1)
    logout = _nav_button("Sign out", "logoutButton", sidebar)
    logout.clicked.connect(lambda: controller.logout())
    sidebar_layout.addWidget(logout)

    content = QWidget(root)
    content.setObjectName("mainContent")
    content_layout = QVBoxLayout(content)
    content_layout.setContentsMargins(0, 0, 0, 0)
    controller.attach_content_area(content)

    layout = QHBoxLayout(root)
    layout.setContentsMargins(0, 0, 0, 0)
    layout.setSpacing(0)
    layout.addWidget(sidebar)
    layout.addWidget(content, 1)
    return root


__all__ = ["DASHBOARD_VIEW", "DashboardController", "build_dashboard_view"]
