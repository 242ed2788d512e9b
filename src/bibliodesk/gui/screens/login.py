"""Sign-in screen: validate credentials, authenticate off the GUI thread, open the dashboard."""

from __future__ import annotations

import logging
from functools import partial
from typing import Optional

from PySide6.QtWidgets import (
    QFormLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from ...errors import AuthenticationError, NavigationError
from ...errors.handler import ErrorHandler, ErrorSeverity
from ...events.app_events import SessionStartedEvent
from ...events.bus import EventBus
from ...services.auth import AuthService
from ...session import SessionContext, SessionStore
from ...utils.signal import ObservableProperty, Signal
from ..async_loader import AsyncLoader, LoadHandle
from ..navigator import Navigator
from ..viewmodels.base import BaseViewModel
from .view_ids import APP_TITLE, DASHBOARD_VIEW, LOGIN_VIEW

LOGGER = logging.getLogger(__name__)

MAX_NICK_LENGTH = 8
MAX_PASSWORD_LENGTH = 20


def validate_credentials(nick: str, password: str) -> Optional[str]:
    """Return a message describing what is wrong with the input, or ``None``."""
    if not nick or not password:
        return "Enter your username and password."
    if len(nick) > MAX_NICK_LENGTH:
        return f"The username can have at most {MAX_NICK_LENGTH} characters."
    if len(password) > MAX_PASSWORD_LENGTH:
        return f"The password can have at most {MAX_PASSWORD_LENGTH} characters."
    return None


class LoginController(BaseViewModel):
    """Authenticate and hand the new session to the dashboard.

    ``error`` carries user-facing messages; ``busy`` is true while a sign-in
    request is in flight, during which further attempts are ignored.
    """

    def __init__(
        self,
        auth: AuthService,
        loader: AsyncLoader,
        sessions: SessionStore,
        navigator: Navigator,
        *,
        width: Optional[float] = None,
        height: Optional[float] = None,
        maximize: bool = False,
        error_handler: Optional[ErrorHandler] = None,
        event_bus: Optional[EventBus] = None,
    ) -> None:
        super().__init__()
        self._auth = auth
        self._loader = loader
        self._sessions = sessions
        self._navigator = navigator
        self._size = (width, height)
        self._maximize = maximize
        self._error_handler = error_handler
        self._event_bus = event_bus

        self.busy = ObservableProperty(False)
        self.error = Signal()
        self.signed_in = Signal()

    def login(self, nick: str, password: str) -> Optional[LoadHandle]:
        nick = (nick or "").strip()
        password = password or ""
        problem = validate_credentials(nick, password)
        if problem is not None:
            self.error.emit(problem)
            return None
        if self.busy.value:
            LOGGER.debug("Sign-in already in progress; ignoring request for %s", nick)
            return None

        self.busy.value = True
        return self._loader.run(
            partial(self._auth.login, nick, password),
            self._on_signed_in,
            self._on_failed,
            label="login",
        )

    def _on_signed_in(self, session: SessionContext) -> None:
        if self.disposed:
            return
        self.busy.value = False
        self._sessions.sign_in(session)
        if self._event_bus is not None:
            self._event_bus.publish(
                SessionStartedEvent(user_id=session.user_id or "", is_admin=session.is_admin)
            )
        self.signed_in.emit(session)

        width, height = self._size
        try:
            self._navigator.go_to(
                DASHBOARD_VIEW,
                title=f"{APP_TITLE} - {session.display_name}",
                width=width,
                height=height,
                maximize=self._maximize,
            )
        except NavigationError as exc:
            self._sessions.sign_out()
            if self._error_handler is not None:
                self._error_handler.handle(exc, ErrorSeverity.ERROR, {"view": LOGIN_VIEW, "action": "open-dashboard"})
            self.error.emit(str(exc))

    def _on_failed(self, error: BaseException) -> None:
        if self.disposed:
            return
        self.busy.value = False
        LOGGER.warning("Sign-in failed: %s", error)
        if isinstance(error, AuthenticationError):
            self.error.emit(str(error))
        else:
            self.error.emit(f"Could not connect: {error}")


class LoginView(QWidget):
    def __init__(self, controller: LoginController, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setObjectName("loginView")
        self._controller = controller

        title = QLabel(APP_TITLE, self)
        title.setObjectName("loginTitle")

        self.username_edit = QLineEdit(self)
        self.username_edit.setObjectName("usernameField")
        self.username_edit.setMaxLength(MAX_NICK_LENGTH)
        self.password_edit = QLineEdit(self)
        self.password_edit.setObjectName("passwordField")
        self.password_edit.setEchoMode(QLineEdit.EchoMode.Password)
        self.password_edit.setMaxLength(MAX_PASSWORD_LENGTH)

        self.login_button = QPushButton("Sign in", self)
        self.login_button.setObjectName("loginButton")
        self.login_button.setDefault(True)

        self.error_label = QLabel(self)
        self.error_label.setObjectName("errorLabel")
        self.error_label.setWordWrap(True)
        self.error_label.hide()

        form = QFormLayout()
        form.addRow("Username", self.username_edit)
        form.addRow("Password", self.password_edit)

        layout = QVBoxLayout(self)
        layout.addStretch(1)
        layout.addWidget(title)
        layout.addLayout(form)
        layout.addWidget(self.login_button)
        layout.addWidget(self.error_label)
        layout.addStretch(1)

        self.login_button.clicked.connect(self._submit)
        self.password_edit.returnPressed.connect(self._submit)

        connections = [
            (controller.error, controller.error.connect(self._show_error)),
            (controller.busy.changed, controller.busy.changed.connect(self._on_busy)),
        ]

        def _teardown(*_args) -> None:
            for signal, handler in connections:
                signal.disconnect(handler)
            controller.dispose()

        self.destroyed.connect(_teardown)

    def _submit(self) -> None:
        self.error_label.hide()
        self._controller.login(self.username_edit.text(), self.password_edit.text())

    def _show_error(self, message: str) -> None:
        self.error_label.setText(message)
        self.error_label.show()

    def _on_busy(self, busy: bool, _old: bool) -> None:
        self.login_button.setEnabled(not busy)


def build_login_view(controller: LoginController) -> QWidget:
    return LoginView(controller)


__all__ = [
    "LOGIN_VIEW",
    "LoginController",
    "LoginView",
    "build_login_view",
    "validate_credentials",
]
