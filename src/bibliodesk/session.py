"""Explicit session value handed to controllers at construction time."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Final, Optional

ROLE_USER: Final[int] = 1
ROLE_LIBRARIAN: Final[int] = 2
ROLE_ADMIN: Final[int] = 3


@dataclass(frozen=True)
class SessionContext:
    """Identity of the signed-in user.

    Controllers receive this through the controller binding instead of
    consulting process-wide state, so each test can build its own.
    """

    token: Optional[str] = None
    user_id: Optional[str] = None
    role: int = ROLE_USER
    first_name: Optional[str] = None
    surname: Optional[str] = None
    second_surname: Optional[str] = None

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)

    @property
    def is_admin(self) -> bool:
        return self.role >= ROLE_ADMIN

    @property
    def display_name(self) -> str:
        parts = [p for p in (self.first_name, self.surname, self.second_surname) if p]
        return " ".join(parts) if parts else (self.user_id or "")

    @classmethod
    def anonymous(cls) -> "SessionContext":
        return cls()


class SessionStore:
    """Holds the current :class:`SessionContext`.

    The value is replaced wholesale on sign-in and sign-out; controllers built
    afterwards receive the new snapshot.
    """

    def __init__(self, initial: Optional[SessionContext] = None) -> None:
        self._lock = threading.Lock()
        self._current = initial or SessionContext.anonymous()

    @property
    def current(self) -> SessionContext:
        with self._lock:
            return self._current

    def sign_in(self, session: SessionContext) -> None:
        with self._lock:
            self._current = session

    def sign_out(self) -> SessionContext:
        """Reset to the anonymous session and return the one that ended."""
        with self._lock:
            previous, self._current = self._current, SessionContext.anonymous()
        return previous
