"""Sign-in collaborators used by the login screen and the dashboard."""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from typing import Dict, Tuple

from ..errors import AuthenticationError
from ..session import ROLE_ADMIN, ROLE_USER, SessionContext

LOGGER = logging.getLogger(__name__)


class AuthService(ABC):
    """Blocking authentication calls, run from worker threads."""

    @abstractmethod
    def login(self, nick: str, password: str) -> SessionContext:
        """Return the session for valid credentials or raise ``AuthenticationError``."""
        pass

    @abstractmethod
    def logout(self, session: SessionContext) -> None:
        pass


class MockAuthService(AuthService):
    """Fixed accounts for mock mode: ``admin/admin`` and ``user/user``."""

    ACCOUNTS: Dict[Tuple[str, str], SessionContext] = {
        ("admin", "admin"): SessionContext(
            token="mock-admin-token",
            user_id="1",
            role=ROLE_ADMIN,
            first_name="Núria",
            surname="Vidal",
        ),
        ("user", "user"): SessionContext(
            token="mock-user-token",
            user_id="2",
            role=ROLE_USER,
            first_name="Pere",
            surname="Soler",
        ),
    }

    def __init__(self, *, latency: float = 0.0) -> None:
        self._latency = latency

    def login(self, nick: str, password: str) -> SessionContext:
        if self._latency > 0:
            time.sleep(self._latency)
        session = self.ACCOUNTS.get((nick, password))
        if session is None:
            LOGGER.info("Rejected sign-in for %s", nick)
            raise AuthenticationError("Invalid username or password.")
        LOGGER.info("Signed in %s (user %s)", nick, session.user_id)
        return session

    def logout(self, session: SessionContext) -> None:
        LOGGER.info("Signed out user %s", session.user_id)


__all__ = ["AuthService", "MockAuthService"]
