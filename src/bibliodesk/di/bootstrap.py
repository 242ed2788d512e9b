"""Composition root: register the application's services and views."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from ..errors import ResolutionError
from ..errors.handler import ErrorHandler
from ..events.bus import EventBus
from ..gui.async_loader import AsyncLoader
from ..gui.navigator import Navigator
from ..gui.screens.books import BookListController, build_books_view
from ..gui.screens.dashboard import DashboardController, build_dashboard_view
from ..gui.screens.login import LoginController, build_login_view
from ..gui.screens.view_ids import BOOKS_VIEW, DASHBOARD_VIEW, LOGIN_VIEW
from ..gui.styles import register_default_styles
from ..gui.views import ContainerControllerFactory, StyleResolver, ViewRegistry
from ..services.auth import AuthService, MockAuthService
from ..services.catalog import CatalogService, default_catalog
from ..session import SessionContext, SessionStore
from ..settings.manager import SettingsManager
from .container import Container
from .lifetime import Lifetime

LOGGER = logging.getLogger(__name__)


def register_views(registry: ViewRegistry) -> None:
    registry.register_view(LOGIN_VIEW, LoginController, build_login_view)
    registry.register_view(DASHBOARD_VIEW, DashboardController, build_dashboard_view)
    registry.register_view(BOOKS_VIEW, BookListController, build_books_view)


def _require_mock(settings: SettingsManager, what: str) -> None:
    if not settings.get("api.use_mock", True):
        raise ResolutionError(
            f"No remote {what} backend for {settings.get('api.base_url')}; set api.use_mock to true"
        )


def _create_catalog(container: Container) -> CatalogService:
    _require_mock(container.resolve(SettingsManager), "catalog")
    LOGGER.info("Using the in-memory catalog")
    return default_catalog()


def _create_auth(container: Container) -> AuthService:
    _require_mock(container.resolve(SettingsManager), "authentication")
    LOGGER.info("Using mock authentication")
    return MockAuthService()


def _create_navigator(container: Container) -> Navigator:
    settings = container.resolve(SettingsManager)
    extra_roots = [Path(entry).expanduser() for entry in settings.get("ui.styles_dirs", []) or []]
    registry = ViewRegistry()
    register_views(registry)
    navigator = Navigator(
        registry,
        style_resolver=StyleResolver.with_bundled_resources(extra_roots),
        controller_factory=ContainerControllerFactory(container),
        event_bus=container.resolve(EventBus),
        error_handler=container.resolve(ErrorHandler),
    )
    register_default_styles(navigator)
    return navigator


def _window_size(settings: SettingsManager) -> tuple:
    return settings.get("ui.window_width", 1000), settings.get("ui.window_height", 600)


def _create_book_list_controller(container: Container) -> BookListController:
    settings = container.resolve(SettingsManager)
    return BookListController(
        container.resolve(CatalogService),
        container.resolve(AsyncLoader),
        page_size=settings.get("ui.page_size", 10),
        error_handler=container.resolve(ErrorHandler),
        event_bus=container.resolve(EventBus),
    )


def _create_login_controller(container: Container) -> LoginController:
    settings = container.resolve(SettingsManager)
    width, height = _window_size(settings)
    return LoginController(
        container.resolve(AuthService),
        container.resolve(AsyncLoader),
        container.resolve(SessionStore),
        container.resolve(Navigator),
        width=width,
        height=height,
        maximize=bool(settings.get("ui.maximize", False)),
        error_handler=container.resolve(ErrorHandler),
        event_bus=container.resolve(EventBus),
    )


def _create_dashboard_controller(container: Container) -> DashboardController:
    return DashboardController(
        container.resolve(Navigator),
        container.resolve(SessionContext),
        auth=container.resolve(AuthService),
        sessions=container.resolve(SessionStore),
        event_bus=container.resolve(EventBus),
        login_size=_window_size(container.resolve(SettingsManager)),
    )


def bootstrap(
    container: Container,
    *,
    settings: SettingsManager,
    session: Optional[SessionContext] = None,
    catalog: Optional[CatalogService] = None,
    auth: Optional[AuthService] = None,
) -> None:
    """Register all application services in the DI container.

    *session* pre-populates the session store, e.g. to open the dashboard
    without signing in.
    """
    container.register_instance(SettingsManager, settings)
    container.register_instance(SessionStore, SessionStore(session))
    container.register_factory(SessionContext, lambda c: c.resolve(SessionStore).current)
    container.register_singleton(EventBus, EventBus)
    container.register_factory(
        ErrorHandler,
        lambda c: ErrorHandler(logging.getLogger("bibliodesk.errors"), c.resolve(EventBus)),
        lifetime=Lifetime.SINGLETON,
    )
    container.register_factory(AsyncLoader, lambda c: AsyncLoader(), lifetime=Lifetime.SINGLETON)
    if catalog is not None:
        container.register_instance(CatalogService, catalog)
    else:
        container.register_factory(CatalogService, _create_catalog, lifetime=Lifetime.SINGLETON)
    if auth is not None:
        container.register_instance(AuthService, auth)
    else:
        container.register_factory(AuthService, _create_auth, lifetime=Lifetime.SINGLETON)
    container.register_factory(Navigator, _create_navigator, lifetime=Lifetime.SINGLETON)

    container.register_factory(LoginController, _create_login_controller)
    container.register_factory(DashboardController, _create_dashboard_controller)
    container.register_factory(BookListController, _create_book_list_controller)


def create_container(
    settings: SettingsManager,
    *,
    session: Optional[SessionContext] = None,
    catalog: Optional[CatalogService] = None,
    auth: Optional[AuthService] = None,
) -> Container:
    container = Container()
    bootstrap(container, settings=settings, session=session, catalog=catalog, auth=auth)
    return container


__all__ = ["bootstrap", "create_container", "register_views"]
