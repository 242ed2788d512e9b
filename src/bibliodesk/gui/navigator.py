"""Navigator: resolve views, build their controllers and swap window content."""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple, TypeVar

from PySide6.QtCore import QObject, Signal
from PySide6.QtWidgets import QMainWindow, QStackedWidget, QVBoxLayout, QWidget

from ..errors import (
    ContentAreaNotRegisteredError,
    NavigatorNotAttachedError,
    ViewLoadError,
)
from ..errors.handler import ErrorHandler, ErrorSeverity
from ..events.app_events import ViewShownEvent
from ..events.bus import EventBus
from .views import (
    ControllerBinding,
    StyleResolver,
    ViewDefinition,
    ViewRegistry,
    default_controller_factory,
)

LOGGER = logging.getLogger(__name__)

C = TypeVar("C")

MAIN_CONTENT_AREA = "main"


class NavigatorState(Enum):
    UNLOADED = "unloaded"
    STANDALONE = "standalone"
    EMBEDDED = "embedded"


class Navigator(QObject):
    """Compose and display views inside one main window.

    ``go_to`` replaces the whole window content (the *scene*) and its
    stylesheet.  ``show_main_view`` / ``show_named_view`` replace only the
    content of a registered container inside the current scene and append any
    stylesheets the embedded view needs.

    Navigation is all-or-nothing: the controller and widget are fully built
    before anything on screen is touched, so a failure leaves the previous
    view in place.

    Controllers may define ``on_view_shown()``; it is called once the view is
    on screen.  The navigation is already committed at that point, so a
    failing hook is reported through the error handler (or logged) and never
    raised to the caller.

    Content areas registered while an embedded view is built belong to that
    view and are unregistered when it is replaced.
    """

    viewShown = Signal(str, str)

    def __init__(
        self,
        registry: Optional[ViewRegistry] = None,
        *,
        style_resolver: Optional[StyleResolver] = None,
        controller_factory: Optional[ControllerBinding] = None,
        window: Optional[QMainWindow] = None,
        event_bus: Optional[EventBus] = None,
        error_handler: Optional[ErrorHandler] = None,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self._registry = registry or ViewRegistry()
        self._styles = style_resolver or StyleResolver.with_bundled_resources()
        self._controller_factory: Optional[ControllerBinding] = controller_factory
        self._window = window
        self._events = event_bus
        self._errors = error_handler

        self._state = NavigatorState.UNLOADED
        self._active_view_id: Optional[str] = None
        self._controller: Any = None
        self._content_areas: Dict[str, QWidget] = {}
        self._embedded: Dict[str, Tuple[str, Any]] = {}
        self._owned_areas: Dict[str, Dict[str, QWidget]] = {}
        self._applied: Dict[Path, str] = {}

    # ------------------------------------------------------------------
    # Setup
    # ------------------------------------------------------------------
    def attach_window(self, window: QMainWindow) -> None:
        self._window = window

    def set_controller_factory(self, factory: Optional[ControllerBinding]) -> None:
        self._controller_factory = factory

    def register_global_style(self, ref: str) -> None:
        self._registry.register_global_style(ref)

    def register_view_style(self, view_id: str, ref: str) -> None:
        self._registry.register_view_style(view_id, ref)

    def register_content_area(self, name: str, container: QWidget) -> None:
        self._content_areas[name] = container

    def register_main_content_area(self, container: QWidget) -> None:
        self.register_content_area(MAIN_CONTENT_AREA, container)

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------
    @property
    def registry(self) -> ViewRegistry:
        return self._registry

    @property
    def state(self) -> NavigatorState:
        return self._state

    @property
    def window(self) -> Optional[QMainWindow]:
        return self._window

    @property
    def active_view_id(self) -> Optional[str]:
        return self._active_view_id

    @property
    def current_controller(self) -> Any:
        return self._controller

    def embedded_view_id(self, area: str = MAIN_CONTENT_AREA) -> Optional[str]:
        entry = self._embedded.get(area)
        return entry[0] if entry else None

    def embedded_controller(self, area: str = MAIN_CONTENT_AREA) -> Any:
        entry = self._embedded.get(area)
        return entry[1] if entry else None

    def has_content_area(self, name: str) -> bool:
        return name in self._content_areas

    def applied_stylesheets(self) -> Tuple[Path, ...]:
        """Stylesheets currently applied to the window, in application order."""

        return tuple(self._applied)

    def compose_stylesheets(self, view_id: str) -> List[Path]:
        """Resolved global + view stylesheets for *view_id*, without duplicates."""

        descriptor = self._registry.descriptor(view_id)
        return self._resolve_refs([*self._registry.global_styles(), *descriptor.stylesheet_refs])

    # ------------------------------------------------------------------
    # Standalone navigation
    # ------------------------------------------------------------------
    def go_to(
        self,
        view_id: str,
        title: Optional[str] = None,
        width: Optional[float] = None,
        height: Optional[float] = None,
        maximize: bool = False,
        configure: Optional[Callable[[C], None]] = None,
    ) -> C:
        """Replace the whole window content with *view_id* and show the window."""

        window = self._window
        if window is None:
            raise NavigatorNotAttachedError("Navigator has no window; call attach_window() first")

        definition = self._registry.resolve(view_id)

        # Content areas belong to the scene being replaced; the new view
        # registers its own while it is built.
        previous_areas = self._content_areas
        self._content_areas = {}
        try:
            controller, widget = self._materialise(definition, configure)
            composed = self.compose_stylesheets(view_id)
            sheets = self._read_styles(view_id, composed)
        except BaseException:
            self._content_areas = previous_areas
            raise

        old = window.takeCentralWidget()
        window.setCentralWidget(widget)
        if old is not None:
            old.deleteLater()

        self._applied = sheets
        window.setStyleSheet(self._stylesheet_text())
        LOGGER.debug("Applied scene stylesheets for %s: %s", view_id, list(self._applied))

        if title is not None:
            window.setWindowTitle(title)
        self._resize(window, width, height, maximize)

        self._state = NavigatorState.STANDALONE
        self._active_view_id = view_id
        self._controller = controller
        self._embedded = {}
        self._owned_areas = {}
        LOGGER.info("Showing view %s", view_id)
        self._announce(view_id, "", controller)
        return controller

    # ------------------------------------------------------------------
    # Embedded navigation
    # ------------------------------------------------------------------
    def show_main_view(self, view_id: str, configure: Optional[Callable[[C], None]] = None) -> C:
        return self.show_named_view(MAIN_CONTENT_AREA, view_id, configure)

    def show_named_view(
        self,
        area: str,
        view_id: str,
        configure: Optional[Callable[[C], None]] = None,
    ) -> C:
        """Replace the content of the container registered as *area*."""

        container = self._content_areas.get(area)
        if container is None:
            raise ContentAreaNotRegisteredError(area)

        definition = self._registry.resolve(view_id)

        previous_areas = dict(self._content_areas)
        try:
            controller, widget = self._materialise(definition, configure)
            resolved = self._resolve_refs(definition.descriptor.stylesheet_refs)
            added = self._read_styles(view_id, [p for p in resolved if p not in self._applied])
        except BaseException:
            self._content_areas = previous_areas
            raise
        registered = {
            name: widget_area
            for name, widget_area in self._content_areas.items()
            if previous_areas.get(name) is not widget_area
        }

        self._release_areas(area)
        self._owned_areas[area] = registered
        self._replace_content(container, widget)
        if added:
            self._applied.update(added)
            if self._window is not None:
                self._window.setStyleSheet(self._stylesheet_text())
            LOGGER.debug("Appended stylesheets for %s: %s", view_id, list(added))

        self._embedded[area] = (view_id, controller)
        self._state = NavigatorState.EMBEDDED
        LOGGER.info("Showing view %s in area %s", view_id, area)
        self._announce(view_id, area, controller)
        return controller

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _materialise(
        self,
        definition: ViewDefinition,
        configure: Optional[Callable[[Any], None]],
    ) -> Tuple[Any, QWidget]:
        view_id = definition.id
        controller_type = definition.controller_type
        factory = self._controller_factory or default_controller_factory
        try:
            controller = factory(controller_type)
        except Exception as exc:
            LOGGER.error("Error creating controller %s for view %s", controller_type.__name__, view_id)
            raise ViewLoadError(
                view_id, f"cannot instantiate controller {controller_type.__name__}: {exc}"
            ) from exc
        if controller is None:
            raise ViewLoadError(view_id, f"controller factory returned None for {controller_type.__name__}")

        if configure is not None:
            try:
                configure(controller)
            except Exception as exc:
                LOGGER.error("Error configuring controller %s for view %s", controller_type.__name__, view_id)
                raise ViewLoadError(
                    view_id, f"cannot configure controller {controller_type.__name__}: {exc}"
                ) from exc

        try:
            widget = definition.build(controller)
        except Exception as exc:
            raise ViewLoadError(view_id, str(exc) or exc.__class__.__name__) from exc
        if not isinstance(widget, QWidget):
            raise ViewLoadError(view_id, f"builder returned {type(widget).__name__}, expected QWidget")
        return controller, widget

    def _resolve_refs(self, refs: Iterable[str]) -> List[Path]:
        resolved: List[Path] = []
        for ref in refs:
            path = self._styles.resolve(ref)
            if path is None:
                LOGGER.debug("Stylesheet %s not found; skipping", ref)
                continue
            if path not in resolved:
                resolved.append(path)
        return resolved

    def _read_styles(self, view_id: str, paths: Iterable[Path]) -> Dict[Path, str]:
        sheets: Dict[Path, str] = {}
        for path in paths:
            try:
                sheets[path] = self._styles.read(path)
            except OSError as exc:
                raise ViewLoadError(view_id, f"cannot read stylesheet {path}: {exc}") from exc
        return sheets

    def _release_areas(self, area: str) -> None:
        """Unregister the areas owned by the view embedded in *area*, recursively."""

        for name, container in self._owned_areas.pop(area, {}).items():
            self._release_areas(name)
            self._embedded.pop(name, None)
            if self._content_areas.get(name) is container:
                del self._content_areas[name]
                LOGGER.debug("Content area %s released with its host view", name)

    def _stylesheet_text(self) -> str:
        return "\n".join(self._applied.values())

    @staticmethod
    def _replace_content(container: QWidget, widget: QWidget) -> None:
        if isinstance(container, QStackedWidget):
            while container.count():
                old = container.widget(0)
                container.removeWidget(old)
                old.deleteLater()
            container.addWidget(widget)
            container.setCurrentWidget(widget)
            return

        layout = container.layout()
        if layout is None:
            layout = QVBoxLayout(container)
            layout.setContentsMargins(0, 0, 0, 0)
        while layout.count():
            item = layout.takeAt(0)
            old = item.widget()
            if old is not None:
                old.setParent(None)
                old.deleteLater()
        layout.addWidget(widget)

    @staticmethod
    def _resize(
        window: QMainWindow,
        width: Optional[float],
        height: Optional[float],
        maximize: bool,
    ) -> None:
        if maximize:
            window.showMaximized()
            return
        if window.isMaximized():
            window.showNormal()
        target_w = int(width) if width is not None else window.width()
        target_h = int(height) if height is not None else window.height()
        window.resize(target_w, target_h)
        window.show()

    def _announce(self, view_id: str, area: str, controller: Any) -> None:
        self.viewShown.emit(view_id, area)
        if self._events is not None:
            self._events.publish(ViewShownEvent(view_id=view_id, area=area))
        hook = getattr(controller, "on_view_shown", None)
        if not callable(hook):
            return
        try:
            hook()
        except Exception as exc:
            if self._errors is None:
                LOGGER.exception("on_view_shown failed for view %s", view_id)
            else:
                self._errors.handle(
                    exc,
                    ErrorSeverity.ERROR,
                    {"view": view_id, "area": area, "stage": "on_view_shown"},
                )


__all__ = ["MAIN_CONTENT_AREA", "Navigator", "NavigatorState"]
