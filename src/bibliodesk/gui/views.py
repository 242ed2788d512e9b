"""View definitions, stylesheet lookup and controller bindings used by the navigator."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Tuple, Type

from ..di.container import Container
from ..errors import ViewNotFoundError

LOGGER = logging.getLogger(__name__)

ControllerBinding = Callable[[type], Any]
ViewBuilder = Callable[[Any], Any]


@dataclass(frozen=True)
class ViewDescriptor:
    """Registered identity of a navigable screen."""

    id: str
    stylesheet_refs: Tuple[str, ...] = ()


@dataclass(frozen=True)
class ViewDefinition:
    """Everything needed to materialise a view.

    ``build`` receives the (already configured) controller and returns the
    root ``QWidget`` of the view.
    """

    descriptor: ViewDescriptor
    controller_type: type
    build: ViewBuilder

    @property
    def id(self) -> str:
        return self.descriptor.id


def _append_unique(target: List[str], ref: str) -> None:
    if ref not in target:
        target.append(ref)


class ViewRegistry:
    """Map symbolic view identifiers to definitions and stylesheet references."""

    def __init__(self) -> None:
        self._definitions: Dict[str, Tuple[type, ViewBuilder]] = {}
        self._view_styles: Dict[str, List[str]] = {}
        self._global_styles: List[str] = []

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------
    def register_view(
        self,
        view_id: str,
        controller_type: type,
        build: ViewBuilder,
        *,
        stylesheets: Iterable[str] = (),
    ) -> ViewDescriptor:
        if not view_id:
            raise ValueError("view_id must be a non-empty string")
        self._definitions[view_id] = (controller_type, build)
        for ref in stylesheets:
            self.register_view_style(view_id, ref)
        return self.descriptor(view_id)

    def register_global_style(self, ref: str) -> None:
        if ref:
            _append_unique(self._global_styles, ref)

    def register_view_style(self, view_id: str, ref: str) -> None:
        if not view_id or not ref:
            return
        _append_unique(self._view_styles.setdefault(view_id, []), ref)

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------
    def has_view(self, view_id: str) -> bool:
        return view_id in self._definitions

    def view_ids(self) -> List[str]:
        return list(self._definitions)

    def global_styles(self) -> Tuple[str, ...]:
        return tuple(self._global_styles)

    def view_styles(self, view_id: str) -> Tuple[str, ...]:
        return tuple(self._view_styles.get(view_id, ()))

    def descriptor(self, view_id: str) -> ViewDescriptor:
        if view_id not in self._definitions:
            raise ViewNotFoundError(view_id)
        return ViewDescriptor(id=view_id, stylesheet_refs=self.view_styles(view_id))

    def resolve(self, view_id: str) -> ViewDefinition:
        """Return the definition for *view_id* or raise :class:`ViewNotFoundError`."""

        try:
            controller_type, build = self._definitions[view_id]
        except KeyError:
            raise ViewNotFoundError(view_id) from None
        return ViewDefinition(
            descriptor=self.descriptor(view_id),
            controller_type=controller_type,
            build=build,
        )


class StyleResolver:
    """Resolve stylesheet references against an ordered list of directories.

    References are relative paths such as ``"styles/list.qss"`` (a leading
    slash is ignored) or existing absolute files.  The first root containing
    the file wins; unknown references resolve to ``None``.
    """

    def __init__(self, roots: Sequence[Path] = ()) -> None:
        self._roots: List[Path] = [Path(root) for root in roots]

    @classmethod
    def with_bundled_resources(cls, extra_roots: Sequence[Path] = ()) -> "StyleResolver":
        bundled = Path(str(resources.files("bibliodesk") / "resources"))
        return cls([bundled, *extra_roots])

    @property
    def roots(self) -> Tuple[Path, ...]:
        return tuple(self._roots)

    def add_root(self, root: Path) -> None:
        root = Path(root)
        if root not in self._roots:
            self._roots.append(root)

    def resolve(self, ref: str) -> Optional[Path]:
        candidate = Path(ref)
        if candidate.is_absolute() and candidate.is_file():
            return candidate.resolve()
        for root in self._roots:
            path = root / ref.lstrip("/")
            if path.is_file():
                return path.resolve()
        return None

    def read(self, path: Path) -> str:
        return path.read_text(encoding="utf-8")


# ----------------------------------------------------------------------
# Controller bindings
# ----------------------------------------------------------------------
def default_controller_factory(controller_type: Type) -> Any:
    """Instantiate *controller_type* without arguments."""

    return controller_type()


class ContainerControllerFactory:
    """Build controllers through the DI container.

    Types registered in the container are resolved there so they receive
    their constructor-injected collaborators; anything else falls back to
    :func:`default_controller_factory`.
    """

    def __init__(self, container: Container) -> None:
        self._container = container

    def __call__(self, controller_type: Type) -> Any:
        if self._container.is_registered(controller_type):
            return self._container.resolve(controller_type)
        LOGGER.debug("No binding for %s; using no-argument construction", controller_type.__name__)
        return default_controller_factory(controller_type)


__all__ = [
    "ContainerControllerFactory",
    "ControllerBinding",
    "StyleResolver",
    "ViewBuilder",
    "ViewDefinition",
    "ViewDescriptor",
    "ViewRegistry",
    "default_controller_factory",
]
