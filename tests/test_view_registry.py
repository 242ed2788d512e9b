from pathlib import Path

import pytest

pytest.importorskip("PySide6")

from bibliodesk.errors import NavigationError, ViewNotFoundError  # noqa: E402
from bibliodesk.gui.views import StyleResolver, ViewDescriptor, ViewRegistry  # noqa: E402


class Controller:
    pass


def _build(controller):
    return None


def test_register_and_resolve():
    registry = ViewRegistry()
    descriptor = registry.register_view("books", Controller, _build, stylesheets=["styles/list.qss"])

    assert descriptor == ViewDescriptor("books", ("styles/list.qss",))
    definition = registry.resolve("books")
    assert definition.id == "books"
    assert definition.controller_type is Controller
    assert definition.build is _build
    assert registry.has_view("books")
    assert registry.view_ids() == ["books"]


def test_unknown_view_raises_not_found():
    registry = ViewRegistry()

    with pytest.raises(ViewNotFoundError) as excinfo:
        registry.resolve("ghost")

    assert isinstance(excinfo.value, NavigationError)
    assert "ghost" in str(excinfo.value)
    with pytest.raises(ViewNotFoundError):
        registry.descriptor("ghost")


def test_styles_can_be_registered_before_the_view():
    registry = ViewRegistry()
    registry.register_view_style("books", "styles/list.qss")
    registry.register_view("books", Controller, _build, stylesheets=["styles/list.qss", "styles/form.qss"])

    assert registry.descriptor("books").stylesheet_refs == ("styles/list.qss", "styles/form.qss")


def test_empty_identifiers_are_ignored_or_rejected():
    registry = ViewRegistry()
    registry.register_global_style("")
    registry.register_view_style("", "styles/list.qss")

    assert registry.global_styles() == ()
    with pytest.raises(ValueError):
        registry.register_view("", Controller, _build)


def test_descriptor_is_immutable():
    descriptor = ViewDescriptor("books")
    with pytest.raises(AttributeError):
        descriptor.id = "other"  # type: ignore[misc]


class TestStyleResolver:
    def test_first_root_wins(self, tmp_path: Path):
        first = tmp_path / "first"
        second = tmp_path / "second"
        for root, text in ((first, "one"), (second, "two")):
            (root / "styles").mkdir(parents=True)
            (root / "styles" / "app.qss").write_text(text, encoding="utf-8")

        resolver = StyleResolver([first, second])
        path = resolver.resolve("styles/app.qss")

        assert path == (first / "styles" / "app.qss").resolve()
        assert resolver.read(path) == "one"

    def test_missing_reference_resolves_to_none(self, tmp_path: Path):
        assert StyleResolver([tmp_path]).resolve("styles/none.qss") is None

    def test_leading_slash_is_relative_to_roots(self, style_root: Path):
        assert StyleResolver([style_root]).resolve("/styles/app.qss") is not None

    def test_absolute_path(self, style_root: Path):
        target = style_root / "styles" / "form.qss"
        assert StyleResolver().resolve(str(target)) == target.resolve()

    def test_add_root_ignores_duplicates(self, tmp_path: Path):
        resolver = StyleResolver([tmp_path])
        resolver.add_root(tmp_path)
        assert resolver.roots == (tmp_path,)

    def test_bundled_resources_include_default_styles(self):
        resolver = StyleResolver.with_bundled_resources()
        for ref in ("styles/app.qss", "styles/list.qss", "styles/dashboard.qss"):
            assert resolver.resolve(ref) is not None
