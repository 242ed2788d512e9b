from __future__ import annotations

import json
import sys
from pathlib import Path

import pytest

pytest.importorskip("PySide6.QtTest")

from PySide6.QtTest import QSignalSpy  # noqa: E402

from bibliodesk.errors import SettingsLoadError, SettingsValidationError  # noqa: E402
from bibliodesk.settings.manager import SettingsManager, default_settings_path  # noqa: E402
from bibliodesk.settings.schema import DEFAULT_SETTINGS, merge_with_defaults  # noqa: E402


def test_load_creates_file_with_defaults(settings_path: Path) -> None:
    manager = SettingsManager(path=settings_path)
    manager.load()

    assert settings_path.exists()
    assert manager.get("ui.page_size") == 10
    assert manager.get("api.use_mock") is True
    assert json.loads(settings_path.read_text(encoding="utf-8")) == DEFAULT_SETTINGS


def test_set_persists_and_notifies(settings_path: Path, qapp) -> None:
    manager = SettingsManager(path=settings_path)
    manager.load()
    spy = QSignalSpy(manager.settingsChanged)

    manager.set("ui.page_size", 25)
    qapp.processEvents()

    assert spy.count() == 1
    assert manager.get("ui.page_size") == 25
    stored = json.loads(settings_path.read_text(encoding="utf-8"))
    assert stored["ui"]["page_size"] == 25
    assert stored["ui"]["window_width"] == 1000


def test_invalid_value_is_rejected_and_previous_kept(settings_path: Path) -> None:
    manager = SettingsManager(path=settings_path)
    manager.load()

    with pytest.raises(SettingsValidationError):
        manager.set("ui.page_size", 0)

    assert manager.get("ui.page_size") == 10


def test_partial_file_is_merged_with_defaults(settings_path: Path) -> None:
    settings_path.write_text(json.dumps({"ui": {"page_size": 5}, "extra": "kept"}), encoding="utf-8")
    manager = SettingsManager(path=settings_path)
    manager.load()

    assert manager.get("ui.page_size") == 5
    assert manager.get("ui.window_height") == 600
    assert manager.get("extra") == "kept"


def test_unreadable_file_raises_load_error(settings_path: Path) -> None:
    settings_path.write_text("{not json", encoding="utf-8")

    with pytest.raises(SettingsLoadError):
        SettingsManager(path=settings_path).load()


def test_non_object_file_raises_load_error(settings_path: Path) -> None:
    settings_path.write_text("[1, 2]", encoding="utf-8")

    with pytest.raises(SettingsLoadError):
        SettingsManager(path=settings_path).load()


def test_invalid_file_raises_validation_error(settings_path: Path) -> None:
    settings_path.write_text(json.dumps({"logging": {"level": "LOUD"}}), encoding="utf-8")

    with pytest.raises(SettingsValidationError):
        SettingsManager(path=settings_path).load()


def test_get_missing_key_returns_default(settings_path: Path) -> None:
    manager = SettingsManager(path=settings_path)
    manager.load()

    assert manager.get("ui.unknown", "fallback") == "fallback"
    assert manager.get("ui.page_size.deeper") is None


def test_path_values_are_stored_as_text(settings_path: Path, tmp_path: Path) -> None:
    manager = SettingsManager(path=settings_path)
    manager.load()

    manager.set("ui.styles_dirs", [tmp_path])

    assert manager.get("ui.styles_dirs") == [str(tmp_path)]


def test_snapshot_is_a_copy(settings_path: Path) -> None:
    manager = SettingsManager(path=settings_path)
    manager.load()
    snapshot = manager.snapshot()
    snapshot["ui"]["page_size"] = 99

    assert manager.get("ui.page_size") == 10


@pytest.mark.skipif(sys.platform in ("win32", "darwin"), reason="XDG layout only")
def test_default_path_honours_xdg(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))

    assert default_settings_path() == tmp_path / "bibliodesk" / "settings.json"


def test_merge_with_defaults_without_data() -> None:
    assert merge_with_defaults(None) == DEFAULT_SETTINGS
