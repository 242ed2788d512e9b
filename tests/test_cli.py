import json

import pytest

pytest.importorskip("PySide6")

from typer.testing import CliRunner  # noqa: E402

from bibliodesk import cli  # noqa: E402

runner = CliRunner()


def test_views_lists_registered_views_with_styles(settings_path):
    result = runner.invoke(cli.app, ["views", "--settings", str(settings_path)])

    assert result.exit_code == 0, result.output
    assert "login" in result.output
    assert "login.qss" in result.output
    assert "dashboard" in result.output
    assert "books" in result.output
    assert "list.qss" in result.output
    assert "app.qss" in result.output


def test_settings_prints_effective_values(settings_path):
    result = runner.invoke(cli.app, ["settings", "--settings", str(settings_path)])

    assert result.exit_code == 0, result.output
    assert "page_size" in result.output
    assert settings_path.exists()


def test_settings_single_key(settings_path):
    result = runner.invoke(cli.app, ["settings", "ui.page_size", "--settings", str(settings_path)])

    assert result.exit_code == 0, result.output
    assert result.output.strip() == "10"


def test_settings_unknown_key_exits_with_error(settings_path):
    result = runner.invoke(cli.app, ["settings", "ui.nothing", "--settings", str(settings_path)])

    assert result.exit_code == 1


def test_invalid_settings_file_exits_with_error(settings_path):
    settings_path.write_text(json.dumps({"ui": {"page_size": -3}}), encoding="utf-8")

    result = runner.invoke(cli.app, ["views", "--settings", str(settings_path)])

    assert result.exit_code == 1
    assert "Error" in result.output


def test_run_launches_gui(monkeypatch, settings_path):
    calls = []

    def fake_main(argv, *, settings_path=None):
        calls.append(settings_path)
        return 0

    monkeypatch.setattr("bibliodesk.gui.main.main", fake_main)

    result = runner.invoke(cli.app, ["run", "--settings", str(settings_path)])

    assert result.exit_code == 0, result.output
    assert calls == [settings_path]
