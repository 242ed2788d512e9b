import os
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"

if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

# Widgets are created in tests; never require a display server.
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


@pytest.fixture
def settings_path(tmp_path: Path) -> Path:
    return tmp_path / "settings.json"


@pytest.fixture
def style_root(tmp_path: Path) -> Path:
    """Directory with a small set of stylesheets for navigator tests."""

    root = tmp_path / "resources"
    styles = root / "styles"
    styles.mkdir(parents=True)
    (styles / "app.qss").write_text("QWidget { color: black; }", encoding="utf-8")
    (styles / "list.qss").write_text("QTableView { color: blue; }", encoding="utf-8")
    (styles / "form.qss").write_text("QLineEdit { color: green; }", encoding="utf-8")
    return root
