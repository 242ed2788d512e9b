"""GUI entry point for the bibliodesk client."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

from PySide6.QtWidgets import QApplication, QMainWindow, QMessageBox

from ..di.bootstrap import create_container
from ..errors.handler import ErrorHandler, ErrorSeverity
from ..settings.manager import SettingsManager
from .navigator import Navigator
from .screens.view_ids import APP_TITLE, LOGIN_VIEW
from .utils.console_logger import configure_logging

LOGGER = logging.getLogger(__name__)

MIN_WIDTH = 800
MIN_HEIGHT = 480


def main(argv: list[str] | None = None, *, settings_path: Optional[Path] = None) -> int:
    """Launch the Qt application and return the exit code."""

    arguments = list(sys.argv if argv is None else argv)
    app = QApplication.instance() or QApplication(arguments)

    settings = SettingsManager(settings_path)
    settings.load()
    configure_logging(settings.get("logging.level", "INFO"))

    container = create_container(settings)

    window = QMainWindow()
    window.setMinimumSize(MIN_WIDTH, MIN_HEIGHT)

    def _show_error(message: str, severity: ErrorSeverity) -> None:
        if severity == ErrorSeverity.CRITICAL:
            QMessageBox.critical(window, "Error", message)
        else:
            window.statusBar().showMessage(message, 8000)

    container.resolve(ErrorHandler).register_ui_callback(_show_error)

    navigator: Navigator = container.resolve(Navigator)
    navigator.attach_window(window)
    navigator.go_to(
        LOGIN_VIEW,
        title=f"{APP_TITLE} - Sign in",
        width=settings.get("ui.window_width", 1000),
        height=settings.get("ui.window_height", 600),
    )
    LOGGER.info("BiblioDesk started with settings from %s", settings.path)
    return app.exec()


if __name__ == "__main__":  # pragma: no cover - manual launch
    raise SystemExit(main())
