import logging

import pytest

from bibliodesk.gui.utils.console_logger import CONSOLE_HANDLER, ensure_console_logger


@pytest.fixture
def logger():
    logger = logging.getLogger("bibliodesk.tests.console")
    yield logger
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


def test_installs_single_named_handler(logger):
    first = ensure_console_logger(logger, level="DEBUG")
    second = ensure_console_logger(logger, level=logging.WARNING)

    assert first is second
    assert [h.name for h in logger.handlers] == [CONSOLE_HANDLER]
    assert logger.level == logging.WARNING


def test_rejects_unknown_level(logger):
    with pytest.raises(ValueError):
        ensure_console_logger(logger, level="LOUD")
