from __future__ import annotations

import logging

from rich.logging import RichHandler

from responsive_grid.logging_config import PACKAGE_LOGGER, setup_logging


def test_setup_logging_sets_level() -> None:
    logger = setup_logging("debug")

    assert logger.name == PACKAGE_LOGGER
    assert logger.level == logging.DEBUG
    setup_logging("WARNING")
    assert logger.level == logging.WARNING


def test_setup_logging_replaces_handler() -> None:
    setup_logging("INFO")
    logger = setup_logging("INFO")

    rich_handlers = [h for h in logger.handlers if isinstance(h, RichHandler)]
    assert len(rich_handlers) == 1
