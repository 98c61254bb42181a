"""Logging setup for the tui_listbox package.

Log records go to Textual's devtools console (``textual console``) so they
never draw over the terminal UI, and optionally to a file.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from textual.logging import TextualHandler

PACKAGE_LOGGER = "tui_listbox"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _resolve_level(value: str | int | None, debug: bool = False) -> int:
    if debug:
        return logging.DEBUG
    if value is None:
        return logging.WARNING
    if isinstance(value, int):
        return value
    try:
        return int(value)
    except (TypeError, ValueError):
        pass
    resolved = logging.getLevelName(value.upper())
    return resolved if isinstance(resolved, int) else logging.WARNING


def configure_logging(
    *,
    level: str | int | None = None,
    debug: bool = False,
    log_file: str | Path | None = None,
    force: bool = False,
) -> logging.Logger:
    """Attach handlers to the package logger.

    ``TUI_LISTBOX_LOG_LEVEL`` and ``TUI_LISTBOX_LOG_FILE`` fill in whatever
    the caller leaves unset. Calling again is a no-op unless *force* is set.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    if logger.handlers and not force:
        return logger
    if force:
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()

    resolved_level = _resolve_level(level or os.environ.get("TUI_LISTBOX_LOG_LEVEL"), debug)
    resolved_file = log_file or os.environ.get("TUI_LISTBOX_LOG_FILE")

    logger.setLevel(resolved_level)
    logger.addHandler(TextualHandler())
    if resolved_file:
        file_handler = logging.FileHandler(resolved_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(file_handler)
    return logger
