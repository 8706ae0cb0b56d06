"""Logging configuration for the fintrack package.

- ``configure_logging(level)``: attach a single rich handler to the package
  root logger (``"fintrack"``). Called once by the CLI at startup.
- ``get_logger(name)``: acquire a logger, making sure the package root has at
  least a ``NullHandler`` when nothing has been configured.

Library modules never attach handlers themselves.
"""

import logging
import os

from rich.console import Console
from rich.logging import RichHandler

_PKG_LOGGER_NAME = "fintrack"
_CONFIGURED = False


def parse_level(level: int | str | None) -> int:
    """Resolve a level given as int, numeric string or level name.

    None falls back to ``FINTRACK_LOG_LEVEL`` and then WARNING.
    """
    if isinstance(level, int):
        return level
    if isinstance(level, str):
        level = level.strip().upper()
        if level.isdigit():
            return int(level)
        numeric = getattr(logging, level, None)
        if isinstance(numeric, int):
            return numeric
        return logging.WARNING
    env_val = os.getenv("FINTRACK_LOG_LEVEL")
    if env_val:
        return parse_level(env_val)
    return logging.WARNING


def configure_logging(level: int | str | None = None, console: Console | None = None) -> None:
    """Configure the package root logger exactly once.

    Args:
        level: Level as int or name (e.g. "DEBUG").
        console: Rich console to log to; defaults to stderr.
    """
    global _CONFIGURED
    if _CONFIGURED:
        return

    logger = logging.getLogger(_PKG_LOGGER_NAME)
    for h in list(logger.handlers):
        if isinstance(h, logging.NullHandler):
            logger.removeHandler(h)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=False,
    )
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))

    numeric = parse_level(level)
    handler.setLevel(numeric)
    logger.setLevel(numeric)
    logger.addHandler(handler)
    logger.propagate = False

    _CONFIGURED = True


def get_logger(name: str) -> logging.Logger:
    """Return a logger by name with library-safe defaults."""
    pkg_logger = logging.getLogger(_PKG_LOGGER_NAME)
    if not _CONFIGURED and not pkg_logger.handlers:
        pkg_logger.addHandler(logging.NullHandler())
    return logging.getLogger(name)
