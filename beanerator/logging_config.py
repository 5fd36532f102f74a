"""Logging setup shared by every beanerator module.

Modules obtain their logger with ``get_logger(__name__)``; the CLI calls
``setup_logging`` once to attach handlers to the ``beanerator`` root logger.
"""

import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER_NAME = "beanerator"
FILE_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def setup_logging(
    level: str | int = "WARNING",
    log_file: str | Path | None = None,
    console: Console | None = None,
) -> logging.Logger:
    """Configure the ``beanerator`` logger.

    Args:
        level: Log level name (``"DEBUG"``, ``"INFO"``...) or number.
        log_file: Optional file that receives a plain-text copy of all records.
        console: Rich console for the terminal handler (defaults to stderr).

    Returns:
        The configured root logger of the package.
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.WARNING)

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)

    # Calling setup twice must not duplicate output
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    rich_handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    rich_handler.setLevel(level)
    logger.addHandler(rich_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        file_handler.setLevel(level)
        logger.addHandler(file_handler)

    logger.propagate = False
    return logger


def get_logger(name: str) -> logging.Logger:
    """Return a logger for ``name``, normally a module's ``__name__``."""
    return logging.getLogger(name)
