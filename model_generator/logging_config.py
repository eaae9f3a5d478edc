"""Logging setup for model_generator.

Library modules only ask for a logger; handlers are installed once by the
entry point (the CLI) through ``setup_logging``.
"""

import logging
from pathlib import Path

from rich.logging import RichHandler

PACKAGE_LOGGER = "model_generator"
DEFAULT_LOG_LEVEL = "WARNING"

FILE_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def get_logger(name: str) -> logging.Logger:
    """Return a logger that lives under the package logger hierarchy.

    Args:
        name: Usually ``__name__`` of the calling module.

    Returns:
        Configured logger instance.
    """
    if not name.startswith(PACKAGE_LOGGER):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)


def setup_logging(
    level: str | int = DEFAULT_LOG_LEVEL, log_file: str | Path | None = None
) -> logging.Logger:
    """Install console (rich) and optional file handlers on the package logger.

    Calling it again replaces previously installed handlers.

    Args:
        level: Log level name or number.
        log_file: Optional path of a plain-text log file.

    Returns:
        The package logger.
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.WARNING)

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console_handler = RichHandler(
        level=level, show_path=False, rich_tracebacks=True, markup=False
    )
    logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT, LOG_DATE_FORMAT))
        logger.addHandler(file_handler)

    logger.propagate = False
    logger.debug("Logging configured (level=%s, file=%s)", level, log_file)
    return logger
