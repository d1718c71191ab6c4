"""Logging setup for the DollersElectro client."""

import logging
import sys
from pathlib import Path
from typing import Optional

APP_LOGGER = "dollers_electro"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logger(
    name: str = APP_LOGGER,
    level: int | str = logging.INFO,
    log_file: Optional[Path] = None,
) -> logging.Logger:
    """
    Attach handlers to the named logger once and return it.

    Args:
        name: Logger name.
        level: Numeric level or a level name such as "DEBUG".
        log_file: Also write to this file when given; parent dirs are created.

    Returns:
        The configured logger. Later calls return it unchanged.
    """
    log = logging.getLogger(name)
    if log.handlers:
        return log

    log.setLevel(level)
    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(path, encoding="utf-8"))
    for handler in handlers:
        handler.setFormatter(formatter)
        log.addHandler(handler)
    return log


def get_logger(name: str = APP_LOGGER) -> logging.Logger:
    """Shared application logger; configure it once with setup_logger."""
    return logging.getLogger(name)
