"""Logging setup for the ``imudev`` logger hierarchy.

Library modules only call :func:`get_logger`; handlers are attached by the
application through :func:`configure_logging`.
"""
from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import List, Optional, Union

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def get_logger(name: str = "imudev") -> logging.Logger:
    return logging.getLogger(name)


def configure_logging(
    level: Union[int, str] = logging.INFO,
    log_file: Optional[Union[str, Path]] = None,
    name: str = "imudev",
) -> logging.Logger:
    """Send ``name`` and its children to stdout and, optionally, ``log_file``.

    Calling it again replaces the handlers of the previous call. The log
    file is appended to.

    Args:
        level: Level number or name, e.g. ``"DEBUG"`` to see per-frame details
        log_file: Optional file that receives the same records
        name: Root of the logger hierarchy to configure

    Returns:
        The configured logger
    """
    if isinstance(level, str):
        level = level.upper()
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file is not None:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    logger = logging.getLogger(name)
    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()

    formatter = logging.Formatter(LOG_FORMAT, DATE_FORMAT)
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
    return logger
