"""Handler setup for the ``formscan`` logger.

Modules only call ``logging.getLogger(__name__)``; handlers are attached
here once, by the CLI or by an application embedding the package.
"""

from __future__ import annotations

import logging
from logging import Logger
from typing import Optional

from ..config import LoggingConfig

LOGGER_NAME = "formscan"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(config: Optional[LoggingConfig] = None) -> Logger:
    """Attach a console handler, and a file handler when ``log_dir`` is set.

    Without a config only the console handler is added, so library callers
    do not get a ``logs/`` directory created for them. Later calls return
    the configured logger unchanged.
    """
    logger = logging.getLogger(LOGGER_NAME)
    if getattr(logger, "_configured", False):
        return logger

    cfg = config or LoggingConfig(log_dir=None)
    level = logging.getLevelName((cfg.level or "INFO").upper())
    if not isinstance(level, int):
        level = logging.INFO
    logger.setLevel(level)

    handlers: list[logging.Handler] = [logging.StreamHandler()]
    log_path = cfg.file_path()
    if log_path is not None:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(str(log_path), encoding="utf-8"))

    fmt = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(fmt)
        logger.addHandler(handler)

    logger._configured = True  # type: ignore[attr-defined]
    logger.debug("Logging configured (file=%s)", log_path)
    return logger
