from __future__ import annotations

import logging

from rich.logging import RichHandler

from .config import settings


def get_logger(name: str | None = None, level: str | None = None) -> logging.Logger:
    """Return a logger that writes through a RichHandler.

    Handlers are attached once per logger name; later calls only adjust the level.
    """
    logger = logging.getLogger(name or "storefront")
    log_level = logging.getLevelName((level or settings.log_level).upper())
    if not isinstance(log_level, int):
        log_level = logging.INFO
    logger.setLevel(log_level)

    if not logger.handlers:
        handler = RichHandler(
            show_time=True,
            show_level=True,
            show_path=False,
            rich_tracebacks=True,
            log_time_format="[%X]",
        )
        handler.setFormatter(logging.Formatter("[%(name)s]  %(message)s"))
        logger.addHandler(handler)
        logger.propagate = False

    return logger
