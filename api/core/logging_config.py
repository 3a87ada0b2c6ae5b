"""
Process-wide logging setup.

Modules log through `logging.getLogger(__name__)`; this only configures the
root handler and quiets chatty third-party loggers.
"""

from __future__ import annotations

import logging

from . import settings

LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s: %(message)s"

_NOISY_LOGGERS = {
    "httpx": "WARNING",
    "httpcore": "WARNING",
    "asyncpg": "WARNING",
}


def configure_logging() -> None:
    level = getattr(logging, settings.log_level(), logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT)

    for name, level_name in _NOISY_LOGGERS.items():
        logging.getLogger(name).setLevel(getattr(logging, level_name))
