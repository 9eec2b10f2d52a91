"""Logging setup.

Configures the root logger once at startup; every module logs through
``logging.getLogger(__name__)``.
"""

import logging
import sys

from jobboard.core.config import settings


def setup_logging() -> None:
    """Install a single stdout handler on the root logger using ``settings.LOG_LEVEL``."""
    log_level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    formatter = logging.Formatter(
        fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S%z",
    )

    handler = logging.StreamHandler(stream=sys.stdout)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.setLevel(log_level)

    # chamadas repetidas (reload, testes) não duplicam handlers
    root.handlers.clear()
    root.addHandler(handler)

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("passlib").setLevel(logging.ERROR)
