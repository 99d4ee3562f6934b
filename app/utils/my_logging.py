# app/utils/my_logging.py
"""Logging configuration"""
import logging
import sys
from app.config.settings import get_settings

# Loggers that flood the output at INFO level
NOISY_LOGGERS = (
    "sqlalchemy",
    "sqlalchemy.engine",
    "sqlalchemy.pool",
    "alembic",
    "httpx",
    "uvicorn.access",
)


def setup_logging(verbose=True):
    """Configure root logging for the API process and CLI scripts"""
    settings = get_settings()

    level = logging.getLevelName(settings.LOG_LEVEL.upper()) if verbose else logging.WARNING
    if not isinstance(level, int):
        level = logging.INFO

    logging.basicConfig(
        level=level,
        format=settings.LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    if not verbose:
        for name in NOISY_LOGGERS:
            noisy = logging.getLogger(name)
            noisy.setLevel(logging.ERROR)
            noisy.propagate = False

    logging.getLogger(__name__).debug("Logging configured at level %s", logging.getLevelName(level))
