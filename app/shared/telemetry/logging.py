"""Logging for the reset flow.

Modules log through get_logger(__name__). Passwords and tokens are never
passed to a logger; emails are logged at INFO on staging events.
httpx and httpcore log every request line at INFO, so they are held at
WARNING unless the process runs at DEBUG.
"""

import logging
import sys

from app.core.config import get_settings

HTTP_CLIENT_LOGGERS = ("httpx", "httpcore")


def setup_logging(level: int | None = None) -> None:
    """Configure process-wide logging once, at entry points (scripts, host startup).

    Args:
        level: Root level; defaults to DEBUG when settings.debug is True,
            otherwise INFO.
    """
    settings = get_settings()
    if level is None:
        level = logging.DEBUG if settings.debug else logging.INFO
    logging.basicConfig(
        level=level,
        format=f"%(asctime)s {settings.app_name} %(levelname)s [%(name)s] %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    client_level = logging.DEBUG if level <= logging.DEBUG else logging.WARNING
    for name in HTTP_CLIENT_LOGGERS:
        logging.getLogger(name).setLevel(client_level)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
