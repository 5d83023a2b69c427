"""Process-wide logging configuration."""

from __future__ import annotations

import logging
import sys

from asgi_correlation_id import CorrelationIdFilter

from logistics.core.config import get_settings

_LOG_FORMAT = "%(asctime)s | %(levelname)s | [%(correlation_id)s] %(name)s | %(message)s"

_configured = False


def configure_logging(level: str | None = None) -> None:
    """Install a stdout handler tagging records with the request id.

    Safe to call more than once; only the first call installs the handler.
    """
    global _configured
    if _configured:
        return

    settings = get_settings()
    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(CorrelationIdFilter(uuid_length=32, default_value="-"))
    handler.setFormatter(logging.Formatter(_LOG_FORMAT))

    root = logging.getLogger()
    root.addHandler(handler)
    root.setLevel((level or settings.log_level).upper())
    _configured = True


__all__ = ["configure_logging"]
