"""Logging helpers used throughout the matching engine."""

from __future__ import annotations

import logging
import sys

from provider_matching.config import settings


def configure_logging(level: str | None = None) -> None:
    """Configure structured logging for processes that embed the engine."""
    handler = logging.StreamHandler(sys.stdout)
    formatter = logging.Formatter(
        fmt="%(asctime)s %(levelname)s [%(name)s] %(message)s", datefmt="%Y-%m-%dT%H:%M:%SZ"
    )
    handler.setFormatter(formatter)
    root = logging.getLogger()
    root.setLevel((level or settings.log_level).upper())
    root.handlers[:] = [handler]
