# Path: config/logging_setup.py
# Purpose: Configure process-wide logging for entry points.
# Layer: config.
# Details: Library modules only create module loggers; scripts call this once at startup.

from __future__ import annotations

import logging

from .settings import AppSettings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(settings: AppSettings) -> None:
    """Apply the configured log level and a single stream handler to the root logger."""

    logging.basicConfig(level=settings.log_level.upper(), format=LOG_FORMAT)
    logging.getLogger().setLevel(settings.log_level.upper())
