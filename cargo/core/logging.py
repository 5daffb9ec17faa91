"""Logging configuration for the cargo package."""

import json
import logging
import sys
from datetime import datetime, timezone

from cargo.core.config import LogFormatEnum, Settings, get_settings

SIMPLE_FORMAT = "%(asctime)s - %(name)s - [%(levelname)s] - %(message)s"


class JsonFormatter(logging.Formatter):
    """Render each record as a single JSON object."""

    def format(self, record):
        payload = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload)


def setup_logging(config: Settings | None = None, stream=None) -> logging.Logger:
    """
    Configures the ``cargo`` logger from settings.

    Safe to call more than once: handlers installed by a previous call are
    replaced rather than stacked.
    """
    config = config or get_settings()
    logger = logging.getLogger("cargo")

    handler = logging.StreamHandler(stream or sys.stdout)
    if config.log_format == LogFormatEnum.json:
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter(SIMPLE_FORMAT))
    handler._cargo_handler = True

    for existing in list(logger.handlers):
        if getattr(existing, "_cargo_handler", False):
            logger.removeHandler(existing)
    logger.addHandler(handler)
    logger.setLevel(config.log_level.value)
    return logger
