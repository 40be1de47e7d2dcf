from __future__ import annotations

import logging
import os
import sys

from .json_formatter import JSONFormatter

DIAGNOSTICS_LOGGER_NAME = "logslack"
_CONFIGURED_ATTR = "_logslack_diagnostics"
_TEXT_FORMAT = "logslack: [%(levelname)s] %(name)s: %(message)s"


def _parse_level(raw: str) -> int:
    normalized = raw.strip().upper()
    return getattr(logging, normalized, logging.WARNING)


def is_diagnostics_record(record: logging.LogRecord) -> bool:
    return record.name == DIAGNOSTICS_LOGGER_NAME or record.name.startswith(DIAGNOSTICS_LOGGER_NAME + ".")


def configure_diagnostics(level: str | None = None) -> logging.Logger:
    """Route internal diagnostics to stderr, never through the host's handlers.

    Safe to call repeatedly; the stream handler is only attached once.
    """
    logger = logging.getLogger(DIAGNOSTICS_LOGGER_NAME)
    logger.setLevel(_parse_level(level or os.getenv("LOGSLACK_LOG_LEVEL", "WARNING")))
    logger.propagate = False

    if os.getenv("LOGSLACK_LOG_FORMAT", "text").strip().casefold() == "json":
        formatter: logging.Formatter = JSONFormatter()
    else:
        formatter = logging.Formatter(_TEXT_FORMAT)

    existing = [handler for handler in logger.handlers if getattr(handler, _CONFIGURED_ATTR, False)]
    if existing:
        for handler in existing:
            handler.setFormatter(formatter)
        return logger

    stderr_handler = logging.StreamHandler(stream=sys.stderr)
    stderr_handler.setFormatter(formatter)
    setattr(stderr_handler, _CONFIGURED_ATTR, True)
    logger.addHandler(stderr_handler)
    return logger
