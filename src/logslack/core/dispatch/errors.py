from __future__ import annotations

import logging
from typing import Protocol


class ErrorHandler(Protocol):
    def error(self, message: str, exc: BaseException | None = None) -> None: ...


class LoggingErrorHandler:
    def __init__(self, logger: logging.Logger | None = None) -> None:
        self.logger = logger or logging.getLogger("logslack.errors")

    def error(self, message: str, exc: BaseException | None = None) -> None:
        if exc is None:
            self.logger.error(message)
            return
        self.logger.error("%s: %s", message, exc, exc_info=(type(exc), exc, exc.__traceback__))
