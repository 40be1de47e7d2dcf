from __future__ import annotations

import logging
import traceback
from dataclasses import dataclass


@dataclass(frozen=True)
class ExceptionInfo:
    message: str
    type_name: str
    stack_trace: str = ""

    @classmethod
    def from_exception(cls, exc: BaseException) -> "ExceptionInfo":
        frames = traceback.format_tb(exc.__traceback__) if exc.__traceback__ is not None else []
        return cls(message=str(exc), type_name=type(exc).__name__, stack_trace="".join(frames))


@dataclass(frozen=True)
class LogEvent:
    level_name: str
    logger_name: str
    message: str
    exception: ExceptionInfo | None = None

    @classmethod
    def from_record(cls, record: logging.LogRecord) -> "LogEvent":
        exception = None
        if record.exc_info and isinstance(record.exc_info, tuple):
            exc_value = record.exc_info[1]
            if isinstance(exc_value, BaseException):
                exception = ExceptionInfo.from_exception(exc_value)
        return cls(
            level_name=record.levelname,
            logger_name=record.name,
            message=record.getMessage(),
            exception=exception,
        )
