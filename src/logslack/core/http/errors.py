from __future__ import annotations


class LogSlackHTTPError(RuntimeError):
    """Base error for webhook transport operations."""


class LogSlackHTTPStatusError(LogSlackHTTPError):
    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class LogSlackHTTPNetworkError(LogSlackHTTPError):
    """Raised for DNS, TLS, connection and timeout failures."""
