from .client import build_http_client, build_tls_context, post_form
from .errors import LogSlackHTTPError, LogSlackHTTPNetworkError, LogSlackHTTPStatusError

__all__ = [
    "build_http_client",
    "build_tls_context",
    "post_form",
    "LogSlackHTTPError",
    "LogSlackHTTPNetworkError",
    "LogSlackHTTPStatusError",
]
