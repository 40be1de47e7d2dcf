from __future__ import annotations

import os
import ssl

import httpx

from logslack.core.logging.redact import redact_url

from .errors import LogSlackHTTPNetworkError, LogSlackHTTPStatusError

_DEFAULT_TIMEOUT_S = 15.0
_DEFAULT_CONNECT_TIMEOUT_S = 5.0
_DEFAULT_USER_AGENT = "logslack/1.0"
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


def _get_float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _build_timeout(total_s: float | None = None) -> httpx.Timeout:
    connect_s = max(0.1, _get_float_env("LOGSLACK_HTTP_CONNECT_TIMEOUT_S", _DEFAULT_CONNECT_TIMEOUT_S))
    read_total = max(0.1, total_s if total_s is not None else _get_float_env("LOGSLACK_HTTP_TIMEOUT_S", _DEFAULT_TIMEOUT_S))
    return httpx.Timeout(read_total, connect=min(connect_s, read_total))


def build_tls_context() -> ssl.SSLContext:
    context = ssl.create_default_context()
    context.minimum_version = ssl.TLSVersion.TLSv1_2
    return context


def build_http_client(timeout_s: float | None = None, transport: httpx.BaseTransport | None = None) -> httpx.Client:
    """Create the pooled client shared by every send of one handler."""
    user_agent = os.getenv("LOGSLACK_HTTP_USER_AGENT", _DEFAULT_USER_AGENT)
    return httpx.Client(
        timeout=_build_timeout(timeout_s),
        headers={"User-Agent": user_agent},
        verify=build_tls_context(),
        transport=transport,
    )


def post_form(
    client: httpx.Client,
    url: str,
    body: bytes,
    *,
    redact: bool = True,
) -> httpx.Response:
    """POST an already-encoded form body once. No retries."""
    safe_url = redact_url(url) if redact else url
    try:
        response = client.post(url, content=body, headers={"Content-Type": FORM_CONTENT_TYPE})
    except httpx.HTTPError as exc:
        raise LogSlackHTTPNetworkError(f"HTTP request error for {safe_url}: {exc.__class__.__name__}") from exc

    status = response.status_code
    if 200 <= status < 300:
        return response
    raise LogSlackHTTPStatusError(f"HTTP status {status} for {safe_url}", status_code=status)
