from __future__ import annotations

import logging
from dataclasses import replace
from urllib.parse import quote

import httpx

from logslack.core.dispatch.errors import ErrorHandler
from logslack.core.http.client import build_http_client, post_form
from logslack.core.http.errors import LogSlackHTTPError
from logslack.core.logging.redact import redact_string, redact_url
from logslack.core.notifications.schemas import Payload, encode_payload

logger = logging.getLogger("logslack.notifications.slack")


def encode_form_body(json_bytes: bytes) -> bytes:
    return ("payload=" + quote(json_bytes.decode("utf-8"), safe="")).encode("ascii")


class SlackWebhookClient:
    """Posts payloads to one incoming webhook over a shared, pooled client."""

    def __init__(
        self,
        webhook_url: str,
        username: str | None = None,
        channel: str | None = None,
        icon_url: str | None = None,
        icon_emoji: str | None = None,
        *,
        proxy: str | None = None,
        timeout_s: float | None = None,
        http_client: httpx.Client | None = None,
        error_handler: ErrorHandler | None = None,
    ) -> None:
        try:
            parsed = httpx.URL(webhook_url)
        except httpx.InvalidURL as exc:
            raise ValueError(f"Invalid webhook URL: {redact_url(webhook_url)}") from exc
        if parsed.scheme not in {"http", "https"} or not parsed.host:
            raise ValueError(f"Invalid webhook URL: {redact_url(webhook_url)}")
        self.webhook_url = webhook_url
        self.username = username
        self.channel = channel
        self.icon_url = icon_url
        self.icon_emoji = icon_emoji
        # TODO: route sends through ``proxy`` once the intended proxy semantics are confirmed.
        self.proxy = proxy
        self.error_handler = error_handler
        self._client = http_client or build_http_client(timeout_s)

    def with_defaults(self, payload: Payload) -> Payload:
        return replace(
            payload,
            channel=payload.channel or self.channel,
            username=payload.username or self.username,
            icon_url=payload.icon_url or self.icon_url,
            icon_emoji=payload.icon_emoji or self.icon_emoji,
        )

    def post_message(self, payload: Payload) -> bool:
        return self.send(encode_payload(self.with_defaults(payload)))

    def send(self, json_bytes: bytes) -> bool:
        """POST one payload. Failures are logged and reported, never raised."""
        body = encode_form_body(json_bytes)
        logger.debug("Slack payload: %s", body.decode("ascii"))
        try:
            response = post_form(self._client, self.webhook_url, body)
        except LogSlackHTTPError as exc:
            logger.warning("Slack webhook send failed: %s", exc)
            if self.error_handler is not None:
                self.error_handler.error("Unable to send message to Slack", exc)
            return False

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Slack response: %s", response.status_code)
            logger.debug("Slack response: %s", redact_string(response.text))
        return True

    def close(self) -> None:
        logger.debug("Closing HTTP client for %s", redact_url(self.webhook_url))
        self._client.close()
