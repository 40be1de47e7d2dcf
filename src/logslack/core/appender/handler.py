from __future__ import annotations

import logging
from functools import partial
from typing import Any

import httpx

from logslack.core.config.env import expand
from logslack.core.config.loader import SlackHandlerConfig
from logslack.core.dispatch.errors import ErrorHandler, LoggingErrorHandler
from logslack.core.dispatch.tracker import DispatchTracker, in_tracked_send
from logslack.core.logging.setup import is_diagnostics_record
from logslack.core.notifications.builder import NotificationBuilder
from logslack.core.notifications.channels.slack import SlackWebhookClient
from logslack.core.notifications.events import LogEvent

logger = logging.getLogger("logslack.appender")


def _not_feedback(record: logging.LogRecord) -> bool:
    return not (in_tracked_send() or is_diagnostics_record(record))


class SlackHandler(logging.Handler):
    """Logging handler that posts each record to a Slack incoming webhook.

    Sends run on a worker pool; ``emit`` returns as soon as the send is
    scheduled. ``close`` stops accepting records and waits for every
    outstanding send before releasing the HTTP client.

    Options may be given as a ``SlackHandlerConfig`` or as keyword arguments
    with the same names, which is what ``logging.config.dictConfig`` passes.
    """

    def __init__(
        self,
        config: SlackHandlerConfig | None = None,
        *,
        level: int | str = logging.NOTSET,
        tracker: DispatchTracker | None = None,
        builder: NotificationBuilder | None = None,
        error_handler: ErrorHandler | None = None,
        http_client: httpx.Client | None = None,
        activate: bool = True,
        **options: Any,
    ) -> None:
        super().__init__(level)
        if config is None:
            config = SlackHandlerConfig.model_validate(options)
        elif options:
            raise TypeError(f"Unexpected options alongside config: {sorted(options)}")
        self.config = config
        self.error_handler = error_handler or LoggingErrorHandler()
        self.tracker = tracker or DispatchTracker(error_handler=self.error_handler)
        self.builder = builder or NotificationBuilder(
            username=config.username,
            channel=config.channel,
            icon_url=config.icon_url,
            icon_emoji=config.icon_emoji,
            add_attachment=config.add_attachment,
            add_exception_trace_field=config.add_exception_trace_field,
            username_append_logger_name=config.username_append_logger_name,
            link_names=config.link_names,
            color_mappings=config.color_table(),
        )
        self._http_client = http_client
        self._client: SlackWebhookClient | None = None
        self._closed = False
        # Applied before the handler lock is taken, so send threads never block on it.
        self.addFilter(_not_feedback)
        if activate:
            self.activate()

    @property
    def client(self) -> SlackWebhookClient | None:
        return self._client

    def activate(self) -> None:
        """Resolve the webhook URL and open the transport.

        Does nothing when the transport is already open or the handler is closed.
        """
        if self._closed:
            logger.error("Slack handler is closed and cannot be activated again")
            return
        if self._client is not None:
            logger.debug("Slack handler already activated")
            return
        webhook_url = expand(self.config.webhook_url) or ""
        self._client = SlackWebhookClient(
            webhook_url,
            self.config.username,
            self.config.channel,
            self.config.icon_url,
            self.config.icon_emoji,
            proxy=self.config.proxy,
            timeout_s=self.config.timeout_s,
            http_client=self._http_client,
            error_handler=self.error_handler,
        )

    def emit(self, record: logging.LogRecord) -> None:
        client = self._client
        if client is None:
            if self._closed:
                logger.warning("Slack handler is closed; dropping record from %s", record.name)
            else:
                logger.error("Slack handler was not activated; dropping record from %s", record.name)
            return

        try:
            with self.tracker.track():
                event = LogEvent.from_record(record)
                text = self.format(record) if self.formatter is not None else event.message
                payload = self.builder.build(event, text=text)
        except Exception as exc:
            self.error_handler.error("Unable to build Slack notification", exc)
            return

        self.tracker.submit(partial(client.post_message, payload))

    def close(self) -> None:
        self.acquire()
        try:
            client, self._client = self._client, None
            self._closed = True
        finally:
            self.release()

        self.tracker.drain()
        if client is not None:
            client.close()
        self.tracker.shutdown()
        super().close()
        logger.debug("Slack handler closed")
