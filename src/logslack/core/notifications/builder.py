from __future__ import annotations

import logging
import socket
import sys
from dataclasses import dataclass, field
from pathlib import Path

from logslack.core.config.env import expand

from .colors import resolve_color
from .events import ExceptionInfo, LogEvent
from .schemas import Attachment, Field, Payload

logger = logging.getLogger("logslack.notifications.builder")

TRACE_CHUNK_SIZE = 1990
CODE_FENCE = "```"
CODE_FENCE_SUBSTITUTE = "'''"


def split_trace(text: str, size: int = TRACE_CHUNK_SIZE) -> list[str]:
    """Split ``text`` into chunks of at most ``size`` characters.

    A chunk that would overflow ends after the last line break inside the
    window when there is one. Concatenating the chunks gives back ``text``.
    """
    if size < 1:
        raise ValueError("size must be positive")
    chunks: list[str] = []
    start = 0
    length = len(text)
    while start < length:
        end = start + size
        if end < length:
            window = text[start:end]
            cut = max(window.rfind("\n"), window.rfind("\r"))
            if cut == size - 1 and window[cut] == "\r" and text[end] == "\n":
                # Keep CRLF pairs together.
                earlier = max(window.rfind("\n", 0, cut), window.rfind("\r", 0, cut))
                if earlier > 0:
                    cut = earlier
            if cut > 0:
                end = start + cut + 1
        chunks.append(text[start:end])
        start = end
    return chunks


def fence(text: str) -> str:
    return CODE_FENCE + text.replace(CODE_FENCE, CODE_FENCE_SUBSTITUTE) + CODE_FENCE


def _default_process_name() -> str:
    argv0 = sys.argv[0] if sys.argv and sys.argv[0] else ""
    return Path(argv0).stem or Path(sys.executable).stem or "python"


@dataclass
class NotificationBuilder:
    username: str | None = None
    channel: str | None = None
    icon_url: str | None = None
    icon_emoji: str | None = None
    add_attachment: bool = True
    add_exception_trace_field: bool = True
    username_append_logger_name: bool = False
    link_names: bool = False
    color_mappings: dict[str, str] = field(default_factory=dict)
    process_name: str = field(default_factory=_default_process_name)
    machine_name: str = field(default_factory=socket.gethostname)

    def build(self, event: LogEvent, text: str | None = None) -> Payload:
        attachments: tuple[Attachment, ...] = ()
        if self.add_attachment:
            attachments = (self.build_attachment(event),)

        # Expanded on every event so environment changes apply without a restart.
        username = expand(self.username) or ""
        if self.username_append_logger_name:
            username += " - " + event.logger_name

        return Payload(
            channel=expand(self.channel),
            username=username or None,
            icon_url=expand(self.icon_url),
            icon_emoji=expand(self.icon_emoji),
            text=event.message if text is None else text,
            attachments=attachments,
            link_names=1 if self.link_names else 0,
        )

    def build_attachment(self, event: LogEvent) -> Attachment:
        level = event.level_name or ""
        attachment = Attachment(
            fallback=f"[{level}] {event.logger_name} in {self.process_name} on {self.machine_name}",
            color=resolve_color(level, self.color_mappings),
            fields=[
                Field("Process", self.process_name, True),
                Field("Machine", self.machine_name, True),
            ],
        )

        if not self.username_append_logger_name:
            attachment.fields.insert(0, Field("Logger", event.logger_name, True))

        if event.exception is not None:
            self._add_exception_fields(attachment, event.exception)

        logger.debug("Built attachment with %d fields", len(attachment.fields))
        return attachment

    def _add_exception_fields(self, attachment: Attachment, exc: ExceptionInfo) -> None:
        attachment.fields.insert(0, Field("Exception Type", exc.type_name, True))
        if self.add_exception_trace_field and exc.stack_trace.strip():
            chunks = split_trace(exc.stack_trace)
            for index in range(len(chunks) - 1, -1, -1):
                title = "Exception Trace" if index == 0 else f"Exception Trace {index + 1}"
                attachment.fields.insert(0, Field(title, fence(chunks[index])))
        attachment.fields.insert(0, Field("Exception Message", exc.message))
