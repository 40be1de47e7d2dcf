from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any


@dataclass
class Field:
    title: str
    value: str
    short: bool = False

    def to_wire(self) -> dict[str, Any]:
        return {"title": self.title, "value": self.value, "short": self.short}


@dataclass
class Attachment:
    fallback: str
    pretext: str = ""
    text: str = ""
    color: str = ""
    fields: list[Field] = field(default_factory=list)
    mrkdwn_in: list[str] = field(default_factory=lambda: ["fields"])

    def to_wire(self) -> dict[str, Any]:
        return {
            "fallback": self.fallback,
            "pretext": self.pretext,
            "text": self.text,
            "color": self.color,
            "fields": [item.to_wire() for item in self.fields],
            "mrkdwn_in": list(self.mrkdwn_in),
        }


@dataclass(frozen=True)
class Payload:
    channel: str | None
    username: str | None
    icon_url: str | None
    icon_emoji: str | None
    text: str
    attachments: tuple[Attachment, ...] = ()
    link_names: int = 0

    def to_wire(self) -> dict[str, Any]:
        return {
            "channel": self.channel,
            "username": self.username,
            "icon_url": self.icon_url,
            "icon_emoji": self.icon_emoji,
            "text": self.text,
            "attachments": [attachment.to_wire() for attachment in self.attachments],
            "link_names": self.link_names,
        }


def encode_payload(payload: Payload) -> bytes:
    """Serialize using the webhook's wire member names."""
    return json.dumps(payload.to_wire(), separators=(",", ":"), ensure_ascii=False).encode("utf-8")
