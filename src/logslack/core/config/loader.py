from __future__ import annotations

"""Configuration for the Slack logging handler."""

from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator


class LevelColorMapping(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    level: str
    back_color: str = Field(alias="backColor")


class SlackHandlerConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    webhook_url: str
    username: Optional[str] = None
    channel: Optional[str] = None
    icon_url: Optional[str] = None
    icon_emoji: Optional[str] = None
    add_attachment: bool = True
    add_exception_trace_field: bool = True
    username_append_logger_name: bool = False
    link_names: bool = False
    mappings: list[LevelColorMapping] = Field(default_factory=list)
    # Accepted for compatibility; the transport does not route through it.
    proxy: Optional[str] = None
    timeout_s: Optional[float] = None

    @field_validator("webhook_url")
    @classmethod
    def _webhook_url_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("webhook_url must not be empty")
        return value

    @field_validator("mappings")
    @classmethod
    def _unique_levels(cls, value: list[LevelColorMapping]) -> list[LevelColorMapping]:
        seen: set[str] = set()
        for mapping in value:
            key = mapping.level.casefold()
            if key in seen:
                raise ValueError(f"duplicate color mapping for level {mapping.level!r}")
            seen.add(key)
        return value

    def color_table(self) -> dict[str, str]:
        return {mapping.level.casefold(): mapping.back_color for mapping in self.mappings}


def parse_config(data: dict[str, Any]) -> SlackHandlerConfig:
    section = data.get("slack", data) if isinstance(data, dict) else data
    return SlackHandlerConfig.model_validate(section or {})


def load_config(path: str | Path) -> SlackHandlerConfig:
    """Load and validate handler configuration from a YAML file."""
    cfg_path = Path(path)
    with cfg_path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    return parse_config(data)
