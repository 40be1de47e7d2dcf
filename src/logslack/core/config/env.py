from __future__ import annotations

import os
import re

_PERCENT_VAR_RE = re.compile(r"%([^%\s]+)%")


def _expand_percent(match: re.Match[str]) -> str:
    value = os.environ.get(match.group(1))
    return match.group(0) if value is None else value


def expand(text: str | None) -> str | None:
    """Expand ``$VAR``, ``${VAR}`` and ``%VAR%`` placeholders.

    Unknown variables are left as written.
    """
    if text is None:
        return None
    return os.path.expandvars(_PERCENT_VAR_RE.sub(_expand_percent, text))
