from __future__ import annotations

import os

import pytest


class RecorderErrorHandler:
    def __init__(self) -> None:
        self.errors: list[tuple[str, BaseException | None]] = []

    def error(self, message: str, exc: BaseException | None = None) -> None:
        self.errors.append((message, exc))


@pytest.fixture(autouse=True)
def clear_logslack_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in list(os.environ):
        if name.startswith("LOGSLACK_"):
            monkeypatch.delenv(name, raising=False)


@pytest.fixture
def error_recorder() -> RecorderErrorHandler:
    return RecorderErrorHandler()
