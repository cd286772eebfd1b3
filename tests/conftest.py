"""Shared test fixtures for fluxdispatch."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

from fluxdispatch.core.dispatcher import Dispatcher


class Recorder:
    """Callable that records every payload it is invoked with."""

    def __init__(self, name: str = "recorder") -> None:
        self.__qualname__ = name
        self.calls: list[Any] = []

    def __call__(self, payload: Any) -> None:
        self.calls.append(payload)

    @property
    def count(self) -> int:
        return len(self.calls)


@pytest.fixture
def dispatcher() -> Dispatcher:
    """Provide a fresh Dispatcher."""
    return Dispatcher()


@pytest.fixture
def make_recorder() -> Callable[..., Recorder]:
    """Factory fixture: build payload-recording callbacks."""

    def _factory(name: str = "recorder") -> Recorder:
        return Recorder(name)

    return _factory


@pytest.fixture
def callback_a(make_recorder: Callable[..., Recorder]) -> Recorder:
    return make_recorder("callback_a")


@pytest.fixture
def callback_b(make_recorder: Callable[..., Recorder]) -> Recorder:
    return make_recorder("callback_b")
