"""Callback registry models and the per-dispatch callback state machine."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict

Payload = Mapping[str, Any]
Callback = Callable[[Payload], Any]


class CallbackState(str, Enum):
    """Where a callback is within the current dispatch.

    UNSTARTED: not invoked yet (neither pending nor handled).
    PENDING: invocation started but has not returned.
    HANDLED: invocation returned normally.
    """

    UNSTARTED = "unstarted"
    PENDING = "pending"
    HANDLED = "handled"


# A callback that raises stays PENDING for the rest of the session.
VALID_TRANSITIONS: dict[CallbackState, set[CallbackState]] = {
    CallbackState.UNSTARTED: {CallbackState.PENDING},
    CallbackState.PENDING: {CallbackState.HANDLED},
    CallbackState.HANDLED: set(),  # terminal
}


class RegisteredCallback(BaseModel):
    """A callback held in the dispatcher registry under its token."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    token: str
    callback: Callback
    ordinal: int
    name: str = ""

    @classmethod
    def build(cls, token: str, callback: Callback, ordinal: int) -> RegisteredCallback:
        name = getattr(callback, "__qualname__", None) or repr(callback)
        return cls(token=token, callback=callback, ordinal=ordinal, name=name)
