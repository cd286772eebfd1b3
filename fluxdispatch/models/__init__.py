"""fluxdispatch data models."""

from fluxdispatch.models.callbacks import (
    VALID_TRANSITIONS,
    Callback,
    CallbackState,
    Payload,
    RegisteredCallback,
)

__all__ = [
    "Callback",
    "CallbackState",
    "Payload",
    "RegisteredCallback",
    "VALID_TRANSITIONS",
]
