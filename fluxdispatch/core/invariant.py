"""Invariant checks used to enforce dispatcher preconditions."""

from __future__ import annotations

from typing import Any


class InvariantViolation(RuntimeError):
    """Raised when a precondition does not hold."""


def invariant(
    condition: bool,
    message: str,
    error: type[InvariantViolation] = InvariantViolation,
    **context: Any,
) -> None:
    """Raise *error* with *message* unless *condition* is true.

    Extra keyword arguments are forwarded to the exception constructor.
    """
    if not condition:
        raise error(message, **context)
