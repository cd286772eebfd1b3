"""Tests for the invariant helper."""

from __future__ import annotations

import pytest

from fluxdispatch.core.invariant import InvariantViolation, invariant


class _TaggedViolation(InvariantViolation):
    def __init__(self, message: str, *, tag: str) -> None:
        super().__init__(message)
        self.tag = tag


class TestInvariant:
    def test_true_condition_is_silent(self):
        assert invariant(True, "never raised") is None

    def test_false_condition_raises_with_message(self):
        with pytest.raises(InvariantViolation, match="broken precondition"):
            invariant(False, "broken precondition")

    def test_custom_error_class(self):
        with pytest.raises(_TaggedViolation) as exc_info:
            invariant(1 > 2, "math", _TaggedViolation, tag="order")
        assert exc_info.value.tag == "order"

    def test_is_a_runtime_error(self):
        with pytest.raises(RuntimeError):
            invariant(False, "x")
