"""Dispatcher that broadcasts payloads to every registered callback.

This differs from a generic pub-sub system in two ways:

1. Callbacks are not subscribed to particular events. Every payload is
   dispatched to every registered callback.
2. Callbacks can be deferred in whole or in part until other callbacks
   have run for the same payload, via ``wait_for()``.

For example, a flight destination form selects a default city when a
country is selected::

    dispatcher = Dispatcher()

    def update_country(payload):
        if payload["action_type"] == "country-update":
            country_store.country = payload["selected_country"]

    country_token = dispatcher.register(update_country)

    def update_city(payload):
        if payload["action_type"] == "country-update":
            # country_store.country may not be updated yet
            dispatcher.wait_for([country_token])
            # now it is
            city_store.city = default_city_for(country_store.country)

    dispatcher.register(update_city)

Calls to ``wait_for()`` can be chained. A callback that ends up waiting,
directly or transitively, on a callback that is still running raises
``CircularDependencyError``.
"""

from __future__ import annotations

import itertools
import logging
from collections.abc import Iterable

from fluxdispatch.config import config
from fluxdispatch.core.invariant import InvariantViolation, invariant
from fluxdispatch.models.callbacks import (
    VALID_TRANSITIONS,
    Callback,
    CallbackState,
    Payload,
    RegisteredCallback,
)

logger = logging.getLogger(__name__)


class DispatcherError(RuntimeError):
    """Base class for every error raised by the Dispatcher.

    ``dispatcher`` is the instance that raised it, ``token`` the callback
    concerned (None when not token-specific).
    """

    def __init__(
        self,
        message: str,
        *,
        token: str | None = None,
        dispatcher: Dispatcher | None = None,
    ) -> None:
        super().__init__(message)
        self.token = token
        self.dispatcher = dispatcher


class UnknownTokenError(DispatcherError, InvariantViolation):
    """Raised when a token does not map to a registered callback."""


class NotDispatchingError(DispatcherError, InvariantViolation):
    """Raised when wait_for() is called outside of a dispatch."""


class AlreadyDispatchingError(DispatcherError, InvariantViolation):
    """Raised when dispatch() is called while a dispatch is in progress."""


class CircularDependencyError(DispatcherError, InvariantViolation):
    """Raised when wait_for() reaches a callback that is still running."""


class CallbackFailedError(DispatcherError):
    """Raised when a registered callback raises during a dispatch.

    The original exception is available as ``__cause__``.
    """


class Dispatcher:
    """Synchronous broadcast dispatcher with ``wait_for`` ordering.

    Parameters
    ----------
    token_prefix:
        Prefix for minted tokens. Defaults to ``config.token_prefix``.
    """

    def __init__(self, token_prefix: str | None = None) -> None:
        self._prefix = config.token_prefix if token_prefix is None else token_prefix
        self._counter = itertools.count(1)
        # Insertion order is the broadcast order.
        self._callbacks: dict[str, RegisteredCallback] = {}
        self._states: dict[str, CallbackState] = {}
        self._is_dispatching = False
        self._pending_payload: Payload | None = None

    # ------------------------------------------------------------------
    # Registry
    # ------------------------------------------------------------------

    def register(self, callback: Callback) -> str:
        """Register a callback to be invoked with every dispatched payload.

        Returns a token that can be used with ``wait_for()`` and
        ``unregister()``. Registering during a dispatch is allowed: the new
        callback is not broadcast to by the dispatch in flight, but it can
        be reached through ``wait_for()``.
        """
        ordinal = next(self._counter)
        token = f"{self._prefix}{ordinal}"
        entry = RegisteredCallback.build(token, callback, ordinal)
        self._callbacks[token] = entry
        if self._is_dispatching:
            self._states[token] = CallbackState.UNSTARTED
        logger.info("Registered callback %s as %s", entry.name, token)
        return token

    def unregister(self, token: str) -> None:
        """Remove a callback based on its token."""
        invariant(
            token in self._callbacks,
            f"Dispatcher.unregister(...): `{token}` does not map to a registered callback.",
            UnknownTokenError,
            token=token,
            dispatcher=self,
        )
        entry = self._callbacks.pop(token)
        logger.info("Unregistered callback %s (%s)", entry.name, token)

    @property
    def tokens(self) -> list[str]:
        """Registered tokens in registration order."""
        return list(self._callbacks)

    def is_registered(self, token: str) -> bool:
        return token in self._callbacks

    def __contains__(self, token: object) -> bool:
        return token in self._callbacks

    def __len__(self) -> int:
        return len(self._callbacks)

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def wait_for(self, tokens: Iterable[str]) -> None:
        """Wait for the given callbacks before continuing the current one.

        Only valid from inside a callback responding to a dispatched
        payload. Callbacks that have not started yet are invoked right
        away; callbacks already handled are skipped.

        Raises
        ------
        NotDispatchingError
            If no dispatch is in progress.
        UnknownTokenError
            If a token is not registered.
        CircularDependencyError
            If a token is still running, i.e. it (transitively) waits on
            the caller.
        TypeError
            If *tokens* is a single string rather than a collection.
        """
        if isinstance(tokens, str):
            raise TypeError(
                f"Dispatcher.wait_for(...): Expected a collection of tokens, got the string `{tokens}`."
            )
        invariant(
            self._is_dispatching,
            "Dispatcher.wait_for(...): Must be invoked while dispatching.",
            NotDispatchingError,
            dispatcher=self,
        )
        for token in tokens:
            invariant(
                token in self._callbacks,
                f"Dispatcher.wait_for(...): `{token}` does not map to a registered callback.",
                UnknownTokenError,
                token=token,
                dispatcher=self,
            )
            state = self._states[token]
            if state is CallbackState.HANDLED:
                continue
            invariant(
                state is not CallbackState.PENDING,
                f"Dispatcher.wait_for(...): Circular dependency detected while waiting for `{token}`.",
                CircularDependencyError,
                token=token,
                dispatcher=self,
            )
            self._invoke_callback(token)

    def dispatch(self, payload: Payload) -> None:
        """Dispatch a payload to all registered callbacks.

        Callbacks run in registration order unless ``wait_for()`` pulls one
        forward. If a callback fails the dispatch stops there; callbacks
        not yet invoked are skipped and nothing is rolled back.

        Raises
        ------
        AlreadyDispatchingError
            If called while a dispatch is in progress.
        CallbackFailedError
            If a callback raised; the original exception is the cause.
        """
        invariant(
            not self._is_dispatching,
            "Dispatcher.dispatch(...): Cannot dispatch in the middle of a dispatch.",
            AlreadyDispatchingError,
            dispatcher=self,
        )
        self._start_dispatching(payload)
        snapshot = list(self._callbacks)
        try:
            for token in snapshot:
                # Unregistered by an earlier callback in this dispatch.
                if token not in self._callbacks:
                    continue
                if self._states[token] is not CallbackState.UNSTARTED:
                    continue
                self._invoke_callback(token)
        except DispatcherError as exc:
            logger.warning(
                "Dispatch aborted after %d/%d callbacks handled: %s",
                self._count_handled(snapshot),
                len(snapshot),
                exc,
            )
            raise
        finally:
            self._stop_dispatching()
        logger.debug("Dispatch complete: %d callbacks handled", self._count_handled(snapshot))

    def is_dispatching(self) -> bool:
        """Is this Dispatcher currently dispatching."""
        return self._is_dispatching

    # ------------------------------------------------------------------
    # Session state queries
    # ------------------------------------------------------------------

    def get_state(self, token: str) -> CallbackState:
        """Return a callback's state in the current or most recent dispatch."""
        invariant(
            token in self._callbacks,
            f"Dispatcher.get_state(...): `{token}` does not map to a registered callback.",
            UnknownTokenError,
            token=token,
            dispatcher=self,
        )
        return self._states.get(token, CallbackState.UNSTARTED)

    def is_pending(self, token: str) -> bool:
        return self.get_state(token) is not CallbackState.UNSTARTED

    def is_handled(self, token: str) -> bool:
        return self.get_state(token) is CallbackState.HANDLED

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _invoke_callback(self, token: str) -> None:
        """Call the callback stored under *token*, with bookkeeping."""
        self._transition(token, CallbackState.PENDING)
        entry = self._callbacks[token]
        logger.debug("Invoking %s (%s)", entry.name, token)
        try:
            entry.callback(self._pending_payload)
        except Exception as exc:
            # Errors raised by this dispatcher (cycles, unknown tokens, nested
            # dispatch) keep their kind; anything else, including errors from
            # another Dispatcher, is attributed to this callback.
            if isinstance(exc, DispatcherError) and exc.dispatcher is self:
                raise
            logger.error("Callback %s (%s) failed: %s", entry.name, token, exc)
            raise CallbackFailedError(
                f"Dispatcher.dispatch(...): Callback `{token}` ({entry.name}) failed: {exc}",
                token=token,
                dispatcher=self,
            ) from exc
        self._transition(token, CallbackState.HANDLED)

    def _transition(self, token: str, target: CallbackState) -> None:
        current = self._states[token]
        invariant(
            target in VALID_TRANSITIONS[current],
            f"Dispatcher: cannot move `{token}` from {current.value} to {target.value}.",
        )
        self._states[token] = target

    def _count_handled(self, tokens: list[str]) -> int:
        return sum(1 for t in tokens if self._states.get(t) is CallbackState.HANDLED)

    def _start_dispatching(self, payload: Payload) -> None:
        """Set up bookkeeping needed when dispatching."""
        self._states = {token: CallbackState.UNSTARTED for token in self._callbacks}
        self._pending_payload = payload
        self._is_dispatching = True
        logger.debug("Dispatching payload to %d callbacks", len(self._states))

    def _stop_dispatching(self) -> None:
        """Clear bookkeeping used for dispatching."""
        self._pending_payload = None
        self._is_dispatching = False
