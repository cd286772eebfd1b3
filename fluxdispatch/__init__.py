"""fluxdispatch: synchronous broadcast dispatcher.

Every dispatched payload reaches every registered callback. Callbacks can
call ``wait_for()`` to have other callbacks finish first for the same
payload; waiting on a callback that is still running is reported as a
circular dependency.
"""

__version__ = "0.1.0"

from fluxdispatch.core.dispatcher import (
    AlreadyDispatchingError,
    CallbackFailedError,
    CircularDependencyError,
    Dispatcher,
    DispatcherError,
    NotDispatchingError,
    UnknownTokenError,
)
from fluxdispatch.core.invariant import InvariantViolation, invariant

__all__ = [
    "AlreadyDispatchingError",
    "CallbackFailedError",
    "CircularDependencyError",
    "Dispatcher",
    "DispatcherError",
    "InvariantViolation",
    "NotDispatchingError",
    "UnknownTokenError",
    "invariant",
    "__version__",
]
