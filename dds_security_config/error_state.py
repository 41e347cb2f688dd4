"""Per-thread "last error" slot for diagnostics.

Failures are raised as exceptions; the message of the most recent failure is
also kept here so callers that only check for success can still report why a
configuration pass did not produce a policy.
"""

import logging
import threading

logger = logging.getLogger(__name__)

_state = threading.local()


def set_error_message(message: str) -> None:
    """Record the message of the most recent failure on this thread."""
    if error_is_set():
        logger.debug("Overwriting previous error: %s", _state.message)
    _state.message = message


def get_error_message() -> str | None:
    """Return the recorded error message, if any."""
    return getattr(_state, "message", None)


def error_is_set() -> bool:
    return get_error_message() is not None


def reset_error() -> None:
    """Clear the recorded error message."""
    _state.message = None
