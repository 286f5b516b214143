"""Cooperative cancellation for long-running store operations.

Operations that accept a ``cancellation`` argument check it before starting
and between elements of a batch. A cancelled batch keeps whatever was applied
before the check that fired.

Examples:
    >>> token = CancellationToken()
    >>> token.cancel()
    >>> token.raise_if_cancelled()
    Traceback (most recent call last):
    ...
    langvec.errors.OperationCancelledError: Operation was cancelled
"""

import threading

from ..errors import OperationCancelledError


class CancellationToken:
    """Thread-safe cancellation flag backed by ``threading.Event``."""

    def __init__(self):
        self._event = threading.Event()

    def cancel(self) -> None:
        """Signal cancellation. Idempotent."""
        self._event.set()

    @property
    def is_cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        """Raise OperationCancelledError if cancel() has been called."""
        if self._event.is_set():
            raise OperationCancelledError()

    def __repr__(self) -> str:
        return f"CancellationToken(cancelled={self.is_cancelled})"


def check_cancelled(cancellation: CancellationToken | None) -> None:
    """Raise if the optional token has been cancelled."""
    if cancellation is not None:
        cancellation.raise_if_cancelled()
