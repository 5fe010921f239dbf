"""Cooperative cancellation for blocking HTTP calls."""

from __future__ import annotations

from typing import Protocol

from .errors import CancellationError


class CancelEvent(Protocol):
    """Anything with ``is_set()``; normally a ``threading.Event``."""

    def is_set(self) -> bool: ...


def raise_if_cancelled(cancel_event: CancelEvent | None) -> None:
    """Raise CancellationError if the caller has signalled cancellation."""
    if cancel_event is not None and cancel_event.is_set():
        raise CancellationError("Operation was cancelled")
