"""Cooperative cancellation for deadline-guarded enumeration.

A guarded run publishes a `threading.Event` through a context variable. Long
loops in the engine call `checkpoint()`, which raises `EnumerationCancelled`
once the event is set, so an abandoned worker stops soon after its caller
gave up on it. Outside a guarded run `checkpoint()` does nothing.
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator, Optional

from enumerable.errors import EnumerationCancelled

_CANCEL_EVENT: ContextVar[Optional[threading.Event]] = ContextVar(
    "enumerable_cancel_event", default=None
)


@contextmanager
def cancellable(event: threading.Event) -> Iterator[threading.Event]:
    """Make `event` the cancellation signal for the enclosed block."""
    token = _CANCEL_EVENT.set(event)
    try:
        yield event
    finally:
        _CANCEL_EVENT.reset(token)


def checkpoint() -> None:
    """Raise `EnumerationCancelled` if the current run has been abandoned."""
    event = _CANCEL_EVENT.get()
    if event is not None and event.is_set():
        raise EnumerationCancelled("enumeration abandoned after its deadline")
