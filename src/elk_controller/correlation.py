"""
Correlation IDs for panel requests.

Each request runs in its own scope whose ID carries the awaited reply type
(``zs-3f9a1c0b``), so the frame write, the reply and any timeout can be
picked out of the log together. The CLI opens one session scope around the
whole run.
"""

from __future__ import annotations

import contextvars
import uuid
from collections.abc import Generator
from contextlib import contextmanager

__all__ = [
    "correlation_context",
    "ensure_correlation_id",
    "get_correlation_id",
    "new_correlation_id",
]

_correlation_id: contextvars.ContextVar[str | None] = contextvars.ContextVar("elk_correlation_id", default=None)


def new_correlation_id(type_code: str | None = None) -> str:
    """Return 8 random hex digits, prefixed with the lowercase type code when given."""
    token = uuid.uuid4().hex[:8]
    return f"{type_code.lower()}-{token}" if type_code else token


def get_correlation_id() -> str | None:
    return _correlation_id.get()


@contextmanager
def correlation_context(correlation_id: str | None = None, type_code: str | None = None) -> Generator[str]:
    """Scope a correlation ID; a new one is generated unless given. The outer ID is restored on exit."""
    token = _correlation_id.set(correlation_id or new_correlation_id(type_code))
    try:
        yield _correlation_id.get() or ""
    finally:
        _correlation_id.reset(token)


def ensure_correlation_id() -> str:
    """Return the active ID, starting a session ID for this context if there is none."""
    current_id = _correlation_id.get()
    if current_id is None:
        current_id = new_correlation_id()
        _ = _correlation_id.set(current_id)
    return current_id
