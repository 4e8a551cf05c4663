"""Reconnect policies for a reset connection.

``RetryPolicy`` computes exponential backoff with jitter. ``ReconnectPolicy``
decides whether another attempt is made and how long to wait first.
"""

from __future__ import annotations

import random

RECONNECT_BACKOFF = "backoff"
RECONNECT_IMMEDIATE = "immediate"


class RetryPolicy:
    """Exponential backoff retry policy with jitter."""

    def __init__(
        self,
        base_delay_seconds: float = 0.5,
        max_delay_seconds: float = 30.0,
        jitter_factor: float = 0.1,
    ):
        """Initialize retry policy.

        Args:
            base_delay_seconds: Base delay for first retry (default: 0.5s)
            max_delay_seconds: Maximum delay cap (default: 30.0s)
            jitter_factor: Jitter as fraction of delay (default: 0.1 = 10%)
        """
        self.base_delay_seconds = base_delay_seconds
        self.max_delay_seconds = max_delay_seconds
        self.jitter_factor = jitter_factor

    def get_delay(self, attempt: int) -> float:
        """Calculate delay for retry attempt.

        Formula: min(base_delay * (2 ** attempt), max_delay) + jitter, where
        jitter is uniform between 0 and delay * jitter_factor.

        Args:
            attempt: Retry attempt number (0-indexed, so attempt=0 is first retry)
        """
        delay = min(self.base_delay_seconds * (2**attempt), self.max_delay_seconds)
        jitter = random.uniform(0, delay * self.jitter_factor)
        return delay + jitter

    def __repr__(self) -> str:
        return (
            f"RetryPolicy(base_delay={self.base_delay_seconds}s, "
            f"max_delay={self.max_delay_seconds}s, "
            f"jitter_factor={self.jitter_factor})"
        )


class ReconnectPolicy:
    """Decide how a reset connection is re-established.

    ``backoff`` waits per ``RetryPolicy`` and gives up after ``max_attempts``.
    ``immediate`` retries at once and never gives up.
    """

    def __init__(
        self,
        mode: str = RECONNECT_BACKOFF,
        max_attempts: int = 10,
        retry_policy: RetryPolicy | None = None,
    ):
        if mode not in (RECONNECT_BACKOFF, RECONNECT_IMMEDIATE):
            msg = f"Unknown reconnect mode: {mode}"
            raise ValueError(msg)
        self.mode = mode
        self.max_attempts = max_attempts
        self.retry_policy = retry_policy or RetryPolicy()

    def should_retry(self, attempt: int) -> bool:
        """Whether attempt number ``attempt`` (0-indexed) may run."""
        if self.mode == RECONNECT_IMMEDIATE:
            return True
        return attempt < self.max_attempts

    def get_delay(self, attempt: int) -> float:
        if self.mode == RECONNECT_IMMEDIATE:
            return 0.0
        return self.retry_policy.get_delay(attempt)

    def __repr__(self) -> str:
        if self.mode == RECONNECT_IMMEDIATE:
            return "ReconnectPolicy(mode=immediate)"
        return f"ReconnectPolicy(mode=backoff, max_attempts={self.max_attempts}, {self.retry_policy!r})"
