"""Exception types for Elk M1 protocol errors.

Decoding and command building raise instead of returning None, so callers
can tell a malformed frame apart from an empty result.
"""

from __future__ import annotations


class ElkProtocolError(Exception):
    """Base exception for all Elk protocol errors."""


class ConstructionError(ElkProtocolError):
    """A frame was requested from both or neither of a command and a response."""

    def __init__(self, reason: str = "exactly one of command or response is required"):
        self.reason = reason
        super().__init__(f"Message construction failed: {reason}")


class FrameDecodeError(ElkProtocolError, ValueError):
    """Frame cannot be decoded.

    Attributes:
        reason: Specific failure reason (e.g., "too_short", "invalid_number")
        data_preview: First 16 characters of the frame (keeps keypad codes out of logs)
    """

    def __init__(self, reason: str, data: str = ""):
        self.reason = reason
        self.data_preview = data[:16] if data else ""
        super().__init__(f"Frame decode failed: {reason}")


class ChecksumMismatch(FrameDecodeError):
    """Recomputed checksum differs from the one received on the wire.

    Attributes:
        expected: Checksum computed from the frame contents
        received: Checksum carried by the frame
    """

    def __init__(self, expected: str, received: str, data: str = ""):
        self.expected = expected
        self.received = received
        super().__init__(f"checksum_mismatch (expected {expected}, received {received})", data)


class ValidationError(ElkProtocolError, ValueError):
    """Command argument is missing or outside the accepted range."""

    def __init__(self, message: str, field: str | None = None):
        self.field = field
        super().__init__(message)
