"""Exception types for the transport and request layers."""

from __future__ import annotations

from elk_controller.protocol.exceptions import ElkProtocolError


class ElkConnectionError(ElkProtocolError):
    """Connection refused, reset or closed, or a write without a connection.

    Note: Named ElkConnectionError to avoid shadowing Python's built-in ConnectionError.

    Attributes:
        reason: Specific failure reason
        state: Connection state when error occurred
    """

    def __init__(self, reason: str, state: str = "unknown"):
        self.reason = reason
        self.state = state
        super().__init__(f"Connection error: {reason} (state: {state})")


class RequestTimeoutError(ElkProtocolError, TimeoutError):
    """No reply of the expected type arrived within the request window.

    Attributes:
        command: Human-readable name of the request
        type_code: Reply type code that was awaited
        timeout_seconds: Window that elapsed
        correlation_id: Correlation ID of the request
    """

    def __init__(self, command: str, type_code: str, timeout_seconds: float, correlation_id: str = ""):
        self.command = command
        self.type_code = type_code
        self.timeout_seconds = timeout_seconds
        self.correlation_id = correlation_id
        super().__init__(f"Timeout occurred before {command} ({type_code.lower()}) was received.")
