"""Shared fixtures for unit tests.

This module provides reusable fixtures for testing Elk M1 client components.
"""

import secrets
from collections.abc import Callable
from unittest.mock import AsyncMock, MagicMock

import pytest

from elk_controller.structs import ConnectOptions
from elk_controller.transport.dispatcher import EventDispatcher
from elk_controller.transport.socket_abstraction import TCPConnection


def make_dummy_secret(prefix: str = "secret") -> str:
    """Return a deterministic-looking but non-literal secret string for tests."""
    return f"{prefix}-{secrets.token_hex(16)}"


@pytest.fixture
def dummy_secret_factory() -> Callable[[str], str]:
    """Create non-literal secrets for tests."""

    def _make(prefix: str = "secret") -> str:
        return make_dummy_secret(prefix)

    return _make


@pytest.fixture
def options() -> ConnectOptions:
    """Plain (non-TLS) connection options with short timeouts."""
    return ConnectOptions(
        host="192.168.1.50",
        port=2101,
        secure=False,
        keypad_code="1234",
        request_timeout=0.2,
        description_timeout=0.2,
        reconnect_mode="backoff",
        reconnect_max_attempts=2,
    )


@pytest.fixture
def secure_options(dummy_secret_factory: Callable[[str], str]) -> ConnectOptions:
    """Secure connection options with credentials."""
    return ConnectOptions(
        host="192.168.1.50",
        port=2601,
        secure=True,
        username="installer",
        password=dummy_secret_factory("password"),
        request_timeout=0.2,
    )


@pytest.fixture
def dispatcher() -> EventDispatcher:
    return EventDispatcher()


@pytest.fixture
def mock_tcp_connection() -> MagicMock:
    """Mock TCPConnection whose recv blocks until a test feeds it.

    Returns a MagicMock with async connect/send/recv/close. ``recv`` returns
    nothing useful by default; tests set ``side_effect`` as needed.
    """
    conn: MagicMock = MagicMock(spec=TCPConnection)
    conn.connect = AsyncMock()
    conn.send = AsyncMock(return_value=True)
    conn.recv = AsyncMock(return_value=None)
    conn.close = AsyncMock()
    conn.is_connected = True
    return conn
