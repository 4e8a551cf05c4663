"""Connection lifecycle for the M1XEP: connect, login, read loop and reconnect.

This module implements the ElkConnection class which owns the socket, answers
the secure-port login prompts, feeds received text to the dispatcher and
re-establishes the connection after a reset.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from enum import Enum

from elk_controller.const import LOGIN_SUCCESS_PROMPT, PASSWORD_PROMPT, USERNAME_PROMPT
from elk_controller.metrics import record_connection_state, record_frame_sent, record_reconnection
from elk_controller.protocol.frame import FRAME_TERMINATOR, Frame
from elk_controller.structs import ConnectOptions
from elk_controller.transport.dispatcher import CONNECTED, DISCONNECTED, ERROR, EventDispatcher
from elk_controller.transport.exceptions import ElkConnectionError
from elk_controller.transport.retry_policy import ReconnectPolicy
from elk_controller.transport.socket_abstraction import (
    REASON_REFUSED,
    REASON_RESET,
    TCPConnection,
    build_ssl_context,
)

CONNECTION_FAILED_MESSAGE = "Connection to M1XEP failed!"
CONNECTION_LOST_MESSAGE = "The connection to the Elk M1 has been lost"
SECURE_NOISE_PREFIX = "**"

logger = logging.getLogger(__name__)


class ConnectionState(Enum):
    """Connection state enumeration."""

    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    CONNECTED = "connected"
    RECONNECTING = "reconnecting"


class ElkConnection:
    """Owns one panel connection and publishes its traffic on a dispatcher.

    Lifecycle events go to the dispatcher's ``connected``, ``error`` and
    ``disconnected`` channels. Error payloads are exceptions.
    """

    def __init__(
        self,
        options: ConnectOptions,
        dispatcher: EventDispatcher,
        reconnect_policy: ReconnectPolicy | None = None,
        connection: TCPConnection | None = None,
    ) -> None:
        """Initialize the connection.

        Args:
            options: Validated connection options
            dispatcher: Receives decoded messages and lifecycle events
            reconnect_policy: Reset handling (defaults to the options' mode)
            connection: Socket abstraction (built from the options if None)

        """
        self.options: ConnectOptions = options
        self.dispatcher: EventDispatcher = dispatcher
        self.reconnect_policy: ReconnectPolicy = reconnect_policy or ReconnectPolicy(
            mode=options.reconnect_mode,
            max_attempts=options.reconnect_max_attempts,
        )
        if connection is None:
            ssl_context = (
                build_ssl_context(options.reject_unauthorized, options.tls_min_version) if options.secure else None
            )
            connection = TCPConnection(
                options.host,
                options.port,
                ssl_context=ssl_context,
                connect_timeout=options.connect_timeout,
            )
        self.conn: TCPConnection = connection
        self.state: ConnectionState = ConnectionState.DISCONNECTED
        self.authorized: bool = False
        self.reader_task: asyncio.Task[None] | None = None
        self.reconnect_task: asyncio.Task[bool] | None = None
        self._closing: bool = False

    def _set_state(self, state: ConnectionState) -> None:
        self.state = state
        record_connection_state(state.value)

    async def connect(self) -> None:
        """Open the socket and start the read loop.

        In plain mode ``connected`` is published at once. In secure mode it is
        published when the M1XEP confirms the login.

        Raises:
            ElkConnectionError: If the socket cannot be opened
        """
        self._closing = False
        self._set_state(ConnectionState.CONNECTING)
        try:
            await self.conn.connect()
        except ElkConnectionError as e:
            self._set_state(ConnectionState.DISCONNECTED)
            error = ElkConnectionError(CONNECTION_FAILED_MESSAGE, e.state) if e.reason == REASON_REFUSED else e
            self.dispatcher.emit(ERROR, error)
            if error is e:
                raise
            raise error from e

        self.authorized = not self.options.secure
        self._set_state(ConnectionState.CONNECTED)
        self.reader_task = asyncio.create_task(self._read_loop())
        if not self.options.secure:
            self.dispatcher.emit(CONNECTED)

    async def _read_loop(self) -> None:
        """Read chunks until the socket closes or fails.

        **Exception Handling**:
        - asyncio.CancelledError: Clean shutdown from disconnect() (re-raised)
        - Reset: published on the error channel, then reconnect per policy
        - Other connection errors: published, then treated as a close
        """
        try:
            while True:
                data = await self.conn.recv()
                if data is None:
                    self._handle_close()
                    return
                await self.handle_data(data.decode("ascii", errors="replace"))
        except asyncio.CancelledError:
            logger.debug("Read loop cancelled (clean shutdown)")
            raise
        except ElkConnectionError as e:
            self.dispatcher.emit(ERROR, e)
            if e.reason == REASON_RESET and not self._closing:
                self._trigger_reconnect(REASON_RESET)
            else:
                self._handle_close()

    async def handle_data(self, data: str) -> None:
        """Answer login prompts, then hand panel text to the dispatcher."""
        if data.strip() == USERNAME_PROMPT:
            logger.debug("Login prompt: sending username")
            await self._write_line(self.options.username or "")
            return
        if PASSWORD_PROMPT in data:
            logger.debug("Login prompt: sending password")
            await self._write_line(self.options.password or "")
            return
        if LOGIN_SUCCESS_PROMPT in data:
            self.authorized = True
            logger.info("✓ Logged in to M1XEP", extra={"host": self.options.host})
            self.dispatcher.emit(CONNECTED)
            return

        # The secure port echoes banner lines during and after login
        if self.options.secure and (not self.authorized or data.startswith(SECURE_NOISE_PREFIX)):
            return

        self.dispatcher.dispatch(data)

    def _handle_close(self) -> None:
        self.authorized = False
        if self._closing:
            return
        self._set_state(ConnectionState.DISCONNECTED)
        logger.warning(CONNECTION_LOST_MESSAGE, extra={"host": self.options.host})
        self.dispatcher.emit(DISCONNECTED, CONNECTION_LOST_MESSAGE)

    async def _write_line(self, text: str) -> bool:
        return await self.conn.send(f"{text}{FRAME_TERMINATOR}".encode("ascii"))

    async def write_frame(self, frame: Frame) -> None:
        """Write one frame followed by CRLF.

        Raises:
            ElkConnectionError: If the frame could not be written
        """
        if not await self.conn.send(frame.wire):
            record_frame_sent(frame.type_code, "error")
            msg = f"failed to write {frame.type_code} frame"
            raise ElkConnectionError(msg, self.state.value)
        record_frame_sent(frame.type_code, "success")

    def _trigger_reconnect(self, reason: str) -> None:
        """Start a reconnect task unless one is already running."""
        if self.reconnect_task is None or self.reconnect_task.done():
            logger.info("Triggering reconnection", extra={"reason": reason})
            self.reconnect_task = asyncio.create_task(self.reconnect(reason))
        else:
            logger.debug("Reconnection already in progress", extra={"reason": reason})

    async def reconnect(self, reason: str = "unknown") -> bool:
        """Re-open the connection as the reconnect policy allows.

        Returns:
            True if reconnected, False once the policy gives up
        """
        logger.info(
            "→ Starting reconnection",
            extra={"reason": reason, "policy": repr(self.reconnect_policy)},
        )
        self._set_state(ConnectionState.RECONNECTING)
        self.authorized = False
        await self.conn.close()

        attempt = 0
        while self.reconnect_policy.should_retry(attempt):
            await asyncio.sleep(self.reconnect_policy.get_delay(attempt))
            if self._closing:
                return False
            record_reconnection(reason)
            try:
                await self.connect()
            except ElkConnectionError as e:
                logger.warning(
                    "✗ Reconnection attempt %d failed: %s",
                    attempt + 1,
                    e.reason,
                    extra={"reason": reason, "attempt": attempt + 1},
                )
                attempt += 1
                continue
            logger.info("✓ Reconnection successful", extra={"reason": reason, "attempts": attempt + 1})
            return True

        self._set_state(ConnectionState.DISCONNECTED)
        logger.error(
            "✗ Reconnection failed",
            extra={"reason": reason, "attempts": attempt},
        )
        self.dispatcher.emit(DISCONNECTED, CONNECTION_LOST_MESSAGE)
        return False

    async def disconnect(self) -> None:
        """Close the connection and stop the read and reconnect tasks."""
        logger.info("Disconnecting...")
        self._closing = True
        current = asyncio.current_task()

        for task in (self.reader_task, self.reconnect_task):
            if task is not None and task is not current and not task.done():
                _ = task.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await task
        self.reader_task = None
        self.reconnect_task = None

        await self.conn.close()
        was_connected = self.state is not ConnectionState.DISCONNECTED
        self.authorized = False
        self._set_state(ConnectionState.DISCONNECTED)
        if was_connected:
            self.dispatcher.emit(DISCONNECTED, CONNECTION_LOST_MESSAGE)
        logger.info("Disconnect complete")

    @property
    def is_connected(self) -> bool:
        """Connected and, in secure mode, logged in."""
        return self.state is ConnectionState.CONNECTED and self.authorized
