"""Asyncio TCP/TLS socket abstraction with deadlines and instrumentation."""

from __future__ import annotations

import asyncio
import logging
import ssl
import time

from elk_controller.transport.exceptions import ElkConnectionError

logger = logging.getLogger(__name__)

REASON_REFUSED = "refused"
REASON_RESET = "reset"
REASON_TIMEOUT = "timeout"


def build_ssl_context(reject_unauthorized: bool = False, min_version: str | None = "TLSv1") -> ssl.SSLContext:
    """TLS client context for the M1XEP secure port.

    The M1XEP ships a self-signed certificate, so verification is off unless
    ``reject_unauthorized`` is set. ``min_version`` names an ``ssl.TLSVersion``
    member ("TLSv1", "TLSv1_2", ...).
    """
    context = ssl.create_default_context(ssl.Purpose.SERVER_AUTH)
    if not reject_unauthorized:
        context.check_hostname = False
        context.verify_mode = ssl.CERT_NONE
    if min_version:
        try:
            context.minimum_version = ssl.TLSVersion[min_version.replace(".", "_")]
        except KeyError:
            msg = f"Unknown TLS version: {min_version}"
            raise ValueError(msg) from None
    return context


class TCPConnection:
    """Async TCP connection with optional TLS, timeouts and instrumentation."""

    def __init__(
        self,
        host: str,
        port: int,
        ssl_context: ssl.SSLContext | None = None,
        connect_timeout: float = 5.0,
        io_timeout: float = 1.5,
        max_read_size: int = 4096,
    ):
        """
        Initialize TCP connection parameters.

        Args:
            host: Panel host
            port: Panel port (2101 plain, 2601 secure by M1XEP convention)
            ssl_context: TLS context, or None for plain TCP
            connect_timeout: Connection timeout in seconds
            io_timeout: Write timeout in seconds
            max_read_size: Maximum bytes to read in one operation
        """
        self.host = host
        self.port = port
        self.ssl_context = ssl_context
        self.connect_timeout = connect_timeout
        self.io_timeout = io_timeout
        self.max_read_size = max_read_size
        self.reader: asyncio.StreamReader | None = None
        self.writer: asyncio.StreamWriter | None = None
        self._connected = False

    async def connect(self) -> None:
        """
        Establish the connection with timeout.

        Raises:
            ElkConnectionError: reason "refused", "timeout" or the OS error text
        """
        start_time = time.perf_counter()
        extra = {"host": self.host, "port": self.port, "tls": self.ssl_context is not None}
        logger.info(
            "→ Connecting to %s:%d (timeout: %.1fs)",
            self.host,
            self.port,
            self.connect_timeout,
            extra=extra,
        )
        try:
            self.reader, self.writer = await asyncio.wait_for(
                asyncio.open_connection(self.host, self.port, ssl=self.ssl_context),
                timeout=self.connect_timeout,
            )
        except TimeoutError:
            elapsed_ms = (time.perf_counter() - start_time) * 1000
            logger.error(
                "✗ Connection to %s:%d timed out after %.1fms",
                self.host,
                self.port,
                elapsed_ms,
                extra={**extra, "elapsed_ms": elapsed_ms, "error": REASON_TIMEOUT},
            )
            raise ElkConnectionError(REASON_TIMEOUT, "connecting") from None
        except ConnectionRefusedError:
            logger.error(
                "✗ Connection to %s:%d refused",
                self.host,
                self.port,
                extra={**extra, "error": REASON_REFUSED},
            )
            raise ElkConnectionError(REASON_REFUSED, "connecting") from None
        except OSError as e:
            elapsed_ms = (time.perf_counter() - start_time) * 1000
            logger.error(
                "✗ Connection to %s:%d failed after %.1fms: %s",
                self.host,
                self.port,
                elapsed_ms,
                e,
                extra={**extra, "elapsed_ms": elapsed_ms, "error": str(e)},
            )
            raise ElkConnectionError(str(e), "connecting") from e

        elapsed_ms = (time.perf_counter() - start_time) * 1000
        self._connected = True
        logger.info(
            "✓ Connected to %s:%d in %.1fms",
            self.host,
            self.port,
            elapsed_ms,
            extra={**extra, "elapsed_ms": elapsed_ms},
        )

    async def send(self, data: bytes) -> bool:
        """
        Send data with timeout.

        Returns:
            True if sent successfully, False otherwise
        """
        if not self._connected or not self.writer:
            logger.error(
                "Cannot send: not connected",
                extra={"host": self.host, "port": self.port},
            )
            return False

        try:
            self.writer.write(data)
            await asyncio.wait_for(self.writer.drain(), timeout=self.io_timeout)
        except TimeoutError:
            logger.error(
                "✗ Send to %s:%d timed out",
                self.host,
                self.port,
                extra={"host": self.host, "port": self.port, "error": REASON_TIMEOUT},
            )
            return False
        except OSError as e:
            logger.error(
                "✗ Send to %s:%d failed: %s",
                self.host,
                self.port,
                e,
                extra={"host": self.host, "port": self.port, "error": str(e)},
            )
            return False

        logger.debug(
            "Sent %d bytes to %s:%d",
            len(data),
            self.host,
            self.port,
            extra={"bytes": len(data), "host": self.host, "port": self.port},
        )
        return True

    async def recv(self, max_bytes: int | None = None) -> bytes | None:
        """
        Wait for the next chunk from the panel.

        The M1XEP sends a keep-alive every 30 seconds, so no read deadline is
        applied.

        Returns:
            Received bytes, or None once the peer has closed the connection

        Raises:
            ElkConnectionError: reason "reset" on a connection reset, or the OS error text
        """
        if not self._connected or not self.reader:
            msg = "not connected"
            raise ElkConnectionError(msg, "disconnected")

        try:
            data = await self.reader.read(max_bytes or self.max_read_size)
        except ConnectionResetError:
            self._connected = False
            logger.warning(
                "✗ Connection reset by %s:%d",
                self.host,
                self.port,
                extra={"host": self.host, "port": self.port, "error": REASON_RESET},
            )
            raise ElkConnectionError(REASON_RESET, "connected") from None
        except OSError as e:
            self._connected = False
            raise ElkConnectionError(str(e), "connected") from e

        if not data:
            logger.warning(
                "Connection closed by %s:%d",
                self.host,
                self.port,
                extra={"host": self.host, "port": self.port},
            )
            self._connected = False
            return None

        logger.debug(
            "Received %d bytes from %s:%d",
            len(data),
            self.host,
            self.port,
            extra={"bytes": len(data), "host": self.host, "port": self.port},
        )
        return data

    async def close(self) -> None:
        """Close the connection."""
        if self.writer:
            logger.info(
                "Closing connection to %s:%d",
                self.host,
                self.port,
                extra={"host": self.host, "port": self.port},
            )
            try:
                self.writer.close()
                await self.writer.wait_closed()
            except OSError as e:
                logger.warning(
                    "Error closing connection: %s",
                    e,
                    extra={
                        "host": self.host,
                        "port": self.port,
                        "error": str(e),
                        "error_type": type(e).__name__,
                    },
                )
            finally:
                self._connected = False
                self.writer = None
                self.reader = None

    @property
    def is_connected(self) -> bool:
        """Check if connection is active."""
        return self._connected

    def __repr__(self) -> str:
        status = "connected" if self._connected else "disconnected"
        scheme = "tls" if self.ssl_context else "tcp"
        return f"TCPConnection({scheme}://{self.host}:{self.port}, {status})"
