"""Match requests to the next reply of their type code.

The panel carries no request identifiers, so a request is satisfied by the
next decoded message whose type code equals the expected reply type. Two
in-flight requests for the same type code both resolve with whichever reply
arrives first; callers serialize same-type requests when that matters.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from elk_controller.const import DEFAULT_DESCRIPTION_TIMEOUT, DEFAULT_REQUEST_TIMEOUT
from elk_controller.correlation import correlation_context
from elk_controller.metrics import record_request, record_request_latency
from elk_controller.protocol import lookups
from elk_controller.protocol.commands import encode_text_description_request
from elk_controller.protocol.frame import Frame
from elk_controller.protocol.messages import ElkMessage, TextStringDescriptionReport
from elk_controller.transport.dispatcher import EventDispatcher
from elk_controller.transport.exceptions import RequestTimeoutError

TEXT_DESCRIPTION_REPLY = "SD"

logger = logging.getLogger(__name__)

SendFrame = Callable[[Frame], Awaitable[None]]


@dataclass
class PendingRequest:
    """An outstanding request awaiting its reply type code."""

    type_code: str
    command: str
    created_at: float
    future: asyncio.Future[ElkMessage]
    correlation_id: str


class RequestCorrelator:
    """Issue a request frame and await the next message of the reply type."""

    def __init__(self, dispatcher: EventDispatcher, send: SendFrame):
        """
        Initialize the correlator.

        Args:
            dispatcher: Dispatcher publishing decoded messages
            send: Coroutine writing one frame to the panel; raises on failure
        """
        self.dispatcher = dispatcher
        self._send = send
        self.pending: dict[str, PendingRequest] = {}

    async def request(
        self,
        type_code: str,
        frame: Frame,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
        command: str | None = None,
    ) -> ElkMessage:
        """Send ``frame`` and return the next ``type_code`` message.

        Args:
            type_code: Reply type code to wait for ("AS", "ZS", ...)
            frame: Request frame to write
            timeout: Seconds to wait for the reply after the write
            command: Name used in the timeout message (defaults to the type code)

        Raises:
            RequestTimeoutError: If no reply arrives within ``timeout``
            ElkConnectionError: If the frame cannot be written
        """
        command = command or type_code
        loop = asyncio.get_running_loop()

        with correlation_context(type_code=type_code) as correlation_id:
            future: asyncio.Future[ElkMessage] = loop.create_future()

            def _on_reply(message: ElkMessage) -> None:
                if not future.done():
                    future.set_result(message)

            subscription = self.dispatcher.once(type_code, _on_reply)
            pending = PendingRequest(
                type_code=type_code,
                command=command,
                created_at=time.monotonic(),
                future=future,
                correlation_id=correlation_id,
            )
            self.pending[type_code] = pending

            logger.debug(
                "→ Requesting %s (%s)",
                command,
                frame.type_code,
                extra={"type_code": type_code, "timeout": timeout, "correlation_id": correlation_id},
            )
            try:
                await self._send(frame)
                message = await asyncio.wait_for(future, timeout=timeout)
            except TimeoutError:
                record_request(type_code, "timeout")
                logger.warning(
                    "✗ Timeout waiting for %s after %.1fs",
                    command,
                    timeout,
                    extra={"type_code": type_code, "correlation_id": correlation_id},
                )
                raise RequestTimeoutError(command, frame.type_code, timeout, pending.correlation_id) from None
            except Exception:
                record_request(type_code, "error")
                raise
            finally:
                self.dispatcher.off(subscription)
                if self.pending.get(type_code) is pending:
                    del self.pending[type_code]

            latency = time.monotonic() - pending.created_at
            record_request(type_code, "success")
            record_request_latency(type_code, latency)
            logger.debug(
                "✓ Received %s in %.1fms",
                type_code,
                latency * 1000,
                extra={"type_code": type_code, "correlation_id": correlation_id},
            )
            return message

    async def request_all_descriptions(
        self,
        description_type: int | str,
        timeout: float = DEFAULT_DESCRIPTION_TIMEOUT,
    ) -> list[TextStringDescriptionReport]:
        """Fetch every configured description of one type.

        Starts at id 1. The panel answers an unconfigured id with the next
        configured one, so each reply's id seeds the following request. The
        walk stops at the first reply whose id is 0 or not below the type's
        max range. Any request error aborts the whole fetch.
        """
        type_code = lookups.description_type_code(description_type)
        max_range = lookups.TEXT_DESCRIPTION_MAX_RANGE[type_code]
        descriptions: list[TextStringDescriptionReport] = []
        next_id = 1

        while True:
            reply = await self.request(
                TEXT_DESCRIPTION_REPLY,
                encode_text_description_request(type_code, next_id),
                timeout=timeout,
                command="Text Description",
            )
            if not isinstance(reply, TextStringDescriptionReport) or not 0 < reply.id < max_range:
                break
            descriptions.append(reply)
            next_id = reply.id + 1

        logger.info(
            "✓ Fetched %d %s descriptions",
            len(descriptions),
            lookups.TEXT_DESCRIPTION_TYPE[type_code],
            extra={"description_type": type_code, "count": len(descriptions)},
        )
        return descriptions
