"""Publish/subscribe fan-out of decoded panel messages.

Channels are type codes ("ZC", "AS", ...), the wildcard channel that sees
every message, and the connection lifecycle channels.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from elk_controller.metrics import record_decode_error, record_frame_recv, record_subscriber_error
from elk_controller.protocol.decoders import get_message
from elk_controller.protocol.exceptions import FrameDecodeError
from elk_controller.protocol.line_framer import split_frames
from elk_controller.protocol.messages import ElkMessage

WILDCARD = "*"
CONNECTED = "connected"
ERROR = "error"
DISCONNECTED = "disconnected"

logger = logging.getLogger(__name__)

Callback = Callable[..., object]


@dataclass(eq=False)
class Subscription:
    """Handle returned by ``on``/``once``; pass it to ``off`` to unsubscribe."""

    channel: str
    callback: Callback
    once: bool = False
    active: bool = field(default=True, init=False)


class EventDispatcher:
    """Ordered subscriber registry keyed by channel.

    Callbacks run synchronously in subscription order. A callback that returns
    an awaitable has it scheduled as a task on the running loop.
    """

    def __init__(self) -> None:
        self._subscribers: dict[str, list[Subscription]] = {}
        self._tasks: set[asyncio.Task[object]] = set()

    def on(self, channel: str, callback: Callback) -> Subscription:
        return self._add(Subscription(channel=channel, callback=callback))

    def once(self, channel: str, callback: Callback) -> Subscription:
        """Subscribe for the next emission on ``channel`` only."""
        return self._add(Subscription(channel=channel, callback=callback, once=True))

    def off(self, subscription: Subscription) -> None:
        """Remove a subscription; removing one twice is a no-op."""
        subscription.active = False
        subscribers = self._subscribers.get(subscription.channel)
        if subscribers and subscription in subscribers:
            subscribers.remove(subscription)
            if not subscribers:
                del self._subscribers[subscription.channel]

    def subscriber_count(self, channel: str) -> int:
        return len(self._subscribers.get(channel, ()))

    def _add(self, subscription: Subscription) -> Subscription:
        self._subscribers.setdefault(subscription.channel, []).append(subscription)
        return subscription

    def emit(self, channel: str, *args: object) -> int:
        """Invoke every subscriber of ``channel``; return how many ran."""
        subscribers = list(self._subscribers.get(channel, ()))
        invoked = 0
        for subscription in subscribers:
            if not subscription.active:
                continue
            if subscription.once:
                self.off(subscription)
            invoked += 1
            try:
                result = subscription.callback(*args)
                if inspect.isawaitable(result):
                    self._schedule(result, channel)
            except Exception:
                record_subscriber_error(channel)
                logger.exception(
                    "✗ Subscriber on channel %s raised",
                    channel,
                    extra={"channel": channel, "callback": getattr(subscription.callback, "__name__", "?")},
                )
        return invoked

    def _schedule(self, awaitable: object, channel: str) -> None:
        task = asyncio.ensure_future(awaitable)  # type: ignore[arg-type]
        self._tasks.add(task)

        def _done(finished: asyncio.Task[object]) -> None:
            self._tasks.discard(finished)
            if not finished.cancelled() and finished.exception() is not None:
                record_subscriber_error(channel)
                logger.error(
                    "✗ Async subscriber on channel %s raised: %s",
                    channel,
                    finished.exception(),
                    extra={"channel": channel},
                )

        task.add_done_callback(_done)

    def dispatch(self, data: str) -> list[ElkMessage]:
        """Decode every frame in ``data`` and publish the results in wire order.

        Each message goes to the wildcard channel first, then to its type code
        channel. A frame that fails to decode is published on the error
        channel and the remaining frames are still processed.
        """
        messages: list[ElkMessage] = []
        for candidate in split_frames(data):
            try:
                message = get_message(candidate)
            except FrameDecodeError as e:
                record_decode_error(e.reason)
                logger.warning(
                    "✗ Failed to decode frame: %s",
                    e,
                    extra={"reason": e.reason, "data_preview": e.data_preview},
                )
                self.emit(ERROR, e)
                continue

            record_frame_recv(message.type_code)
            logger.debug("Dispatching %s frame", message.type_code, extra={"type_code": message.type_code})
            messages.append(message)
            self.emit(WILDCARD, message)
            self.emit(message.type_code, message)
        return messages
