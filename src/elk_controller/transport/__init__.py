"""Connection, dispatch and request correlation for the Elk M1 client."""

from elk_controller.transport.connection_manager import ConnectionState, ElkConnection
from elk_controller.transport.dispatcher import (
    CONNECTED,
    DISCONNECTED,
    ERROR,
    WILDCARD,
    EventDispatcher,
    Subscription,
)
from elk_controller.transport.exceptions import ElkConnectionError, RequestTimeoutError
from elk_controller.transport.request_correlator import PendingRequest, RequestCorrelator
from elk_controller.transport.retry_policy import ReconnectPolicy, RetryPolicy
from elk_controller.transport.socket_abstraction import TCPConnection, build_ssl_context

__all__ = [
    "CONNECTED",
    "DISCONNECTED",
    "ERROR",
    "WILDCARD",
    "ConnectionState",
    "ElkConnection",
    "ElkConnectionError",
    "EventDispatcher",
    "PendingRequest",
    "ReconnectPolicy",
    "RequestCorrelator",
    "RequestTimeoutError",
    "RetryPolicy",
    "Subscription",
    "TCPConnection",
    "build_ssl_context",
]
