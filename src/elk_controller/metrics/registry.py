"""Prometheus metrics registry for the Elk M1 connection."""

import threading
from typing import Final

from prometheus_client import (  # type: ignore[import-untyped]
    Counter,
    Gauge,
    Histogram,
    start_http_server,
)

CONNECTION_STATES: Final = ("disconnected", "connecting", "connected", "reconnecting")

elk_frame_sent_total: Final = Counter(  # type: ignore[assignment]
    "elk_frame_sent_total",
    "Total frames written to the panel",
    ["type_code", "outcome"],
)

elk_frame_recv_total: Final = Counter(  # type: ignore[assignment]
    "elk_frame_recv_total",
    "Total frames decoded from the panel",
    ["type_code"],
)

elk_decode_errors_total: Final = Counter(  # type: ignore[assignment]
    "elk_decode_errors_total",
    "Total frames that failed to decode",
    ["reason"],
)

elk_request_total: Final = Counter(  # type: ignore[assignment]
    "elk_request_total",
    "Total correlated requests by outcome",
    ["type_code", "outcome"],
)

elk_request_latency_seconds: Final = Histogram(  # type: ignore[assignment]
    "elk_request_latency_seconds",
    "Time from request write to matching reply in seconds",
    ["type_code"],
    buckets=(0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.0, 5.0, 15.0),
)

elk_reconnection_total: Final = Counter(  # type: ignore[assignment]
    "elk_reconnection_total",
    "Total reconnection attempts",
    ["reason"],
)

elk_connection_state: Final = Gauge(  # type: ignore[assignment]
    "elk_connection_state",
    "Current connection state",
    ["state"],
)

elk_subscriber_errors_total: Final = Counter(  # type: ignore[assignment]
    "elk_subscriber_errors_total",
    "Total exceptions raised by event subscribers",
    ["channel"],
)

_server_state = {"started": False}
_server_lock = threading.Lock()


def start_metrics_server(port: int = 9400) -> None:
    """Start Prometheus HTTP metrics server (idempotent)."""
    with _server_lock:
        if not _server_state["started"]:
            start_http_server(port)  # type: ignore[no-untyped-call]
            _server_state["started"] = True


def record_frame_sent(type_code: str, outcome: str) -> None:
    """Record a frame write."""
    elk_frame_sent_total.labels(type_code=type_code, outcome=outcome).inc()  # type: ignore[no-untyped-call]


def record_frame_recv(type_code: str) -> None:
    """Record a decoded frame."""
    elk_frame_recv_total.labels(type_code=type_code).inc()  # type: ignore[no-untyped-call]


def record_decode_error(reason: str) -> None:
    """Record a decode error."""
    elk_decode_errors_total.labels(reason=reason).inc()  # type: ignore[no-untyped-call]


def record_request(type_code: str, outcome: str) -> None:
    """Record a correlated request outcome ("success", "timeout" or "error")."""
    elk_request_total.labels(type_code=type_code, outcome=outcome).inc()  # type: ignore[no-untyped-call]


def record_request_latency(type_code: str, latency_seconds: float) -> None:
    """Record request round-trip latency."""
    elk_request_latency_seconds.labels(type_code=type_code).observe(latency_seconds)  # type: ignore[no-untyped-call]


def record_reconnection(reason: str) -> None:
    """Record a reconnection attempt."""
    elk_reconnection_total.labels(reason=reason).inc()  # type: ignore[no-untyped-call]


def record_connection_state(state: str) -> None:
    """Record connection state change."""
    # 1 for the current state, 0 for the rest
    for s in CONNECTION_STATES:
        elk_connection_state.labels(state=s).set(1 if s == state else 0)  # type: ignore[no-untyped-call]


def record_subscriber_error(channel: str) -> None:
    """Record an exception raised by an event subscriber."""
    elk_subscriber_errors_total.labels(channel=channel).inc()  # type: ignore[no-untyped-call]
