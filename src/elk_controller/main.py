"""Main entrypoint: connect to an Elk M1 and log its traffic until stopped."""

from __future__ import annotations

import argparse
import asyncio
import logging
import signal
from pathlib import Path

import dotenv
import pydantic
import uvloop

from elk_controller.client import ElkClient
from elk_controller.const import ELK_DEBUG, ELK_LOG_NAME, ELK_METRICS_ENABLED, ELK_METRICS_PORT, ELK_VERSION
from elk_controller.correlation import correlation_context, ensure_correlation_id
from elk_controller.logging_abstraction import get_logger
from elk_controller.metrics import start_metrics_server
from elk_controller.protocol.messages import ElkMessage
from elk_controller.structs import ConnectOptions
from elk_controller.transport.dispatcher import DISCONNECTED, ERROR, WILDCARD
from elk_controller.transport.exceptions import ElkConnectionError, RequestTimeoutError

# Package-level logger so module loggers propagate into its handlers
logger = get_logger(ELK_LOG_NAME)


def parse_cli(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Elk M1 Controller")
    _ = parser.add_argument("--host", help="M1XEP host name or address", default=None)
    _ = parser.add_argument("--port", help="M1XEP port (2101 plain, 2601 secure)", default=None, type=int)
    _ = parser.add_argument(
        "--secure",
        action="store_true",
        default=None,
        help="Use the TLS port and log in with ELK_USERNAME / ELK_PASSWORD",
    )
    _ = parser.add_argument(
        "-D",
        "--debug",
        action="store_true",
        help="Enable debug mode",
    )
    _ = parser.add_argument("--env", help="Environment file with ELK_* connection settings", default=None, type=Path)
    args = parser.parse_args(argv)

    if args.env:
        env_path = args.env.expanduser().resolve()
        if not env_path.exists():
            logger.error(
                "Environment file not found",
                extra={"path": str(env_path)},
            )
        elif dotenv.load_dotenv(env_path, override=True):
            logger.info(
                "✓ Environment variables loaded",
                extra={"source": str(env_path)},
            )
        else:
            logger.warning(
                "No environment variables loaded from file",
                extra={"path": str(env_path)},
            )

    if args.debug or ELK_DEBUG:
        logger.setLevel(logging.DEBUG)
        logger.debug("Debug logging enabled")

    return args


def build_options(args: argparse.Namespace) -> ConnectOptions:
    """Environment options with any CLI overrides applied (and re-validated)."""
    options = ConnectOptions.from_env()
    overrides = {
        key: value
        for key, value in (("host", args.host), ("port", args.port), ("secure", args.secure))
        if value is not None
    }
    if not overrides:
        return options
    return ConnectOptions.model_validate({**options.model_dump(), **overrides})


def _log_message(message: ElkMessage) -> None:
    logger.info("%s %s", message.type_code, message.body, extra={"type_code": message.type_code})


def _log_error(error: object) -> None:
    logger.error("✗ %s", error)


async def run(options: ConnectOptions) -> None:
    """Connect, take an initial snapshot, then log every message until SIGINT/SIGTERM."""
    _ = ensure_correlation_id()
    stop = asyncio.Event()
    loop = asyncio.get_running_loop()
    for signum in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(signum, stop.set)
    logger.debug("Signal handlers configured for SIGINT & SIGTERM")

    client = ElkClient(options)
    _ = client.on(WILDCARD, _log_message)
    _ = client.on(ERROR, _log_error)
    _ = client.on(DISCONNECTED, lambda reason: logger.warning("Disconnected: %s", reason))

    await client.connect()
    try:
        try:
            arming = await client.request_arming_status()
            for area in arming.areas:
                logger.info(
                    "Area %d: %s / %s / %s",
                    area.id,
                    area.arm_status,
                    area.arm_up_state,
                    area.alarm_state,
                )
            zones = await client.request_zone_status()
            logger.info(
                "✓ Zone status received",
                extra={"violated": sum(1 for zone in zones.zones if zone.logical_state == "Violated")},
            )
        except RequestTimeoutError as e:
            logger.warning("✗ Initial snapshot incomplete: %s", e)

        _ = await stop.wait()
        logger.info("Stop requested, shutting down...")
    finally:
        await client.disconnect()


def main() -> None:
    """Main entry point for the Elk M1 controller."""
    with correlation_context():
        logger.info("Starting Elk M1 Controller", extra={"version": ELK_VERSION})

        args = parse_cli()

        if ELK_METRICS_ENABLED:
            start_metrics_server(ELK_METRICS_PORT)
            logger.info("✓ Metrics server started", extra={"port": ELK_METRICS_PORT})

        try:
            options = build_options(args)
        except pydantic.ValidationError as e:
            logger.error("✗ Invalid connection options: %s", e)
            raise SystemExit(2) from None

        try:
            uvloop.run(run(options))
        except KeyboardInterrupt:
            logger.info("Keyboard interrupt received, shutting down...")
        except ElkConnectionError as e:
            logger.error("✗ Could not connect to the panel: %s", e)
            raise SystemExit(1) from None
        except Exception as e:
            logger.exception(
                "✗ Fatal error in main loop",
                extra={"error": str(e)},
            )
            raise SystemExit(1) from None
        else:
            logger.info("✓ Elk M1 Controller stopped gracefully")


if __name__ == "__main__":
    main()
