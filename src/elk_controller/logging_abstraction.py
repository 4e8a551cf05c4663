"""Log output for the Elk controller.

Library modules log through ``logging.getLogger(__name__)`` and pass panel
context as ``extra={...}``. The formatters here lift that context back off
the record: the message type code and the request correlation ID get their
own fields, everything else is appended as ``key=value`` pairs (human) or a
``context`` object (JSON).
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime
from pathlib import Path
from typing_extensions import override

from elk_controller.const import ELK_DEBUG, ELK_LOG_FORMAT, ELK_LOG_HUMAN_OUTPUT, ELK_LOG_JSON_FILE, ELK_LOG_NAME
from elk_controller.correlation import get_correlation_id

__all__ = [
    "HumanReadableFormatter",
    "JSONFormatter",
    "get_logger",
]

# Attributes every LogRecord carries; anything else arrived through ``extra``
_RECORD_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {
    "message",
    "asctime",
    "elk_prefix",
}


def record_context(record: logging.LogRecord) -> tuple[str | None, str | None, dict[str, object]]:
    """Split a record's extras into (type_code, correlation_id, remaining context).

    The correlation ID passed by the request correlator wins over the one
    active in the logging task.
    """
    context = {key: value for key, value in vars(record).items() if key not in _RECORD_ATTRS}
    type_code = context.pop("type_code", None)
    correlation_id = context.pop("correlation_id", None) or get_correlation_id()
    return (
        str(type_code) if type_code else None,
        str(correlation_id) if correlation_id else None,
        context,
    )


class JSONFormatter(logging.Formatter):
    """One JSON object per record."""

    @override
    def format(self, record: logging.LogRecord) -> str:
        type_code, correlation_id, context = record_context(record)
        log_data: dict[str, object] = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "line": record.lineno,
            "message": record.getMessage(),
            "correlation_id": correlation_id,
        }
        if type_code:
            log_data["type_code"] = type_code
        if context:
            log_data["context"] = context
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


class HumanReadableFormatter(logging.Formatter):
    """``time level [module:line] [correlation] TYPE > message | key=value``."""

    def __init__(self) -> None:
        super().__init__(
            fmt="%(asctime)s.%(msecs)03d %(levelname)s [%(module)s:%(lineno)d] %(elk_prefix)s> %(message)s",
            datefmt="%m/%d/%y %H:%M:%S",
        )

    @override
    def format(self, record: logging.LogRecord) -> str:
        type_code, correlation_id, context = record_context(record)
        prefix = f"[{correlation_id or '-'}] "
        if type_code:
            prefix += f"{type_code} "
        record.elk_prefix = prefix

        formatted = super().format(record)
        if context:
            formatted += " | " + " | ".join(f"{key}={value}" for key, value in context.items())
        return formatted


def _human_handler(human_output: str) -> logging.Handler:
    if human_output == "stdout":
        return logging.StreamHandler(sys.stdout)
    if human_output == "stderr":
        return logging.StreamHandler(sys.stderr)
    path = Path(human_output)
    path.parent.mkdir(parents=True, exist_ok=True)
    return logging.FileHandler(path, mode="a")


def get_logger(
    name: str = ELK_LOG_NAME,
    log_format: str | None = None,
    json_file: str | Path | None = None,
    human_output: str | None = None,
    debug: bool | None = None,
) -> logging.Logger:
    """Attach Elk handlers to ``name`` (once) and return the logger.

    Called for the package logger, so every ``elk_controller.*`` module logger
    propagates into these handlers. Unset arguments fall back to the
    ``ELK_LOG_*`` settings. ``log_format`` is "human", "json" or "both"; JSON
    goes to ``json_file`` when set, stdout otherwise.
    """
    log_format = log_format or ELK_LOG_FORMAT
    json_file = json_file or ELK_LOG_JSON_FILE
    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG if (ELK_DEBUG if debug is None else debug) else logging.INFO)
    if logger.handlers:
        return logger

    if log_format in ("json", "both"):
        if json_file:
            json_path = Path(json_file)
            json_path.parent.mkdir(parents=True, exist_ok=True)
            json_handler: logging.Handler = logging.FileHandler(json_path, mode="a")
        else:
            json_handler = logging.StreamHandler(sys.stdout)
        json_handler.setFormatter(JSONFormatter())
        logger.addHandler(json_handler)

    if log_format in ("human", "both"):
        human_handler = _human_handler(human_output or ELK_LOG_HUMAN_OUTPUT)
        human_handler.setFormatter(HumanReadableFormatter())
        logger.addHandler(human_handler)

    return logger
