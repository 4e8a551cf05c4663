"""Elk M1 frame codec.

Wire layout (ASCII, CRLF terminated on the wire):

    LEN(2 hex) | TYPE(2) | BODY(variable) | CHECKSUM(2 hex)

LEN is the character count of TYPE + BODY + CHECKSUM. The checksum is the
two's complement of the byte sum of LEN + TYPE + BODY, so summing every byte
of a complete frame yields 0 modulo 256.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from elk_controller.protocol.exceptions import ChecksumMismatch, ConstructionError, FrameDecodeError

# Protocol constants
LENGTH_FIELD_WIDTH = 2
TYPE_CODE_WIDTH = 2
CHECKSUM_WIDTH = 2
FUTURE_USE_SUFFIX = "00"
MIN_FRAME_LENGTH = LENGTH_FIELD_WIDTH + TYPE_CODE_WIDTH + CHECKSUM_WIDTH
FRAME_TERMINATOR = "\r\n"

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Frame:
    """One decoded or encoded protocol frame."""

    length_field: str
    type_code: str
    body: str
    checksum: str
    raw: str

    @property
    def wire(self) -> bytes:
        """Frame as written to the socket, CRLF included."""
        return f"{self.raw}{FRAME_TERMINATOR}".encode("ascii")

    def __str__(self) -> str:
        return self.raw


def compute_checksum(data: str) -> str:
    """Return the 2-digit uppercase hex checksum of ``data``.

    Example:
        >>> compute_checksum("0AZC002200")
        'CE'
    """
    total = sum(ord(char) for char in data)
    checksum = (((total & 0xFF) ^ 0xFF) + 1) & 0xFF
    return f"{checksum:02X}"


def encode_frame(type_code: str, body: str = "") -> Frame:
    """Build an outbound frame, appending the reserved ``00`` suffix to ``body``.

    Example:
        >>> encode_frame("as").raw
        '06as0066'
    """
    body = f"{body}{FUTURE_USE_SUFFIX}"
    content = f"{type_code}{body}"
    length_field = f"{len(content) + CHECKSUM_WIDTH:02X}"
    checksum = compute_checksum(f"{length_field}{content}")
    raw = f"{length_field}{content}{checksum}"

    logger.debug(
        "Encoded frame: type=%s, length=%s, checksum=%s",
        type_code,
        length_field,
        checksum,
    )
    return Frame(length_field=length_field, type_code=type_code, body=body, checksum=checksum, raw=raw)


def valid_checksum(frame: Frame) -> bool:
    """Check that the frame's checksum matches its contents."""
    return compute_checksum(f"{frame.length_field}{frame.type_code}{frame.body}") == frame.checksum


def decode_frame(raw: str, registered_types: frozenset[str] | None = None) -> Frame:
    """Slice a received frame into its fields.

    The checksum is verified only for type codes absent from
    ``registered_types``. Decoders registered for a type code trust the frame
    as received.

    Raises:
        FrameDecodeError: If the frame is shorter than the fixed fields
        ChecksumMismatch: If validation applies and the checksum differs
    """
    if len(raw) < MIN_FRAME_LENGTH:
        error_reason = "too_short"
        raise FrameDecodeError(error_reason, raw)

    frame = Frame(
        length_field=raw[0:LENGTH_FIELD_WIDTH],
        type_code=raw[LENGTH_FIELD_WIDTH : LENGTH_FIELD_WIDTH + TYPE_CODE_WIDTH],
        body=raw[LENGTH_FIELD_WIDTH + TYPE_CODE_WIDTH : -CHECKSUM_WIDTH],
        checksum=raw[-CHECKSUM_WIDTH:],
        raw=raw,
    )

    if registered_types is None or frame.type_code not in registered_types:
        expected = compute_checksum(f"{frame.length_field}{frame.type_code}{frame.body}")
        if expected != frame.checksum:
            raise ChecksumMismatch(expected, frame.checksum, raw)

    return frame


def build_frame(command: str | None = None, response: str | None = None) -> Frame:
    """Build a frame from an outbound command string or an inbound response.

    ``command`` is a type code followed by its body (``"zv005"``) and is
    encoded. ``response`` is a raw frame and is decoded with checksum
    validation. Exactly one of the two must be given.

    Raises:
        ConstructionError: If both or neither argument is supplied
    """
    if (command is None) == (response is None):
        raise ConstructionError
    if command is not None:
        return encode_frame(command[:TYPE_CODE_WIDTH], command[TYPE_CODE_WIDTH:])
    return decode_frame(response or "")
