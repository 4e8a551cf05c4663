"""Elk M1 ASCII protocol: frame codec, message decoders and command encoders."""

from elk_controller.protocol.decoders import MESSAGE_REGISTRY, classify_event, get_message
from elk_controller.protocol.exceptions import (
    ChecksumMismatch,
    ConstructionError,
    ElkProtocolError,
    FrameDecodeError,
    ValidationError,
)
from elk_controller.protocol.frame import (
    Frame,
    build_frame,
    compute_checksum,
    decode_frame,
    encode_frame,
    valid_checksum,
)
from elk_controller.protocol.line_framer import split_frames

__all__ = [
    "MESSAGE_REGISTRY",
    "ChecksumMismatch",
    "ConstructionError",
    "ElkProtocolError",
    "Frame",
    "FrameDecodeError",
    "ValidationError",
    "build_frame",
    "classify_event",
    "compute_checksum",
    "decode_frame",
    "encode_frame",
    "get_message",
    "split_frames",
    "valid_checksum",
]
