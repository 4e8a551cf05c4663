"""Unit tests for splitting received chunks into frames."""

import pytest

from elk_controller.protocol.line_framer import split_frames
from tests.fixtures.real_frames import OUTPUT_CHANGE, ZONE_CHANGE


@pytest.mark.unit
def test_split_crlf_frames() -> None:
    """Test CRLF terminated frames are split in order."""
    data = f"{ZONE_CHANGE}\r\n{OUTPUT_CHANGE}\r\n"
    assert split_frames(data) == [ZONE_CHANGE, OUTPUT_CHANGE]


@pytest.mark.unit
def test_blank_lines_dropped() -> None:
    """Test empty and whitespace-only lines are skipped."""
    data = f"\r\n{ZONE_CHANGE}\r\n\r\n  \r\n{OUTPUT_CHANGE}"
    assert split_frames(data) == [ZONE_CHANGE, OUTPUT_CHANGE]


@pytest.mark.unit
def test_bare_newlines() -> None:
    """Test frames separated by LF alone."""
    assert split_frames(f"{ZONE_CHANGE}\n{OUTPUT_CHANGE}\n") == [ZONE_CHANGE, OUTPUT_CHANGE]


@pytest.mark.unit
def test_empty_chunk() -> None:
    """Test an empty chunk yields no frames."""
    assert split_frames("") == []
    assert split_frames("\r\n") == []
