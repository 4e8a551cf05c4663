"""Unit tests for the Elk M1 frame codec."""

import pytest

from elk_controller.protocol.exceptions import ChecksumMismatch, ConstructionError, FrameDecodeError
from elk_controller.protocol.frame import (
    Frame,
    build_frame,
    compute_checksum,
    decode_frame,
    encode_frame,
    valid_checksum,
)
from tests.fixtures.real_frames import (
    ARMING_STATUS,
    OUTPUT_CHANGE,
    TEXT_DESCRIPTION,
    TEXT_DESCRIPTION_BAD_CHECKSUM,
    ZONE_CHANGE,
)
from tests.helpers.expectations import expect_exception


@pytest.mark.unit
def test_checksum_real_zone_change() -> None:
    """Checksum of a captured ZC frame matches the one on the wire."""
    assert compute_checksum("0AZC002200") == "CE"


@pytest.mark.unit
@pytest.mark.parametrize("raw", [ARMING_STATUS, OUTPUT_CHANGE, ZONE_CHANGE, TEXT_DESCRIPTION])
def test_checksum_real_frames(raw: str) -> None:
    """Byte sum of every captured frame body plus its checksum is zero modulo 256."""
    assert compute_checksum(raw[:-2]) == raw[-2:]


@pytest.mark.unit
@pytest.mark.parametrize(
    "type_code,body,expected",
    [
        ("as", "", "06as0066"),
        ("zs", "", "06zs004D"),
        ("tn", "001", "09tn00100C4"),
        ("zv", "005", "09zv00500B2"),
        ("a1", "1001234", "0Da11001234003F"),
        ("cn", "00100010", "0Ecn0010001000D8"),
        ("ts", "01030", "0Bts010300053"),
    ],
)
def test_encode_frame(type_code: str, body: str, expected: str) -> None:
    """Encoded frames carry the length, reserved suffix and checksum."""
    frame = encode_frame(type_code, body)
    assert frame.raw == expected
    assert frame.type_code == type_code
    assert frame.body == f"{body}00"
    assert valid_checksum(frame)


@pytest.mark.unit
@pytest.mark.parametrize(
    "type_code,body",
    [("as", ""), ("sd", "01001"), ("ZC", "0022"), ("XK", "1234567"), ("sw", "010")],
)
def test_encoded_frame_decodes_to_same_fields(type_code: str, body: str) -> None:
    """Decoding an encoded frame gives back its fields with a valid checksum."""
    encoded = encode_frame(type_code, body)

    decoded = decode_frame(encoded.raw)

    assert decoded == encoded
    assert decoded.checksum == compute_checksum(encoded.raw[:-2])
    assert int(decoded.length_field, 16) == len(decoded.raw) - 2
    assert valid_checksum(decoded)


@pytest.mark.unit
def test_encode_frame_length_counts_type_body_and_checksum() -> None:
    """Length field excludes itself."""
    frame = encode_frame("zv", "005")
    assert int(frame.length_field, 16) == len(frame.raw) - 2


@pytest.mark.unit
def test_frame_wire_bytes() -> None:
    """Wire form is ASCII with a CRLF terminator."""
    frame = encode_frame("as")
    assert frame.wire == b"06as0066\r\n"
    assert str(frame) == "06as0066"


class TestDecodeFrame:
    """Tests for decode_frame."""

    @pytest.mark.unit
    def test_slices_fields(self):
        """Test fields are sliced at fixed offsets."""
        frame = decode_frame(ZONE_CHANGE)
        assert frame == Frame(
            length_field="0A",
            type_code="ZC",
            body="002200",
            checksum="CE",
            raw=ZONE_CHANGE,
        )

    @pytest.mark.unit
    def test_too_short(self):
        """Test a frame shorter than the fixed fields is rejected."""
        error = expect_exception(decode_frame, FrameDecodeError, "0AZC0")
        assert error.reason == "too_short"

    @pytest.mark.unit
    def test_minimum_length_accepted(self):
        """Test a six character frame has an empty body."""
        raw = "04XK" + compute_checksum("04XK")
        frame = decode_frame(raw)
        assert frame.body == ""

    @pytest.mark.unit
    def test_unregistered_type_checksum_validated(self):
        """Test a corrupted frame is rejected when its type is not registered."""
        corrupted = ZONE_CHANGE[:-2] + "00"
        error = expect_exception(decode_frame, ChecksumMismatch, corrupted, frozenset({"AS"}))
        assert error.expected == "CE"
        assert error.received == "00"
        assert error.reason.startswith("checksum_mismatch")

    @pytest.mark.unit
    def test_registered_type_checksum_not_validated(self):
        """Test a registered type is trusted as received."""
        corrupted = ZONE_CHANGE[:-2] + "00"
        frame = decode_frame(corrupted, frozenset({"ZC"}))
        assert frame.checksum == "00"
        assert not valid_checksum(frame)

    @pytest.mark.unit
    def test_no_registry_always_validates(self):
        """Test validation applies when no registered set is supplied."""
        _ = expect_exception(decode_frame, ChecksumMismatch, TEXT_DESCRIPTION_BAD_CHECKSUM)


class TestBuildFrame:
    """Tests for build_frame."""

    @pytest.mark.unit
    def test_from_command(self):
        """Test a command string is split into type code and body."""
        frame = build_frame(command="zv005")
        assert frame.raw == "09zv00500B2"
        assert frame.type_code == "zv"

    @pytest.mark.unit
    def test_from_response(self):
        """Test a response is decoded into its fields."""
        frame = build_frame(response=OUTPUT_CHANGE)
        assert frame.type_code == "CC"
        assert frame.body == "003100"

    @pytest.mark.unit
    def test_response_checksum_validated(self):
        """Test a response with a bad checksum is rejected."""
        _ = expect_exception(build_frame, ChecksumMismatch, response=TEXT_DESCRIPTION_BAD_CHECKSUM)

    @pytest.mark.unit
    def test_both_arguments(self):
        """Test supplying command and response fails."""
        error = expect_exception(build_frame, ConstructionError, command="as", response=ZONE_CHANGE)
        assert "construction failed" in str(error)

    @pytest.mark.unit
    def test_neither_argument(self):
        """Test supplying nothing fails."""
        _ = expect_exception(build_frame, ConstructionError)
