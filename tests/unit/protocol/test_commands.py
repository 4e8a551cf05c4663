"""Unit tests for outbound command encoders."""

import pytest

from elk_controller.protocol import commands
from elk_controller.protocol.exceptions import ValidationError
from tests.helpers.expectations import expect_exception, expect_validation_error


@pytest.mark.unit
@pytest.mark.parametrize(
    "command,expected",
    [
        (commands.ARMING_STATUS_REQUEST, "06as0066"),
        (commands.KEYPAD_AREAS_REQUEST, "06ka006E"),
        (commands.OUTPUT_STATUS_REQUEST, "06cs0064"),
        (commands.SYSTEM_STATUS_REQUEST, "06ss0054"),
        (commands.TEMPERATURE_REQUEST, "06lw0057"),
        (commands.ZONE_DEFINITION_REQUEST, "06zd005C"),
        (commands.ZONE_PARTITION_REQUEST, "06zp0050"),
        (commands.ZONE_STATUS_REQUEST, "06zs004D"),
    ],
)
def test_bare_requests(command: str, expected: str) -> None:
    """Test requests without arguments."""
    assert commands.encode_request(command).raw == expected


@pytest.mark.unit
def test_unknown_request() -> None:
    """Test an unknown bare request is rejected."""
    _ = expect_validation_error(commands.encode_request, "command", "xx")


class TestArming:
    """Tests for arm and disarm."""

    @pytest.mark.unit
    def test_arm_away(self):
        """Test arm away pads the keypad code to six digits."""
        assert commands.encode_arm(1, 1, 1234).raw == "0Da11001234003F"

    @pytest.mark.unit
    def test_arm_string_code(self):
        """Test a string keypad code is padded the same way."""
        assert commands.encode_arm(1, 1, "1234").raw == "0Da11001234003F"

    @pytest.mark.unit
    def test_disarm(self):
        """Test disarm uses arm mode 0."""
        assert commands.encode_disarm(1, 1234).raw == "0Da010012340040"

    @pytest.mark.unit
    def test_unknown_arm_mode(self):
        """Test an arm mode outside the table is rejected."""
        _ = expect_validation_error(commands.encode_arm, "arm_mode", 1, 9, 1234)


class TestOutputs:
    """Tests for task and output control."""

    @pytest.mark.unit
    def test_activate_task(self):
        """Test task activation."""
        assert commands.encode_activate_task(1).raw == "09tn00100C4"

    @pytest.mark.unit
    def test_output_on_for_seconds(self):
        """Test output on with a duration."""
        assert commands.encode_output_on(1, 10).raw == "0Ecn0010001000D8"

    @pytest.mark.unit
    def test_output_on_default_duration(self):
        """Test output on defaults to no duration."""
        frame = commands.encode_output_on(1)
        assert frame.body == "0010000000"

    @pytest.mark.unit
    def test_output_off(self):
        """Test output off."""
        assert commands.encode_output_off(2).raw == "09cf00200DC"

    @pytest.mark.unit
    def test_toggle_output(self):
        """Test output toggle."""
        assert commands.encode_toggle_output(3).raw == "09ct00300CD"


class TestBypassZone:
    """Tests for zone bypass."""

    @pytest.mark.unit
    def test_bypass(self):
        """Test zone, area and code are packed in order."""
        assert commands.encode_bypass_zone(1, 1, 1234).raw == "10zb00110012340077"

    @pytest.mark.unit
    def test_missing_zone(self):
        """Test a missing zone id is rejected."""
        error = expect_validation_error(commands.encode_bypass_zone, "zone_id", None, 1, 1234)
        assert str(error) == "Zone id is a required option"


class TestSpeak:
    """Tests for word speech."""

    @pytest.mark.unit
    def test_one_frame_per_word(self):
        """Test each word becomes one sw frame with its vocabulary index."""
        frames = commands.encode_speak("a access alarm")
        assert [frame.raw for frame in frames] == ["09sw00100BC", "09sw00400B9", "09sw01000BC"]

    @pytest.mark.unit
    def test_case_insensitive(self):
        """Test words are matched regardless of case."""
        assert [frame.raw for frame in commands.encode_speak("A")] == ["09sw00100BC"]

    @pytest.mark.unit
    def test_unknown_word(self):
        """Test an unknown word fails before any frame is built."""
        error = expect_exception(commands.encode_speak, ValidationError, "alarm xyzzy")
        assert str(error) == "Unknown word: xyzzy"

    @pytest.mark.unit
    def test_empty_message(self):
        """Test an empty message produces no frames."""
        assert commands.encode_speak("") == []


class TestRequestsWithArguments:
    """Tests for requests that carry an id."""

    @pytest.mark.unit
    def test_text_description_by_code(self):
        """Test description request by numeric type."""
        assert commands.encode_text_description_request(1, 1).raw == "0Bsd010010065"

    @pytest.mark.unit
    def test_text_description_by_label(self):
        """Test description request by type label."""
        assert commands.encode_text_description_request("Zone", 1).raw == "0Bsd000100066"

    @pytest.mark.unit
    def test_text_description_unknown_type(self):
        """Test an unknown description type is rejected."""
        _ = expect_validation_error(commands.encode_text_description_request, "description_type", "Garage", 1)

    @pytest.mark.unit
    def test_zone_voltage(self):
        """Test zone voltage request."""
        assert commands.encode_zone_voltage_request(5).raw == "09zv00500B2"

    @pytest.mark.unit
    def test_thermostat(self):
        """Test thermostat request."""
        assert commands.encode_thermostat_request(1).raw == "08tr0100F1"


class TestSetThermostat:
    """Tests for thermostat control."""

    @pytest.mark.unit
    def test_set_mode(self):
        """Test a valid element and value."""
        assert commands.encode_set_thermostat(1, 3, 0).raw == "0Bts010300053"

    @pytest.mark.unit
    def test_element_without_value_range(self):
        """Test element 3 accepts any value."""
        frame = commands.encode_set_thermostat(1, 50, 3)
        assert frame.body == "0150300"

    @pytest.mark.unit
    @pytest.mark.parametrize("element", [-1, 6])
    def test_element_out_of_range(self, element: int):
        """Test elements outside 0-5 are rejected."""
        error = expect_exception(commands.encode_set_thermostat, ValidationError, 1, 1, element)
        assert str(error) == "The element parameter is outside accepted range."

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "element,value",
        [(0, 5), (1, 2), (2, -1), (4, 0), (5, 100)],
    )
    def test_value_out_of_range(self, element: int, value: int):
        """Test values outside the element's range are rejected."""
        error = expect_validation_error(commands.encode_set_thermostat, "value", 1, value, element)
        assert str(error) == "The value parameter is outside accepted range."
