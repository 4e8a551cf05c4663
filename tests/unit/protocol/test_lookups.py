"""Unit tests for protocol lookup tables."""

import pytest

from elk_controller.protocol import lookups
from elk_controller.protocol.exceptions import ValidationError
from tests.helpers.expectations import expect_exception


@pytest.mark.unit
def test_tables_are_read_only() -> None:
    """Test lookup tables cannot be mutated."""
    with pytest.raises(TypeError):
        lookups.ARM_STATUS["9"] = "Bogus"  # type: ignore[index]


@pytest.mark.unit
def test_event_table_area_series() -> None:
    """Test each arming series covers eight areas."""
    assert lookups.EVENT_TYPE[1175] == "AREA 1 IS DISARMED"
    assert lookups.EVENT_TYPE[1182] == "AREA 8 IS DISARMED"
    assert lookups.EVENT_TYPE[1230] == "AREA 8 IS ARMED VACATION"


@pytest.mark.unit
@pytest.mark.parametrize(
    "word,index",
    [("a", 1), ("abort", 2), ("access", 4), ("active", 6), ("alarm", 10)],
)
def test_word_indices(word: str, index: int) -> None:
    """Test words keep the panel's fixed vocabulary indices."""
    assert lookups.WORDS[word] == index


@pytest.mark.unit
def test_word_indices_unique() -> None:
    """Test no two words share an index."""
    assert len(set(lookups.WORDS.values())) == len(lookups.WORDS)


@pytest.mark.unit
def test_max_range_covers_every_description_type() -> None:
    """Test every description type has a max range."""
    assert set(lookups.TEXT_DESCRIPTION_MAX_RANGE) == set(lookups.TEXT_DESCRIPTION_TYPE)


class TestDescriptionTypeCode:
    """Tests for description_type_code."""

    @pytest.mark.unit
    def test_numeric(self):
        """Test a known numeric code passes through."""
        assert lookups.description_type_code(4) == 4

    @pytest.mark.unit
    def test_label_case_insensitive(self):
        """Test labels are matched regardless of case."""
        assert lookups.description_type_code("keypad") == 3
        assert lookups.description_type_code("Zone") == 0

    @pytest.mark.unit
    def test_unknown_numeric(self):
        """Test an unknown numeric code is rejected."""
        _ = expect_exception(lookups.description_type_code, ValidationError, 42)

    @pytest.mark.unit
    def test_unknown_label(self):
        """Test an unknown label is rejected."""
        error = expect_exception(lookups.description_type_code, ValidationError, "Garage")
        assert "Garage" in str(error)
