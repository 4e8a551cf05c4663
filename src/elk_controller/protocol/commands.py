"""Outbound command encoders.

Each function validates its arguments and returns the frame to write.
Numeric arguments are zero padded to the width the panel expects.
"""

from __future__ import annotations

from elk_controller.protocol import lookups
from elk_controller.protocol.exceptions import ValidationError
from elk_controller.protocol.frame import Frame, build_frame

# Bare request commands: no arguments, reply type is the upper-cased code
ARMING_STATUS_REQUEST = "as"
KEYPAD_AREAS_REQUEST = "ka"
OUTPUT_STATUS_REQUEST = "cs"
SYSTEM_STATUS_REQUEST = "ss"
TEMPERATURE_REQUEST = "lw"
ZONE_DEFINITION_REQUEST = "zd"
ZONE_PARTITION_REQUEST = "zp"
ZONE_STATUS_REQUEST = "zs"

BARE_REQUESTS = frozenset(
    {
        ARMING_STATUS_REQUEST,
        KEYPAD_AREAS_REQUEST,
        OUTPUT_STATUS_REQUEST,
        SYSTEM_STATUS_REQUEST,
        TEMPERATURE_REQUEST,
        ZONE_DEFINITION_REQUEST,
        ZONE_PARTITION_REQUEST,
        ZONE_STATUS_REQUEST,
    }
)

KEYPAD_CODE_WIDTH = 6

# Thermostat element -> accepted value range (inclusive)
THERMOSTAT_VALUE_RANGES: dict[int, tuple[int, int]] = {
    0: (0, 4),  # mode
    1: (0, 1),  # hold
    2: (0, 1),  # fan
    4: (1, 99),  # cool set point
    5: (1, 99),  # heat set point
}
THERMOSTAT_ELEMENT_RANGE = (0, 5)


def _pad(value: int | str, width: int) -> str:
    return str(value).rjust(width, "0")


def encode_request(command: str) -> Frame:
    """Frame for a request that takes no arguments ("as", "zs", ...)."""
    if command not in BARE_REQUESTS:
        msg = f"Unknown request command: {command}"
        raise ValidationError(msg, field="command")
    return build_frame(command=command)


def encode_arm(area_id: int, arm_mode: int, keypad_code: int | str) -> Frame:
    """Arm ``area_id`` in ``arm_mode`` (1 away, 2 stay, ... see ``lookups.ARM_MODE``)."""
    if arm_mode not in lookups.ARM_MODE:
        msg = "The arm mode parameter is outside accepted range."
        raise ValidationError(msg, field="arm_mode")
    return build_frame(command=f"a{arm_mode}{area_id}{_pad(keypad_code, KEYPAD_CODE_WIDTH)}")


def encode_disarm(area_id: int, keypad_code: int | str) -> Frame:
    return build_frame(command=f"a0{area_id}{_pad(keypad_code, KEYPAD_CODE_WIDTH)}")


def encode_activate_task(task_id: int) -> Frame:
    return build_frame(command=f"tn{_pad(task_id, 3)}")


def encode_output_on(output_id: int, seconds: int = 0) -> Frame:
    """Turn an output on; ``seconds`` of 0 leaves it on until turned off."""
    return build_frame(command=f"cn{_pad(output_id, 3)}{_pad(seconds, 5)}")


def encode_output_off(output_id: int) -> Frame:
    return build_frame(command=f"cf{_pad(output_id, 3)}")


def encode_toggle_output(output_id: int) -> Frame:
    return build_frame(command=f"ct{_pad(output_id, 3)}")


def encode_bypass_zone(zone_id: int | None, area_id: int, keypad_code: int | str) -> Frame:
    if zone_id is None:
        msg = "Zone id is a required option"
        raise ValidationError(msg, field="zone_id")
    return build_frame(command=f"zb{_pad(zone_id, 3)}{area_id}{_pad(keypad_code, KEYPAD_CODE_WIDTH)}")


def encode_speak(message: str) -> list[Frame]:
    """One "sw" frame per word of ``message``.

    Every word is looked up before any frame is built, so an unknown word
    produces no frames at all.
    """
    indexes: list[int] = []
    for word in message.split():
        index = lookups.WORDS.get(word.lower())
        if index is None:
            msg = f"Unknown word: {word}"
            raise ValidationError(msg, field="message")
        indexes.append(index)
    return [build_frame(command=f"sw{_pad(index, 3)}") for index in indexes]


def encode_text_description_request(description_type: int | str, item_id: int) -> Frame:
    type_code = lookups.description_type_code(description_type)
    return build_frame(command=f"sd{_pad(type_code, 2)}{_pad(item_id, 3)}")


def encode_zone_voltage_request(zone_id: int) -> Frame:
    return build_frame(command=f"zv{_pad(zone_id, 3)}")


def encode_thermostat_request(thermostat_id: int) -> Frame:
    return build_frame(command=f"tr{_pad(thermostat_id, 2)}")


def encode_set_thermostat(thermostat_id: int, value: int, element: int) -> Frame:
    """Set one thermostat element.

    Elements: 0 mode, 1 hold, 2 fan, 4 cool set point, 5 heat set point.

    Raises:
        ValidationError: If the element or its value is out of range
    """
    low, high = THERMOSTAT_ELEMENT_RANGE
    if not low <= element <= high:
        msg = "The element parameter is outside accepted range."
        raise ValidationError(msg, field="element")

    value_range = THERMOSTAT_VALUE_RANGES.get(element)
    if value_range is not None and not value_range[0] <= value <= value_range[1]:
        msg = "The value parameter is outside accepted range."
        raise ValidationError(msg, field="value")

    return build_frame(command=f"ts{_pad(thermostat_id, 2)}{_pad(value, 2)}{element}")
