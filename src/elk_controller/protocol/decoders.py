"""Per-type decoders and the message registry.

Decoders slice fixed offsets out of the frame body. Offsets follow the M1
ASCII protocol and are exercised against captured frames in the unit tests.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import Final

from elk_controller.protocol import lookups
from elk_controller.protocol.exceptions import FrameDecodeError
from elk_controller.protocol.frame import Frame, decode_frame
from elk_controller.protocol.messages import (
    AreaStatus,
    ArmingStatusReport,
    ElkMessage,
    EntryExitTimeData,
    KeypadAreasReport,
    KeypadKeyChangeUpdate,
    LogDataUpdate,
    OutputChangeUpdate,
    OutputStatusReport,
    TaskChangeUpdate,
    TemperatureReply,
    TextStringDescriptionReport,
    ThermostatReply,
    ZoneBypassReport,
    ZoneChangeUpdate,
    ZoneDefinition,
    ZoneDefinitionReport,
    ZonePartition,
    ZonePartitionReport,
    ZoneStatus,
    ZoneStatusReport,
    ZoneVoltageReply,
)

# Panel capacities
AREA_COUNT = 8
KEYPAD_COUNT = 16
ZONE_COUNT = 208
OUTPUT_COUNT = 208
TEMPERATURE_SENSOR_COUNT = 16
TEMPERATURE_FIELD_WIDTH = 3
KEYPAD_TEMPERATURE_OFFSET = 40
ZONE_TEMPERATURE_OFFSET = 60

logger = logging.getLogger(__name__)


def _number(text: str, field: str, frame: Frame) -> int:
    try:
        return int(text, 10)
    except ValueError:
        error_reason = f"invalid_{field}"
        raise FrameDecodeError(error_reason, frame.raw) from None


def _hex_digit(text: str, field: str, frame: Frame) -> int:
    try:
        return int(text, 16)
    except ValueError:
        error_reason = f"invalid_{field}"
        raise FrameDecodeError(error_reason, frame.raw) from None


def classify_event(code: int) -> str | None:
    """Describe a log event code.

    Zone, bypass, alarm memory and output events are ranges keyed by element
    number; everything else comes from the event table. The state wording
    compares the whole code against 1, so it always reads "normal", "Off" or
    blank.
    """
    if 4001 <= code <= 4208:
        return f"Zone {code - 4000} Status: {'violated' if code == 1 else 'normal'}"
    if 5001 <= code <= 5208:
        return f"Zone {code - 5000}  Bypassed: {'bypassed' if code == 1 else ''}"
    if 6001 <= code <= 6208:
        return f"Alarm Memory: {'alarm activated' if code == 1 else ''}"
    if 7001 <= code <= 7208:
        return f"Output {code - 7000}  Status: {'On' if code == 1 else 'Off'}"
    return lookups.EVENT_TYPE.get(code)


def _zone_status(frame: Frame, nibble: str) -> tuple[str | None, str | None]:
    status = _hex_digit(nibble, "zone_status", frame)
    return lookups.PHYSICAL_STATUS.get(status & 0x03), lookups.LOGICAL_STATE.get(status >> 2)


def decode_arming_status(frame: Frame) -> ArmingStatusReport:
    body = frame.body
    areas = tuple(
        AreaStatus(
            id=index + 1,
            arm_status=lookups.ARM_STATUS.get(body[index : index + 1]),
            arm_up_state=lookups.ARM_UP_STATE.get(body[AREA_COUNT + index : AREA_COUNT + index + 1]),
            alarm_state=lookups.ALARM_STATE.get(body[2 * AREA_COUNT + index : 2 * AREA_COUNT + index + 1]),
        )
        for index in range(AREA_COUNT)
    )
    return ArmingStatusReport(frame=frame, areas=areas)


def decode_entry_exit_time(frame: Frame) -> EntryExitTimeData:
    body = frame.body
    return EntryExitTimeData(
        frame=frame,
        area_id=_number(body[0:1], "area_id", frame),
        timer_type=lookups.TIMER_TYPE.get(body[1:2]),
        timer1=_number(body[2:5], "timer1", frame),
        timer2=_number(body[5:8], "timer2", frame),
        armed_state=lookups.ARM_STATUS.get(body[8:9]),
    )


def decode_keypad_areas(frame: Frame) -> KeypadAreasReport:
    keypad_areas: dict[int, int] = {}
    areas: list[int] = []
    for index in range(KEYPAD_COUNT):
        area = _number(frame.body[index : index + 1], "keypad_area", frame)
        if area == 0:
            continue
        keypad_areas[index + 1] = area
        if area not in areas:
            areas.append(area)
    return KeypadAreasReport(frame=frame, keypad_areas=MappingProxyType(keypad_areas), areas=tuple(areas))


def decode_keypad_key_change(frame: Frame) -> KeypadKeyChangeUpdate:
    body = frame.body
    return KeypadKeyChangeUpdate(
        frame=frame,
        keypad_id=_number(body[0:2], "keypad_id", frame),
        key=lookups.KEYPAD_KEY.get(body[2:4]),
        illumination=tuple(lookups.ILLUMINATION_STATUS.get(char) for char in body[4:10]),
        bypass_code_required=body[10:11] == "1",
    )


def decode_log_data(frame: Frame) -> LogDataUpdate:
    body = frame.body
    event_code = _number(body[0:4], "event_code", frame)
    return LogDataUpdate(
        frame=frame,
        event_code=event_code,
        event=classify_event(event_code),
        id=_number(body[4:7], "id", frame),
        area_id=_number(body[7:8], "area_id", frame),
        hour=body[8:10],
        minute=body[10:12],
        month=lookups.MONTH.get(_number(body[12:14], "month", frame)),
        day=_number(body[14:16], "day", frame),
        log_index=body[16:19],
        day_of_week=lookups.WEEKDAY.get(_number(body[19:20], "day_of_week", frame)),
        year=body[20:22],
    )


def decode_output_change(frame: Frame) -> OutputChangeUpdate:
    body = frame.body
    return OutputChangeUpdate(
        frame=frame,
        id=_number(body[0:3], "output_id", frame),
        state="On" if body[3:4] == "1" else "Off",
    )


def decode_output_status(frame: Frame) -> OutputStatusReport:
    body = frame.body
    outputs = tuple("Off" if body[index : index + 1] == "0" else "On" for index in range(OUTPUT_COUNT))
    return OutputStatusReport(frame=frame, outputs=outputs)


def decode_temperatures(frame: Frame) -> TemperatureReply:
    body = frame.body
    keypads: list[int] = []
    zones: list[int] = []
    for sensor in range(2 * TEMPERATURE_SENSOR_COUNT):
        start = sensor * TEMPERATURE_FIELD_WIDTH
        value = _number(body[start : start + TEMPERATURE_FIELD_WIDTH], "temperature", frame)
        if sensor < TEMPERATURE_SENSOR_COUNT:
            keypads.append(value - KEYPAD_TEMPERATURE_OFFSET)
        else:
            zones.append(value - ZONE_TEMPERATURE_OFFSET)
    return TemperatureReply(frame=frame, keypads=tuple(keypads), zones=tuple(zones))


def decode_thermostat(frame: Frame) -> ThermostatReply:
    body = frame.body
    thermostat_id = _number(body[0:2], "thermostat_id", frame)
    humidity = body[11:12]
    return ThermostatReply(
        frame=frame,
        id="Invalid" if thermostat_id == 0 else str(thermostat_id),
        mode=lookups.THERMOSTAT_MODE.get(body[2:3]),
        hold=not body[3:4],
        fan="Auto" if body[4:5] == "0" else "On",
        temperature=_number(body[5:7], "temperature", frame),
        heat_set_point=_number(body[7:9], "heat_set_point", frame),
        cool_set_point=_number(body[9:11], "cool_set_point", frame),
        humidity="No Data" if humidity == "0" else humidity,
    )


def decode_text_description(frame: Frame) -> TextStringDescriptionReport:
    body = frame.body
    return TextStringDescriptionReport(
        frame=frame,
        description_type=lookups.TEXT_DESCRIPTION_TYPE.get(_number(body[0:2], "description_type", frame)),
        id=_number(body[2:5], "id", frame),
        description=body[5:-2].strip(),
    )


def decode_task_change(frame: Frame) -> TaskChangeUpdate:
    return TaskChangeUpdate(frame=frame, task_number=_number(frame.body[0:3], "task_number", frame))


def decode_zone_bypass(frame: Frame) -> ZoneBypassReport:
    body = frame.body
    return ZoneBypassReport(
        frame=frame,
        id=_number(body[0:3], "zone_id", frame),
        bypassed=body[3:4] == "1",
    )


def decode_zone_definitions(frame: Frame) -> ZoneDefinitionReport:
    body = frame.body
    zones = tuple(
        ZoneDefinition(id=zone_id, definition=lookups.ZONE_DEFINITION.get(body[zone_id - 1 : zone_id]))
        for zone_id in range(1, ZONE_COUNT + 1)
    )
    return ZoneDefinitionReport(frame=frame, zones=zones)


def decode_zone_voltage(frame: Frame) -> ZoneVoltageReply:
    body = frame.body
    return ZoneVoltageReply(
        frame=frame,
        id=_number(body[0:3], "zone_id", frame),
        voltage=_number(body[3:6], "voltage", frame) / 10,
    )


def decode_zone_change(frame: Frame) -> ZoneChangeUpdate:
    body = frame.body
    zone_id = _number(body[0:3], "zone_id", frame)
    physical_status, logical_state = _zone_status(frame, body[3:4])
    return ZoneChangeUpdate(frame=frame, id=zone_id, physical_status=physical_status, logical_state=logical_state)


def decode_zone_status(frame: Frame) -> ZoneStatusReport:
    body = frame.body
    zones: list[ZoneStatus] = []
    for zone_id in range(1, ZONE_COUNT + 1):
        physical_status, logical_state = _zone_status(frame, body[zone_id - 1 : zone_id])
        zones.append(ZoneStatus(id=zone_id, physical_status=physical_status, logical_state=logical_state))
    return ZoneStatusReport(frame=frame, zones=tuple(zones))


def decode_zone_partitions(frame: Frame) -> ZonePartitionReport:
    body = frame.body
    zones = tuple(
        ZonePartition(id=zone_id, partition=_number(body[zone_id - 1 : zone_id], "partition", frame))
        for zone_id in range(1, ZONE_COUNT + 1)
    )
    return ZonePartitionReport(frame=frame, zones=zones)


MESSAGE_REGISTRY: Final[Mapping[str, Callable[[Frame], ElkMessage]]] = MappingProxyType(
    {
        "AS": decode_arming_status,
        "CC": decode_output_change,
        "CS": decode_output_status,
        "EE": decode_entry_exit_time,
        "KA": decode_keypad_areas,
        "KC": decode_keypad_key_change,
        "LD": decode_log_data,
        "LW": decode_temperatures,
        "SD": decode_text_description,
        "TC": decode_task_change,
        "TR": decode_thermostat,
        "ZB": decode_zone_bypass,
        "ZC": decode_zone_change,
        "ZD": decode_zone_definitions,
        "ZP": decode_zone_partitions,
        "ZS": decode_zone_status,
        "ZV": decode_zone_voltage,
    }
)
REGISTERED_TYPES: Final[frozenset[str]] = frozenset(MESSAGE_REGISTRY)


def get_message(raw: str) -> ElkMessage:
    """Decode one frame into its typed message.

    Frames whose type code has no decoder become a plain ``ElkMessage`` after
    their checksum is verified.

    Raises:
        FrameDecodeError: If the frame is malformed or a numeric field does not parse
        ChecksumMismatch: If an unregistered frame fails checksum validation
    """
    frame = decode_frame(raw, REGISTERED_TYPES)
    decoder = MESSAGE_REGISTRY.get(frame.type_code)
    if decoder is None:
        logger.debug("No decoder for type %s, returning generic message", frame.type_code)
        return ElkMessage(frame=frame)
    return decoder(frame)
