"""Decoded message variants.

Each variant carries the frame it was decoded from plus the fields of its
type code. The decoder table in ``decoders.py`` picks the variant; a frame
whose type code has no decoder becomes a plain ``ElkMessage``.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from elk_controller.protocol.frame import Frame

__all__ = [
    "AreaStatus",
    "ArmingStatusReport",
    "ElkMessage",
    "EntryExitTimeData",
    "KeypadAreasReport",
    "KeypadKeyChangeUpdate",
    "LogDataUpdate",
    "OutputChangeUpdate",
    "OutputStatusReport",
    "TaskChangeUpdate",
    "TemperatureReply",
    "TextStringDescriptionReport",
    "ThermostatReply",
    "ZoneBypassReport",
    "ZoneChangeUpdate",
    "ZoneDefinition",
    "ZoneDefinitionReport",
    "ZonePartition",
    "ZonePartitionReport",
    "ZoneStatus",
    "ZoneStatusReport",
    "ZoneVoltageReply",
]


@dataclass(frozen=True)
class ElkMessage:
    """Generic message: the frame fields only."""

    frame: Frame

    @property
    def type_code(self) -> str:
        return self.frame.type_code

    @property
    def body(self) -> str:
        return self.frame.body

    @property
    def raw(self) -> str:
        return self.frame.raw


@dataclass(frozen=True)
class AreaStatus:
    id: int
    arm_status: str | None
    arm_up_state: str | None
    alarm_state: str | None


@dataclass(frozen=True)
class ArmingStatusReport(ElkMessage):
    """AS: arm status, arm-up state and alarm state for areas 1-8."""

    areas: tuple[AreaStatus, ...]


@dataclass(frozen=True)
class EntryExitTimeData(ElkMessage):
    """EE: entry/exit timer broadcast while an area counts down."""

    area_id: int
    timer_type: str | None
    timer1: int
    timer2: int
    armed_state: str | None


@dataclass(frozen=True)
class KeypadAreasReport(ElkMessage):
    """KA: area assigned to each of the 16 keypads.

    ``keypad_areas`` maps keypad id to area id and omits unassigned keypads.
    ``areas`` lists the distinct assigned areas in keypad order.
    """

    keypad_areas: Mapping[int, int]
    areas: tuple[int, ...]


@dataclass(frozen=True)
class KeypadKeyChangeUpdate(ElkMessage):
    """KC: a key was pressed on a keypad.

    ``illumination`` holds the F1..F6 key LEDs in that order.
    """

    keypad_id: int
    key: str | None
    illumination: tuple[str | None, ...]
    bypass_code_required: bool


@dataclass(frozen=True)
class LogDataUpdate(ElkMessage):
    """LD: one entry from the panel's event log."""

    event_code: int
    event: str | None
    id: int
    area_id: int
    hour: str
    minute: str
    month: str | None
    day: int
    log_index: str
    day_of_week: str | None
    year: str


@dataclass(frozen=True)
class OutputChangeUpdate(ElkMessage):
    """CC: one output changed state."""

    id: int
    state: str


@dataclass(frozen=True)
class OutputStatusReport(ElkMessage):
    """CS: on/off state of outputs 1-208; index 0 is output 1."""

    outputs: tuple[str, ...]


@dataclass(frozen=True)
class TemperatureReply(ElkMessage):
    """LW: keypad and zone temperature sensors, 16 of each."""

    keypads: tuple[int, ...]
    zones: tuple[int, ...]


@dataclass(frozen=True)
class ThermostatReply(ElkMessage):
    """TR: thermostat state. ``id`` is "Invalid" when the panel reports thermostat 0."""

    id: str
    mode: str | None
    hold: bool
    fan: str
    temperature: int
    heat_set_point: int
    cool_set_point: int
    humidity: str


@dataclass(frozen=True)
class TextStringDescriptionReport(ElkMessage):
    """SD: configured label for a zone, area, output and so on."""

    description_type: str | None
    id: int
    description: str


@dataclass(frozen=True)
class TaskChangeUpdate(ElkMessage):
    """TC: a task was activated."""

    task_number: int


@dataclass(frozen=True)
class ZoneBypassReport(ElkMessage):
    """ZB: bypass state of one zone."""

    id: int
    bypassed: bool


@dataclass(frozen=True)
class ZoneDefinition:
    id: int
    definition: str | None


@dataclass(frozen=True)
class ZoneDefinitionReport(ElkMessage):
    """ZD: definition type of zones 1-208."""

    zones: tuple[ZoneDefinition, ...]


@dataclass(frozen=True)
class ZoneVoltageReply(ElkMessage):
    """ZV: analog voltage of one zone in volts."""

    id: int
    voltage: float


@dataclass(frozen=True)
class ZoneChangeUpdate(ElkMessage):
    """ZC: one zone changed state."""

    id: int
    physical_status: str | None
    logical_state: str | None


@dataclass(frozen=True)
class ZoneStatus:
    id: int
    physical_status: str | None
    logical_state: str | None


@dataclass(frozen=True)
class ZoneStatusReport(ElkMessage):
    """ZS: physical status and logical state of zones 1-208."""

    zones: tuple[ZoneStatus, ...]


@dataclass(frozen=True)
class ZonePartition:
    id: int
    partition: int


@dataclass(frozen=True)
class ZonePartitionReport(ElkMessage):
    """ZP: area (partition) each of zones 1-208 belongs to."""

    zones: tuple[ZonePartition, ...]
