"""Static code-to-label tables for the Elk M1 protocol.

Every table is a read-only mapping built once at import time.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Final

from elk_controller.protocol.exceptions import ValidationError

__all__ = [
    "ALARM_STATE",
    "ARM_MODE",
    "ARM_STATUS",
    "ARM_UP_STATE",
    "EVENT_TYPE",
    "ILLUMINATION_STATUS",
    "KEYPAD_KEY",
    "LOGICAL_STATE",
    "MONTH",
    "PHYSICAL_STATUS",
    "TEXT_DESCRIPTION_MAX_RANGE",
    "TEXT_DESCRIPTION_TYPE",
    "THERMOSTAT_MODE",
    "TIMER_TYPE",
    "WEEKDAY",
    "WORDS",
    "ZONE_DEFINITION",
    "description_type_code",
]

ARM_STATUS: Final[Mapping[str, str]] = MappingProxyType(
    {
        "0": "Disarmed",
        "1": "Armed Away",
        "2": "Armed Stay",
        "3": "Armed Stay Instant",
        "4": "Armed Night",
        "5": "Armed Night Instant",
        "6": "Armed Vacation",
    }
)

ARM_UP_STATE: Final[Mapping[str, str]] = MappingProxyType(
    {
        "0": "Not Ready To Arm",
        "1": "Ready To Arm",
        "2": "Ready To Arm Force",
        "3": "Armed with Exit Timer",
        "4": "Armed Fully",
        "5": "Force Armed",
        "6": "Armed with Bypass",
    }
)

ALARM_STATE: Final[Mapping[str, str]] = MappingProxyType(
    {
        "0": "No Alarm Active",
        "1": "Entrance Delay Active",
        "2": "Alarm Abort Delay Active",
        "3": "Fire",
        "4": "Medical",
        "5": "Police",
        "6": "Burglar",
        "7": "Aux 1",
        "8": "Aux 2",
        "9": "Aux 3",
        ":": "Aux 4",
        ";": "Carbon Monoxide",
        "<": "Emergency",
        "=": "Freeze",
        ">": "Gas",
        "?": "Heat",
        "@": "Water",
        "A": "Fire Supervisory",
        "B": "Verify Fire",
    }
)

# Arm command suffixes ("a" + mode)
ARM_MODE: Final[Mapping[int, str]] = MappingProxyType(
    {
        0: "Disarm",
        1: "Away",
        2: "Stay",
        3: "Stay Instant",
        4: "Night",
        5: "Night Instant",
        6: "Vacation",
        7: "Next Away Mode",
        8: "Next Stay Mode",
    }
)

ZONE_DEFINITION: Final[Mapping[str, str]] = MappingProxyType(
    {
        "0": "Disabled",
        "1": "Burglar Entry/Exit 1",
        "2": "Burglar Entry/Exit 2",
        "3": "Burglar Perimeter Instant",
        "4": "Burglar Interior",
        "5": "Burglar Interior Follower",
        "6": "Burglar Interior Night",
        "7": "Burglar Interior Night Delay",
        "8": "Burglar 24 Hour",
        "9": "Burglar Box Tamper",
        ":": "Fire Alarm",
        ";": "Fire Verified",
        "<": "Fire Supervisory",
        "=": "Aux Alarm 1",
        ">": "Aux Alarm 2",
        "?": "Key Fob",
        "@": "Non Alarm",
        "A": "Carbon Monoxide",
        "B": "Emergency Alarm",
        "C": "Freeze Alarm",
        "D": "Gas Alarm",
        "E": "Heat Alarm",
        "F": "Medical Alarm",
        "G": "Police Alarm",
        "H": "Police No Indication",
        "I": "Water Alarm",
        "J": "Key Momentary Arm / Disarm",
        "K": "Key Momentary Arm Away",
        "L": "Key Momentary Arm Stay",
        "M": "Key Momentary Disarm",
        "N": "Key On/Off",
        "O": "Mute Audibles",
        "P": "Power Supervisory",
        "Q": "Temperature",
        "R": "Analog Zone",
        "S": "Phone Key",
        "T": "Intercom Key",
    }
)

PHYSICAL_STATUS: Final[Mapping[int, str]] = MappingProxyType(
    {
        0: "Unconfigured",
        1: "Open",
        2: "EOL",
        3: "Short",
    }
)

LOGICAL_STATE: Final[Mapping[int, str]] = MappingProxyType(
    {
        0: "Normal",
        1: "Trouble",
        2: "Violated",
        3: "Bypassed",
    }
)

TEXT_DESCRIPTION_TYPE: Final[Mapping[int, str]] = MappingProxyType(
    {
        0: "Zone",
        1: "Area",
        2: "User",
        3: "Keypad",
        4: "Output",
        5: "Task",
        6: "Telephone",
        7: "Light",
        8: "AlarmDuration",
        9: "CustomSettings",
        10: "Counter",
        11: "Thermostat",
        12: "FunctionKey1",
        13: "FunctionKey2",
        14: "FunctionKey3",
        15: "FunctionKey4",
        16: "FunctionKey5",
        17: "FunctionKey6",
        18: "AudioZone",
        19: "AudioSource",
    }
)

# Highest id the panel accepts per description type
TEXT_DESCRIPTION_MAX_RANGE: Final[Mapping[int, int]] = MappingProxyType(
    {
        0: 208,
        1: 8,
        2: 199,
        3: 16,
        4: 208,
        5: 32,
        6: 8,
        7: 256,
        8: 12,
        9: 20,
        10: 64,
        11: 16,
        12: 16,
        13: 16,
        14: 16,
        15: 16,
        16: 16,
        17: 16,
        18: 18,
        19: 12,
    }
)

THERMOSTAT_MODE: Final[Mapping[str, str]] = MappingProxyType(
    {
        "0": "Off",
        "1": "Heat",
        "2": "Cool",
        "3": "Auto",
        "4": "Emergency Heat",
    }
)

TIMER_TYPE: Final[Mapping[str, str]] = MappingProxyType(
    {
        "0": "Exit",
        "1": "Entry",
    }
)

ILLUMINATION_STATUS: Final[Mapping[str, str]] = MappingProxyType(
    {
        "0": "Off",
        "1": "On",
        "2": "Blinking",
    }
)

KEYPAD_KEY: Final[Mapping[str, str]] = MappingProxyType(
    {
        "00": "NoKey",
        "01": "One",
        "02": "Two",
        "03": "Three",
        "04": "Four",
        "05": "Five",
        "06": "Six",
        "07": "Seven",
        "08": "Eight",
        "09": "Nine",
        "10": "Zero",
        "11": "Asterisk",
        "12": "Pound",
        "13": "F1",
        "14": "F2",
        "15": "F3",
        "16": "F4",
        "17": "Stay",
        "18": "Exit",
        "19": "Chime",
        "20": "Bypass",
        "21": "Elk",
        "22": "Down",
        "23": "Up",
        "24": "Right",
        "25": "Left",
        "26": "F6",
        "27": "F5",
        "28": "DataKeyMode",
    }
)

MONTH: Final[Mapping[int, str]] = MappingProxyType(
    {
        1: "January",
        2: "February",
        3: "March",
        4: "April",
        5: "May",
        6: "June",
        7: "July",
        8: "August",
        9: "September",
        10: "October",
        11: "November",
        12: "December",
    }
)

WEEKDAY: Final[Mapping[int, str]] = MappingProxyType(
    {
        1: "Sunday",
        2: "Monday",
        3: "Tuesday",
        4: "Wednesday",
        5: "Thursday",
        6: "Friday",
        7: "Saturday",
    }
)


def _build_event_table() -> dict[int, str]:
    events = {
        1000: "NO EVENT",
        1001: "FIRE ALARM",
        1002: "FIRE SUPERVISORY ALARM",
        1003: "BURGLAR ALARM, ANY AREA",
        1004: "MEDICAL ALARM",
        1005: "POLICE ALARM",
        1006: "AUX1 24 HR ALARM",
        1007: "AUX2 24 HR ALARM",
        1008: "CARBON MONOXIDE ALARM",
        1009: "EMERGENCY ALARM",
        1010: "FREEZE ALARM",
        1011: "GAS ALARM",
        1012: "HEAT ALARM",
        1013: "WATER ALARM",
        1014: "ALARM ANY AREA",
        1111: "CODE LOCKOUT, ANY KEYPAD",
        1112: "FIRE TROUBLE, ANY ZONE",
        1113: "BURGLAR TROUBLE, ANY ZONE",
        1114: "FAIL TO COMMUNICATE TROUBLE",
        1115: "RF SENSOR LOW BATTERY TROUBLE",
        1116: "LOST ANC MODULE TROUBLE",
        1117: "LOST KEYPAD TROUBLE",
        1118: "LOST INPUT EXPANDER TROUBLE",
        1119: "LOST OUTPUT EXPANDER TROUBLE",
        1120: "EEPROM MEMORY ERROR TROUBLE",
        1121: "FLASH MEMORY ERROR TROUBLE",
        1122: "AC FAILURE TROUBLE",
        1123: "CONTROL LOW BATTERY TROUBLE",
        1124: "CONTROL OVER CURRENT TROUBLE",
        1125: "EXPANSION MODULE TROUBLE",
        1126: "OUTPUT 2 SUPERVISORY TROUBLE",
        1127: "TELEPHONE LINE FAULT TROUBLE",
    }
    # Per-area arming events, eight areas per series
    area_series = (
        (1175, "IS DISARMED"),
        (1183, "IS ARMED AWAY"),
        (1191, "IS ARMED STAY"),
        (1199, "IS ARMED STAY INSTANT"),
        (1207, "IS ARMED NIGHT"),
        (1215, "IS ARMED NIGHT INSTANT"),
        (1223, "IS ARMED VACATION"),
    )
    for base, label in area_series:
        for area in range(1, 9):
            events[base + area - 1] = f"AREA {area} {label}"
    return events


EVENT_TYPE: Final[Mapping[int, str]] = MappingProxyType(_build_event_table())

# Panel speech vocabulary: word -> "sw" index, fixed by the panel firmware.
# TODO: add the vocabulary past index 10 from the M1 word library listing.
WORDS: Final[Mapping[str, int]] = MappingProxyType(
    {
        "a": 1,
        "abort": 2,
        "ac": 3,
        "access": 4,
        "activate": 5,
        "active": 6,
        "address": 7,
        "after": 8,
        "air": 9,
        "alarm": 10,
    }
)


def description_type_code(description_type: int | str) -> int:
    """Resolve a description type given as a numeric code or a label ("Zone")."""
    if isinstance(description_type, int):
        if description_type not in TEXT_DESCRIPTION_TYPE:
            msg = f"Unknown text description type: {description_type}"
            raise ValidationError(msg, field="description_type")
        return description_type
    for code, label in TEXT_DESCRIPTION_TYPE.items():
        if label.casefold() == description_type.casefold():
            return code
    msg = f"Unknown text description type: {description_type}"
    raise ValidationError(msg, field="description_type")
