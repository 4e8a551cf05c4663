"""Frames captured from an Elk M1 panel through an M1XEP.

Each constant is one frame as read off the socket with the CRLF stripped.
"""

ARMING_STATUS = "1EAS100000004000000030000000000E"
KEYPAD_KEY_CHANGE = "19KC01112010000200000000010"
ENTRY_EXIT_TIME = "0FEE10060120100E5"
LOG_DATA = "1CLD1193102119450607001505003F"
OUTPUT_CHANGE = "0ACC003100E5"
THERMOSTAT = "13TR01200726875000000"
TEXT_DESCRIPTION = "1BSD01001Front DoorKeypad0089"
# Checksum on the wire does not match its contents
TEXT_DESCRIPTION_BAD_CHECKSUM = "1BSD01101Front DoorKeypad0089"
ZONE_BYPASS = "0AZB123100CC"
ZONE_VOLTAGE = "0CZV123072004E"
ZONE_CHANGE = "0AZC002200CE"

OUTPUT_STATUS = (
    "D6CS100100000000000000000000000000000000000000000000000000000000000000000000000"
    "00000000000000000000000000000000000000000000000000000000000000000000000000000000"
    "00000000000000000000000000000000000000000000000000001008D"
)
TEMPERATURES = (
    "66LW108109000000000000000000000000000000000000000000000000000000000000000000000"
    "000000000000000000130007A"
)
ZONE_DEFINITIONS = (
    "D6ZD001000001110000000000000000000006000000000000000000000000000000000000000000"
    "00000000000000000000000000000000000000000000000000000000000000000000000000000000"
    "00000000000000000000000000000000000000000000000000000007E"
)
ZONE_PARTITIONS = (
    "D6ZP111211111111111111111111111111111111111111111111111111111111111111111111111"
    "11111111111111111111111111111111111111111111111111111111111111111111111111111111"
    "1111111111111111111111111111111111111111111111111111100AB"
)
