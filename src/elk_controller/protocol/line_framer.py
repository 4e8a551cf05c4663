"""Split transport chunks into candidate frame strings.

The M1XEP writes whole CRLF-terminated frames, so a chunk is split on
newlines with no buffering across chunks.
"""

from __future__ import annotations


def split_frames(data: str) -> list[str]:
    """Return the non-empty lines of ``data`` with carriage returns dropped.

    Example:
        >>> split_frames("0AZC002200CE\\r\\n0ACC003100E5\\r\\n")
        ['0AZC002200CE', '0ACC003100E5']
    """
    frames: list[str] = []
    for line in data.strip().split("\n"):
        candidate = line.replace("\r", "").strip()
        if candidate:
            frames.append(candidate)
    return frames
