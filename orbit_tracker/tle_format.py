"""
TLE Field Helpers

Fixed-column readers for the two element lines. Only the fields the tracker
needs are decoded here; everything else is left to the propagator.

Columns (1-based, as documented by CelesTrak):
    line 1, cols 3-7   catalog number (Alpha-5 letters allowed in col 3)
    line 2, cols 53-63 mean motion (rev/day)
"""

import string
from typing import Optional

# Alpha-5 skips I and O to avoid confusion with 1 and 0
_ALPHA5_LETTERS = "ABCDEFGHJKLMNPQRSTUVWXYZ"


def parse_catalog_number(line: str) -> Optional[int]:
    """
    Read the catalog number from either element line.

    Args:
        line: TLE line 1 or line 2

    Returns:
        Catalog number, or None if the field is missing or garbled
    """
    field = line[2:7].strip()
    if not field:
        return None
    if field.isdigit():
        return int(field)
    head, tail = field[0].upper(), field[1:]
    if head in _ALPHA5_LETTERS and len(field) == 5 and tail.isdigit():
        return (_ALPHA5_LETTERS.index(head) + 10) * 10000 + int(tail)
    return None


def parse_mean_motion(line2: str) -> Optional[float]:
    """Mean motion in rev/day from line 2, None if unreadable or not positive."""
    try:
        value = float(line2[52:63])
    except ValueError:
        return None
    return value if value > 0 else None


def line_checksum(line: str) -> int:
    """Calculate TLE checksum."""
    checksum = 0
    for char in line[:68]:
        if char in string.digits:
            checksum += int(char)
        elif char == "-":
            checksum += 1
    return checksum % 10


def checksum_matches(line: str) -> bool:
    if len(line) < 69 or not line[68].isdigit():
        return False
    return int(line[68]) == line_checksum(line)
