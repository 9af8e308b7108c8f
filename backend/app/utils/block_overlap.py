"""
Routine block overlap validation.

Blocks of one calendar day are half-open [start, end) intervals on the
24-hour clock, written as "HH:MM" strings.
"""

import re
from typing import Optional, Protocol, Sequence

from app.core.exceptions import InvalidTimeRangeError, OverlapConflictError

_HHMM_PATTERN = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")


class TimedBlock(Protocol):
    title: str
    start_time: str
    end_time: str


def time_to_minutes(value: str) -> int:
    """
    Convert "HH:MM" into minutes since midnight.

    Raises:
        ValueError: If value is not a 24-hour clock time
    """
    match = _HHMM_PATTERN.match(value or "")
    if not match:
        raise ValueError(f"Invalid time '{value}', expected HH:MM")
    return int(match.group(1)) * 60 + int(match.group(2))


def intervals_overlap(a_start: str, a_end: str, b_start: str, b_end: str) -> bool:
    """Touching endpoints do not overlap."""
    return time_to_minutes(a_start) < time_to_minutes(b_end) and time_to_minutes(
        b_start
    ) < time_to_minutes(a_end)


def find_invalid_range(blocks: Sequence[TimedBlock]) -> Optional[TimedBlock]:
    """Return the first block whose end is not after its start."""
    for block in blocks:
        if time_to_minutes(block.end_time) <= time_to_minutes(block.start_time):
            return block
    return None


def find_overlap(blocks: Sequence[TimedBlock]) -> Optional[tuple[TimedBlock, TimedBlock]]:
    """Return the first pair of intersecting blocks, in input order."""
    for i in range(len(blocks)):
        for j in range(i + 1, len(blocks)):
            a, b = blocks[i], blocks[j]
            if intervals_overlap(a.start_time, a.end_time, b.start_time, b.end_time):
                return a, b
    return None


def validate_day_blocks(blocks: Sequence[TimedBlock]) -> None:
    """
    Validate a set of blocks meant for a single day.

    Raises:
        InvalidTimeRangeError: A block ends at or before its start
        OverlapConflictError: Two blocks intersect
    """
    invalid = find_invalid_range(blocks)
    if invalid is not None:
        raise InvalidTimeRangeError(invalid.title, invalid.start_time, invalid.end_time)

    conflict = find_overlap(blocks)
    if conflict is not None:
        raise OverlapConflictError(conflict[0].title, conflict[1].title)
