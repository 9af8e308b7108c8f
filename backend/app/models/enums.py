"""
Enum definitions for the application.

These enums are used across models and provide type-safe status/priority values.
"""

from enum import Enum


class ExecutionStatus(str, Enum):
    """Recorded outcome of a dated routine block."""

    DONE = "DONE"
    SKIPPED = "SKIPPED"


class ExecutionState(str, Enum):
    """
    Display state of a dated routine block.

    PENDING = no execution recorded yet
    """

    DONE = "DONE"
    SKIPPED = "SKIPPED"
    PENDING = "PENDING"


class Priority(str, Enum):
    """Priority level for timesheet entries."""

    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"


class ClonePolicy(str, Enum):
    """
    Which phase days receive template blocks.

    ALL = every day of the phase
    WEEKDAYS = Monday to Friday only
    CUSTOM = every day except the excluded dates
    """

    ALL = "all"
    WEEKDAYS = "weekdays"
    CUSTOM = "custom"


class EditScope(str, Enum):
    """Target days of a bulk block edit."""

    DAY = "day"
    FUTURE = "future"
    SELECTED = "selected"
