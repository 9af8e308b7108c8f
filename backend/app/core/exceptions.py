"""
Custom exceptions for the application.
"""

from typing import Any, Optional


class PhaseflowError(Exception):
    """Base exception for Phaseflow."""

    def __init__(self, message: str, details: Optional[Any] = None):
        self.message = message
        self.details = details
        super().__init__(message)


class NotFoundError(PhaseflowError):
    """Resource not found."""

    pass


class ValidationError(PhaseflowError):
    """Validation error."""

    pass


class NoTemplateBlocksError(ValidationError):
    """Clone requested for a phase without template blocks."""

    def __init__(self, message: str = "No template blocks found. Please create routine blocks first."):
        super().__init__(message)


class NoDatesToCloneError(ValidationError):
    """Clone policy and exclusions left no target day."""

    def __init__(self, message: str = "No dates to clone to. Please adjust your selection."):
        super().__init__(message)


class InvalidScopeError(ValidationError):
    """Unknown bulk-edit scope."""

    def __init__(self, scope: Any):
        super().__init__(
            f"Invalid scope '{scope}'. Must be 'day', 'future', or 'selected'",
            details={"scope": scope},
        )


class EmptySelectionError(ValidationError):
    """'selected' scope without any date."""

    def __init__(self, message: str = "selected_dates is required for 'selected' scope"):
        super().__init__(message)


class InvalidTimeRangeError(ValidationError):
    """A block whose end time is not after its start time."""

    def __init__(self, title: str, start_time: str, end_time: str):
        super().__init__(
            f'Block "{title}" must end after it starts ({start_time}-{end_time})',
            details={"title": title, "start_time": start_time, "end_time": end_time},
        )


class OverlapConflictError(ValidationError):
    """Two blocks of the same day intersect."""

    def __init__(self, first_title: str, second_title: str):
        super().__init__(
            f'Block "{first_title}" overlaps with "{second_title}"',
            details={"titles": [first_title, second_title]},
        )
        self.titles = (first_title, second_title)
