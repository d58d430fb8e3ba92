"""Error classification for picker operations.

Picker operations either succeed or leave state exactly as it was. This module
separates the errors a caller must see (malformed unit values) from the ones
the picker resolves locally (constraint refusals, unsupported transitions).

Example:
    from datepicker.core.errors import classify_error, is_surfaced

    try:
        candidate = set_unit(value, Mode.HOUR, 25)
    except PickerError as ex:
        if is_surfaced(ex.category):
            raise
        # Normal UI refusal, keep the current state
"""

from datetime import datetime
from enum import Enum, auto
from typing import Any


class ErrorCategory(Enum):
    """Classification of picker errors for handling decisions."""

    # Programmer error - propagates to the caller
    RANGE = auto()  # Raw unit value outside its natural bounds

    # Normal refusals - resolved locally as no-ops
    CONSTRAINT_VIOLATION = auto()  # Candidate rejected by min/max/disabled dates
    INVALID_TRANSITION = auto()  # Page or mode change unsupported in this mode


# Categories that propagate out of picker operations
SURFACED_CATEGORIES = {ErrorCategory.RANGE}


class PickerError(Exception):
    """Base class for picker errors.

    Attributes:
        category: The classification of the error.
    """

    category: ErrorCategory

    def __init__(self, message: str, category: ErrorCategory) -> None:
        super().__init__(message)
        self.category = category


class UnitRangeError(PickerError, ValueError):
    """A raw unit value lies outside the unit's natural range.

    Attributes:
        unit: Name of the unit being set (e.g. "hour").
        value: The rejected raw value.
        bounds: Inclusive (low, high) range that was expected.
    """

    def __init__(self, unit: str, value: Any, bounds: tuple[int, int]) -> None:
        low, high = bounds
        super().__init__(
            f"{unit} must be between {low} and {high}, got {value!r}",
            ErrorCategory.RANGE,
        )
        self.unit = unit
        self.value = value
        self.bounds = bounds


class ConstraintViolationError(PickerError):
    """A candidate value was refused by the validator.

    Attributes:
        candidate: The refused value.
        reason: Short machine-readable reason ("before_min", "after_max",
            "disabled_date").
    """

    def __init__(self, candidate: datetime, reason: str) -> None:
        super().__init__(
            f"{candidate.isoformat()} is not allowed ({reason})",
            ErrorCategory.CONSTRAINT_VIOLATION,
        )
        self.candidate = candidate
        self.reason = reason


class InvalidTransitionError(PickerError):
    """A navigation request is not supported from the given mode.

    Attributes:
        mode: The mode the request was issued in.
        action: The requested action ("next_mode", "page", "change_mode", ...).
    """

    def __init__(self, mode: Any, action: str, detail: str | None = None) -> None:
        message = f"{action} is not supported in mode {getattr(mode, 'value', mode)!r}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message, ErrorCategory.INVALID_TRANSITION)
        self.mode = mode
        self.action = action


def classify_error(error: Exception) -> ErrorCategory | None:
    """Classify an exception raised while handling a picker event.

    Args:
        error: The exception to classify.

    Returns:
        The ErrorCategory of a PickerError, or None for foreign exceptions.
    """
    if isinstance(error, PickerError):
        return error.category
    return None


def is_surfaced(category: ErrorCategory | None) -> bool:
    """Check whether an error category must propagate to the caller.

    Unknown (None) categories always propagate.

    Args:
        category: The error category to check.

    Returns:
        True if the error is a programmer error the caller has to see.
    """
    return category is None or category in SURFACED_CATEGORIES
