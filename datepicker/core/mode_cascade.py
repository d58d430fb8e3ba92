"""Mode cascade state machine - platform agnostic.

The active mode is the granularity currently being selected. Selecting a value
in one mode cascades into the next finer enabled mode until the cascade
reaches CLOSED. Paging strides are a per-mode lookup as well.
"""

from dataclasses import dataclass
from enum import Enum

from datepicker.core.errors import InvalidTransitionError


class Mode(str, Enum):
    """Selection granularity of a picker."""

    DAY = "day"
    MONTH = "month"
    YEAR = "year"
    HOUR = "hour"
    MINUTE = "minute"
    CLOSED = "closed"


DATE_MODES = frozenset({Mode.DAY, Mode.MONTH, Mode.YEAR})
TIME_MODES = frozenset({Mode.HOUR, Mode.MINUTE})
SELECTABLE_MODES = DATE_MODES | TIME_MODES


@dataclass(frozen=True)
class UnitFlags:
    """Top-level granularities enabled for a picker."""

    date: bool = True
    time: bool = True

    def enables(self, mode: Mode) -> bool:
        """Return True if selections in ``mode`` are possible."""
        if mode in DATE_MODES:
            return self.date
        if mode in TIME_MODES:
            return self.time
        return False


@dataclass(frozen=True)
class PageStride:
    """A paging step: which value field moves and by how much."""

    field: Mode
    delta: int


# Successor of each mode after a selection. A successor whose granularity is
# not enabled collapses to CLOSED.
_SUCCESSORS: dict[Mode, Mode] = {
    Mode.DAY: Mode.HOUR,
    Mode.MONTH: Mode.DAY,
    Mode.YEAR: Mode.MONTH,
    Mode.HOUR: Mode.MINUTE,
    Mode.MINUTE: Mode.CLOSED,
}

# (field, years-or-months per page) for each pageable mode
_STRIDES: dict[Mode, tuple[Mode, int]] = {
    Mode.DAY: (Mode.MONTH, 1),
    Mode.MONTH: (Mode.YEAR, 1),
    Mode.YEAR: (Mode.YEAR, 16),
}

YEARS_PER_ERA = _STRIDES[Mode.YEAR][1]


def initial_mode(flags: UnitFlags) -> Mode:
    """Return the mode a picker starts (and restarts) in.

    Time-only pickers start at HOUR; anything with dates enabled starts at DAY.
    """
    if flags.time and not flags.date:
        return Mode.HOUR
    return Mode.DAY


def next_mode(current: Mode, flags: UnitFlags) -> Mode:
    """Return the mode that follows a selection made in ``current``.

    Raises:
        InvalidTransitionError: If ``current`` is CLOSED.
    """
    successor = _SUCCESSORS.get(current)
    if successor is None:
        raise InvalidTransitionError(current, "next_mode", "closed has no successor")
    if successor is not Mode.CLOSED and not flags.enables(successor):
        return Mode.CLOSED
    return successor


def page_stride(mode: Mode, direction: int) -> PageStride | None:
    """Return the paging step for ``mode``, or None if it does not page.

    Args:
        mode: The active mode.
        direction: -1 for the previous page, +1 for the next.

    Raises:
        ValueError: If direction is not -1 or +1.
    """
    if direction not in (-1, 1):
        raise ValueError(f"direction must be -1 or 1, got {direction!r}")
    entry = _STRIDES.get(mode)
    if entry is None:
        return None
    field, size = entry
    return PageStride(field=field, delta=size * direction)
