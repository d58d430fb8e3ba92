"""Candidate value validation against min/max bounds and disabled dates.

Bounds given as plain ``date`` objects cover the whole day (a max_date of
2024-12-31 admits 2024-12-31T23:59). Bounds given as ``datetime`` objects are
compared exactly. Disabled dates are always compared at day granularity, so a
disabled day rejects every hour and minute inside it.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date, datetime, time

from datepicker.core.errors import ConstraintViolationError


def lower_bound(bound: date | datetime | None) -> datetime | None:
    """Normalize a min bound to the first instant it admits."""
    if bound is None or isinstance(bound, datetime):
        return bound
    return datetime.combine(bound, time.min)


def upper_bound(bound: date | datetime | None) -> datetime | None:
    """Normalize a max bound to the last instant it admits."""
    if bound is None or isinstance(bound, datetime):
        return bound
    return datetime.combine(bound, time.max)


def as_day(value: date | datetime) -> date:
    """Truncate a value to its calendar day."""
    if isinstance(value, datetime):
        return value.date()
    return value


@dataclass(frozen=True)
class Constraints:
    """Immutable set of validity constraints.

    Attributes:
        min_date: Earliest admitted instant (None = unbounded).
        max_date: Latest admitted instant (None = unbounded).
        disabled_dates: Days that may not be selected.
    """

    min_date: datetime | None = None
    max_date: datetime | None = None
    disabled_dates: frozenset[date] = field(default_factory=frozenset)

    @classmethod
    def build(
        cls,
        min_date: date | datetime | None = None,
        max_date: date | datetime | None = None,
        disabled_dates: Iterable[date | datetime] = (),
    ) -> "Constraints":
        """Create constraints from loosely typed bounds."""
        return cls(
            min_date=lower_bound(min_date),
            max_date=upper_bound(max_date),
            disabled_dates=frozenset(as_day(d) for d in disabled_dates),
        )

    def tightened(
        self,
        min_date: datetime | None = None,
        max_date: datetime | None = None,
    ) -> "Constraints":
        """Return constraints narrowed by additional bounds."""
        new_min = self.min_date
        if min_date is not None:
            new_min = min_date if new_min is None else max(new_min, min_date)
        new_max = self.max_date
        if max_date is not None:
            new_max = max_date if new_max is None else min(new_max, max_date)
        return Constraints(
            min_date=new_min,
            max_date=new_max,
            disabled_dates=self.disabled_dates,
        )


def check(candidate: datetime, constraints: Constraints) -> None:
    """Validate a candidate value.

    Raises:
        ConstraintViolationError: If the candidate is outside the bounds or on
            a disabled day.
    """
    if constraints.min_date is not None and candidate < constraints.min_date:
        raise ConstraintViolationError(candidate, "before_min")
    if constraints.max_date is not None and candidate > constraints.max_date:
        raise ConstraintViolationError(candidate, "after_max")
    if candidate.date() in constraints.disabled_dates:
        raise ConstraintViolationError(candidate, "disabled_date")


def is_allowed(candidate: datetime, constraints: Constraints) -> bool:
    """Return True if ``candidate`` satisfies every constraint."""
    try:
        check(candidate, constraints)
    except ConstraintViolationError:
        return False
    return True


def clamp(candidate: datetime, constraints: Constraints) -> datetime:
    """Pull a candidate inside the min/max bounds (disabled dates ignored)."""
    if constraints.min_date is not None and candidate < constraints.min_date:
        return constraints.min_date
    if constraints.max_date is not None and candidate > constraints.max_date:
        return constraints.max_date
    return candidate


def span_allowed(
    start: datetime,
    end: datetime,
    constraints: Constraints,
    check_disabled: bool = True,
) -> bool:
    """Return True if any instant of [start, end] could be selected.

    Args:
        start: First instant of the span.
        end: Last instant of the span.
        constraints: The constraints to test against.
        check_disabled: Also refuse the span when it lies on a disabled day.
            Only meaningful for spans that do not cross midnight.
    """
    if constraints.min_date is not None and end < constraints.min_date:
        return False
    if constraints.max_date is not None and start > constraints.max_date:
        return False
    if check_disabled and start.date() in constraints.disabled_dates:
        return False
    return True
