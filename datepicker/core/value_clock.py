"""Pure mutators over point-in-time values.

Values are naive ``datetime`` objects. Nothing here mutates its input: every
operation returns a new value. Months are addressed 0-11, matching the month
grid index; days are clamped to the target month's length when a month or
year change would otherwise overflow (Jan 31 -> Feb 29/28).
"""

import calendar
from datetime import MAXYEAR, MINYEAR, datetime

from datepicker.core.errors import InvalidTransitionError, UnitRangeError
from datepicker.core.mode_cascade import Mode, PageStride


def days_in_month(year: int, month_index: int) -> int:
    """Return the number of days in a month (month_index 0-11)."""
    return calendar.monthrange(year, month_index + 1)[1]


def unit_bounds(value: datetime, unit: Mode) -> tuple[int, int]:
    """Return the inclusive natural range of ``unit`` for ``value``.

    The day range depends on the month of ``value``.
    """
    if unit is Mode.DAY:
        return 1, days_in_month(value.year, value.month - 1)
    if unit is Mode.MONTH:
        return 0, 11
    if unit is Mode.YEAR:
        return MINYEAR, MAXYEAR
    if unit is Mode.HOUR:
        return 0, 23
    if unit is Mode.MINUTE:
        return 0, 59
    raise InvalidTransitionError(unit, "set_unit", "not a selectable unit")


def _with_month(value: datetime, year: int, month_index: int) -> datetime:
    day = min(value.day, days_in_month(year, month_index))
    return value.replace(year=year, month=month_index + 1, day=day)


def set_unit(value: datetime, unit: Mode, raw: int) -> datetime:
    """Return a copy of ``value`` with ``unit`` set to ``raw``.

    Args:
        value: The current value.
        unit: One of DAY, MONTH (0-11), YEAR, HOUR, MINUTE.
        raw: The new unit value.

    Returns:
        A new datetime.

    Raises:
        UnitRangeError: If ``raw`` is not an int inside the unit's natural range.
        InvalidTransitionError: If ``unit`` is not selectable (CLOSED).
    """
    bounds = unit_bounds(value, unit)
    if isinstance(raw, bool) or not isinstance(raw, int):
        raise UnitRangeError(unit.value, raw, bounds)
    low, high = bounds
    if not low <= raw <= high:
        raise UnitRangeError(unit.value, raw, bounds)

    if unit is Mode.DAY:
        return value.replace(day=raw)
    if unit is Mode.MONTH:
        return _with_month(value, value.year, raw)
    if unit is Mode.YEAR:
        return _with_month(value, raw, value.month - 1)
    if unit is Mode.HOUR:
        return value.replace(hour=raw)
    return value.replace(minute=raw)


def get_unit(value: datetime, unit: Mode) -> int:
    """Read ``unit`` back from ``value`` (MONTH is 0-11)."""
    if unit is Mode.DAY:
        return value.day
    if unit is Mode.MONTH:
        return value.month - 1
    if unit is Mode.YEAR:
        return value.year
    if unit is Mode.HOUR:
        return value.hour
    if unit is Mode.MINUTE:
        return value.minute
    raise InvalidTransitionError(unit, "get_unit", "not a selectable unit")


def shift(value: datetime, stride: PageStride) -> datetime:
    """Apply a paging stride, wrapping months across year boundaries.

    Raises:
        InvalidTransitionError: If the result would leave the supported
            year range, or the stride field is not MONTH or YEAR.
    """
    if stride.field is Mode.MONTH:
        total = value.year * 12 + (value.month - 1) + stride.delta
        year, month_index = divmod(total, 12)
    elif stride.field is Mode.YEAR:
        year, month_index = value.year + stride.delta, value.month - 1
    else:
        raise InvalidTransitionError(stride.field, "page", "unsupported stride field")

    if not MINYEAR <= year <= MAXYEAR:
        raise InvalidTransitionError(stride.field, "page", f"year {year} out of range")
    return _with_month(value, year, month_index)


def floor(value: datetime, unit: Mode) -> datetime:
    """Return the first instant of the ``unit`` period containing ``value``."""
    if unit is Mode.YEAR:
        return datetime(value.year, 1, 1)
    if unit is Mode.MONTH:
        return datetime(value.year, value.month, 1)
    if unit is Mode.DAY:
        return datetime(value.year, value.month, value.day)
    if unit is Mode.HOUR:
        return value.replace(minute=0, second=0, microsecond=0)
    if unit is Mode.MINUTE:
        return value.replace(second=0, microsecond=0)
    raise InvalidTransitionError(unit, "floor", "not a selectable unit")
