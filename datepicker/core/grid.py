"""Selection grid contents for each mode.

Only the data of a grid is computed here: which candidate values exist, how
they are labelled, and which of them can be chosen. Layout is left to the
rendering layer.
"""

import calendar
from dataclasses import dataclass
from datetime import MAXYEAR, MINYEAR, datetime, time, timedelta

from datepicker.core.callbacks import ValueFormatter
from datepicker.core.mode_cascade import YEARS_PER_ERA
from datepicker.core.validator import Constraints, span_allowed
from datepicker.core.value_clock import days_in_month


@dataclass(frozen=True)
class Cell:
    """One selectable cell of a grid.

    Attributes:
        value: The value the picker would hold after choosing this cell.
        label: Display text.
        disabled: True if no instant of the cell can be selected.
        selected: True if the cell contains the current value.
        in_view: False for leading/trailing days of adjacent months.
    """

    value: datetime
    label: str
    disabled: bool = False
    selected: bool = False
    in_view: bool = True


def day_cells(
    value: datetime, first_day_of_week: int, constraints: Constraints
) -> list[list[Cell]]:
    """Return the weeks of the month containing ``value``.

    Args:
        value: Anchor value; its time of day is kept on every cell.
        first_day_of_week: 0 = Sunday ... 6 = Saturday.
        constraints: Constraints used to disable cells.
    """
    # calendar counts weekdays from Monday
    month_calendar = calendar.Calendar((first_day_of_week - 1) % 7)
    weeks: list[list[Cell]] = []
    for week in month_calendar.monthdatescalendar(value.year, value.month):
        row = []
        for day in week:
            start = datetime.combine(day, time.min)
            row.append(
                Cell(
                    value=datetime.combine(day, value.time()),
                    label=str(day.day),
                    disabled=not span_allowed(
                        start, datetime.combine(day, time.max), constraints
                    ),
                    selected=day == value.date(),
                    in_view=day.month == value.month,
                )
            )
        weeks.append(row)
    return weeks


def month_cells(value: datetime, constraints: Constraints) -> list[Cell]:
    """Return the 12 month cells of the year containing ``value``."""
    cells = []
    for index in range(12):
        last_day = days_in_month(value.year, index)
        start = datetime(value.year, index + 1, 1)
        end = datetime.combine(start.replace(day=last_day), time.max)
        cells.append(
            Cell(
                value=value.replace(month=index + 1, day=min(value.day, last_day)),
                label=calendar.month_abbr[index + 1],
                disabled=not span_allowed(start, end, constraints, check_disabled=False),
                selected=index == value.month - 1,
            )
        )
    return cells


def era_start(year: int) -> int:
    """Return the first year of the 16-year era containing ``year``."""
    return year - year % YEARS_PER_ERA


def year_cells(value: datetime, constraints: Constraints) -> list[Cell]:
    """Return the year cells of the era containing ``value``."""
    first = era_start(value.year)
    cells = []
    for year in range(first, first + YEARS_PER_ERA):
        if not MINYEAR <= year <= MAXYEAR:
            continue
        day = min(value.day, days_in_month(year, value.month - 1))
        start = datetime(year, 1, 1)
        end = datetime.combine(datetime(year, 12, 31), time.max)
        cells.append(
            Cell(
                value=value.replace(year=year, day=day),
                label=str(year),
                disabled=not span_allowed(start, end, constraints, check_disabled=False),
                selected=year == value.year,
            )
        )
    return cells


def hour_cells(
    value: datetime, constraints: Constraints, formatter: ValueFormatter
) -> list[Cell]:
    """Return the 24 hour cells of the day of ``value``.

    Labels are produced from the rounded hour; choosing a cell keeps minutes.
    """
    cells = []
    for hour in range(24):
        start = value.replace(hour=hour, minute=0, second=0, microsecond=0)
        end = start + timedelta(hours=1) - timedelta(microseconds=1)
        cells.append(
            Cell(
                value=value.replace(hour=hour),
                label=formatter(start),
                disabled=not span_allowed(start, end, constraints),
                selected=hour == value.hour,
            )
        )
    return cells


def minute_cells(value: datetime, constraints: Constraints, step: int = 5) -> list[Cell]:
    """Return minute cells of the hour of ``value`` every ``step`` minutes.

    Raises:
        ValueError: If ``step`` does not divide 60.
    """
    if step <= 0 or 60 % step:
        raise ValueError(f"step must divide 60, got {step!r}")
    cells = []
    for minute in range(0, 60, step):
        start = value.replace(minute=minute, second=0, microsecond=0)
        end = start + timedelta(minutes=step) - timedelta(microseconds=1)
        cells.append(
            Cell(
                value=value.replace(minute=minute),
                label=f"{value.hour:02d}:{minute:02d}",
                disabled=not span_allowed(start, end, constraints),
                selected=minute <= value.minute < minute + step,
            )
        )
    return cells
