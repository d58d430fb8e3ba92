"""Pydantic model for picker configuration.

Configuration is fixed for the lifetime of a picker; the model is frozen so a
picker can hand it out in notification contexts without copying.
"""

from collections.abc import Callable
from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from datepicker.core.formatting import (
    default_date_formatter,
    default_hour_formatter,
    default_time_formatter,
)
from datepicker.core.mode_cascade import Mode, UnitFlags, initial_mode
from datepicker.core.validator import Constraints, as_day, lower_bound, upper_bound

Formatter = Callable[[datetime], str]
# Module-level aliases: the "date" field shadows the type inside the class body.
Bound = datetime | date | None
DaySet = frozenset[date]


class PickerConfig(BaseModel):
    """Schema for a picker's construction-time options."""

    date: bool = Field(True, description="Enables date selection")
    time: bool = Field(True, description="Enables time selection")
    range: bool = Field(False, description="Select a start and an end value")
    first_day_of_week: int = Field(
        0, ge=0, le=6, description="First weekday of the day grid, 0 = Sunday"
    )
    min_date: Bound = Field(
        None, description="Do not allow values before this"
    )
    max_date: Bound = Field(
        None, description="Do not allow values after this"
    )
    disabled_dates: DaySet = Field(
        default_factory=frozenset, description="Days that cannot be selected"
    )
    default_open: bool = False
    default_value: datetime | None = Field(
        None, description="Initial value; None means now"
    )
    default_mode: Mode | None = Field(
        None, description="Initial mode; None means the unit-derived initial mode"
    )
    name: str | None = None
    disabled: bool = False
    placeholder: str | None = None
    date_formatter: Formatter = default_date_formatter
    time_formatter: Formatter = default_time_formatter
    hour_formatter: Formatter = default_hour_formatter

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "date": True,
                "time": True,
                "min_date": "2024-01-01",
                "max_date": "2024-12-31",
                "disabled_dates": ["2024-07-04"],
                "name": "appointment",
            }
        },
    )

    @field_validator("disabled_dates", mode="before")
    @classmethod
    def _truncate_disabled_dates(cls, value: Any) -> Any:
        if value is None:
            return frozenset()
        if isinstance(value, (list, tuple, set, frozenset)):
            return frozenset(
                as_day(item) if isinstance(item, date) else item for item in value
            )
        return value

    @model_validator(mode="after")
    def _check_consistency(self) -> "PickerConfig":
        if not (self.date or self.time):
            raise ValueError("at least one of 'date' or 'time' must be enabled")
        low, high = lower_bound(self.min_date), upper_bound(self.max_date)
        if low is not None and high is not None and low > high:
            raise ValueError("'min_date' must not be after 'max_date'")
        if self.default_mode is not None and not self.unit_flags.enables(
            self.default_mode
        ):
            raise ValueError(
                f"default_mode {self.default_mode.value!r} is not enabled"
            )
        return self

    @property
    def unit_flags(self) -> UnitFlags:
        return UnitFlags(date=self.date, time=self.time)

    @property
    def constraints(self) -> Constraints:
        return Constraints.build(self.min_date, self.max_date, self.disabled_dates)

    @property
    def initial_mode(self) -> Mode:
        return initial_mode(self.unit_flags)
