"""Display strings for the current picker value.

Locale-aware formatting is the host's job; hosts inject their own formatters
through the picker config. The defaults below are locale-neutral.
"""

from datetime import datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datepicker.core.config import PickerConfig


def default_date_formatter(value: datetime) -> str:
    return value.strftime("%Y-%m-%d")


def default_time_formatter(value: datetime) -> str:
    return value.strftime("%H:%M")


def default_hour_formatter(value: datetime) -> str:
    """Format the rounded hour of a value, e.g. ``14:00``."""
    return f"{value.hour:02d}:00"


def format_value(value: datetime | None, config: "PickerConfig") -> str:
    """Return the input-field text for ``value``.

    Date and time pickers show both parts, time-only pickers show the time and
    everything else shows the date.
    """
    if value is None:
        return ""
    if config.date and config.time:
        return f"{config.date_formatter(value)} {config.time_formatter(value)}"
    if config.time:
        return config.time_formatter(value)
    return config.date_formatter(value)
