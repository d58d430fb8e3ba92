"""Picker factory.

Creates a single picker or a start/end range pair depending on the
configuration's ``range`` flag.

Example:
    # Single date/time picker
    picker = create_picker(PickerConfig(name="appointment"))

    # Range of dates
    pair = create_picker(PickerConfig(range=True, time=False))
"""

from typing import Any

from datepicker.core.config import PickerConfig
from datepicker.core.picker import Picker
from datepicker.core.range_coordinator import RangeCoordinator


def create_picker(
    config: PickerConfig | None = None, **kwargs: Any
) -> Picker | RangeCoordinator:
    """Create the picker variant selected by ``config.range``.

    Args:
        config: Picker options. Defaults to a single date and time picker.
        **kwargs: Passed to the Picker or RangeCoordinator constructor.

    Returns:
        A RangeCoordinator when ``config.range`` is set, otherwise a Picker.

    Raises:
        TypeError: If kwargs do not match the selected variant's constructor.
    """
    config = config or PickerConfig()
    if config.range:
        return RangeCoordinator(config, **kwargs)
    return Picker(config, **kwargs)
