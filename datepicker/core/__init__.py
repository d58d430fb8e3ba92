"""Core picker logic.

This package contains the platform-agnostic selection logic of a date/time
picker: the mode cascade, value mutators, validation, controlled state
reconciliation, and the single and range picker sessions built on them.
"""

from datepicker.core.callbacks import (
    ChangeData,
    ChangeHandler,
    CloseHandler,
    OpenHandler,
    PickerContext,
    Transition,
    ValueFormatter,
)
from datepicker.core.config import PickerConfig
from datepicker.core.errors import (
    ConstraintViolationError,
    ErrorCategory,
    InvalidTransitionError,
    PickerError,
    UnitRangeError,
    classify_error,
    is_surfaced,
)
from datepicker.core.factory import create_picker
from datepicker.core.formatting import (
    default_date_formatter,
    default_hour_formatter,
    default_time_formatter,
    format_value,
)
from datepicker.core.grid import Cell
from datepicker.core.logging import (
    configure_logging,
    get_logger,
)
from datepicker.core.mode_cascade import (
    Mode,
    PageStride,
    UnitFlags,
    initial_mode,
    next_mode,
    page_stride,
)
from datepicker.core.picker import Picker
from datepicker.core.range_coordinator import RangeCoordinator
from datepicker.core.reconciler import Reconciler
from datepicker.core.validator import Constraints, is_allowed
from datepicker.core.value_clock import get_unit, set_unit, shift

__all__ = [
    # Callbacks
    "ChangeData",
    "ChangeHandler",
    "CloseHandler",
    "OpenHandler",
    "PickerContext",
    "Transition",
    "ValueFormatter",
    # Configuration
    "PickerConfig",
    # Error handling
    "ConstraintViolationError",
    "ErrorCategory",
    "InvalidTransitionError",
    "PickerError",
    "UnitRangeError",
    "classify_error",
    "is_surfaced",
    # Formatting and grids
    "Cell",
    "default_date_formatter",
    "default_hour_formatter",
    "default_time_formatter",
    "format_value",
    # Logging
    "configure_logging",
    "get_logger",
    # Mode cascade
    "Mode",
    "PageStride",
    "UnitFlags",
    "initial_mode",
    "next_mode",
    "page_stride",
    # Pickers
    "Picker",
    "RangeCoordinator",
    "Reconciler",
    "create_picker",
    # Values and validation
    "Constraints",
    "get_unit",
    "is_allowed",
    "set_unit",
    "shift",
]
