"""Notification protocols and the data passed through them.

These are the only channels through which picker state changes become
observable by a host. All types are platform agnostic.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol

from datepicker.core.config import PickerConfig
from datepicker.core.mode_cascade import Mode

# =============================================================================
# Data Classes
# =============================================================================


@dataclass(frozen=True)
class PickerContext:
    """Snapshot of a picker's configuration and state at notification time.

    Attributes:
        config: The picker's construction-time configuration.
        value: The currently stored value.
        mode: The currently stored mode.
        open: Whether the widget is currently open.
        side: "start" or "end" inside a range, otherwise None.
    """

    config: PickerConfig
    value: datetime | None
    mode: Mode
    open: bool
    side: str | None = None


@dataclass(frozen=True)
class ChangeData:
    """Proposed value and mode carried by a change notification."""

    value: datetime | None
    mode: Mode


@dataclass(frozen=True)
class Transition:
    """Outcome of a single picker operation.

    Attributes:
        value: The value after the operation (the proposed value when the
            value is host-controlled).
        mode: The mode the operation resolved to. A terminal selection
            reports CLOSED even though the stored mode resets afterwards.
        open: Whether the widget is open after the operation.
        notified: True if a change notification was raised.
    """

    value: datetime | None
    mode: Mode
    open: bool
    notified: bool = False


# =============================================================================
# Protocols
# =============================================================================


class ValueFormatter(Protocol):
    """Turns a value into display text."""

    def __call__(self, value: datetime) -> str: ...


class OpenHandler(Protocol):
    """Called when the widget requests to open."""

    def __call__(self, context: PickerContext) -> None: ...


class CloseHandler(Protocol):
    """Called when the widget requests to close."""

    def __call__(self, context: PickerContext) -> None: ...


class ChangeHandler(Protocol):
    """Called with the proposed value and mode after every accepted change."""

    def __call__(self, context: PickerContext, data: ChangeData) -> None: ...
