"""Start/end picker pair for range selection.

The coordinator keeps ``start.value <= end.value`` after every committed
change: a start that moves past the end drags the end along, while an end
that would precede the start is refused by the end picker's derived minimum.
Derived bounds are providers, evaluated on every check.
"""

from collections.abc import Callable, Mapping
from datetime import datetime
from typing import Any

from datepicker.core.callbacks import ChangeHandler, CloseHandler, OpenHandler, Transition
from datepicker.core.config import PickerConfig
from datepicker.core.logging import get_logger
from datepicker.core.mode_cascade import Mode
from datepicker.core.picker import Picker
from datepicker.core.validator import Constraints

logger = get_logger(__name__)

START = "start"
END = "end"


class RangeCoordinator:
    """Owns a start and an end Picker and keeps them ordered.

    Opening or closing the range opens or closes each side in turn, so the
    shared ``on_open`` and ``on_close`` handlers run once per side, start
    first. The ``side`` of the context they receive tells the calls apart.

    Attributes:
        config: Configuration shared by both pickers.
        start: Picker for the start of the range.
        end: Picker for the end of the range.
    """

    def __init__(
        self,
        config: PickerConfig | None = None,
        *,
        start_value: datetime | None = None,
        end_value: datetime | None = None,
        start_controlled: Mapping[str, Any] | None = None,
        end_controlled: Mapping[str, Any] | None = None,
        on_open: OpenHandler | None = None,
        on_close: CloseHandler | None = None,
        on_change: ChangeHandler | None = None,
        now: Callable[[], datetime] = datetime.now,
    ) -> None:
        """Initialize both pickers.

        Args:
            config: Shared options. ``range`` is forced on.
            start_value: Initial start value (defaults to the config's).
            end_value: Initial end value (defaults to the config's).
            start_controlled: Host-controlled fields of the start picker.
            end_controlled: Host-controlled fields of the end picker.
            on_open: Open handler shared by both pickers.
            on_close: Close handler shared by both pickers.
            on_change: Change handler shared by both pickers; the context's
                ``side`` tells them apart.
            now: Clock used when no value has been assigned yet.
        """
        self.config = (config or PickerConfig()).model_copy(update={"range": True})
        handlers = {"on_open": on_open, "on_close": on_close, "on_change": on_change}

        self.start = Picker(
            self._with_default(start_value),
            controlled=start_controlled,
            now=now,
            display_constraints=self.start_constraints,
            side=START,
            **handlers,
        )
        self.end = Picker(
            self._with_default(end_value),
            controlled=end_controlled,
            now=now,
            constraints=self.end_constraints,
            side=END,
            **handlers,
        )
        self._log = logger.bind(picker=self.config.name)

    def _with_default(self, value: datetime | None) -> PickerConfig:
        if value is None:
            return self.config
        return self.config.model_copy(update={"default_value": value})

    # ------------------------------------------------------------------
    # Derived bounds
    # ------------------------------------------------------------------
    def start_constraints(self) -> Constraints:
        """Configured constraints with the max bound capped at the end value.

        Used to disable start grid cells past the end. Start commits are
        checked against the configured constraints only, since a start past
        the end raises the end instead of being refused.
        """
        return self.config.constraints.tightened(max_date=self.end.value)

    def end_constraints(self) -> Constraints:
        """Configured constraints with the min bound raised to the start value."""
        return self.config.constraints.tightened(min_date=self.start.value)

    # ------------------------------------------------------------------
    # State accessors
    # ------------------------------------------------------------------
    @property
    def value(self) -> tuple[datetime | None, datetime | None]:
        return self.start.value, self.end.value

    @property
    def is_open(self) -> bool:
        return self.start.is_open or self.end.is_open

    @property
    def display_text(self) -> str:
        return f"{self.start.display_text} - {self.end.display_text}"

    def picker(self, side: str) -> Picker:
        """Return the picker for ``side`` ("start" or "end")."""
        if side == START:
            return self.start
        if side == END:
            return self.end
        raise ValueError(f"side must be {START!r} or {END!r}, got {side!r}")

    # ------------------------------------------------------------------
    # Open / close
    # ------------------------------------------------------------------
    def open(self) -> None:
        self.start.open()
        self.end.open()

    def close(self) -> None:
        self.start.close()
        self.end.close()

    def toggle(self) -> None:
        if self.is_open:
            self.close()
        else:
            self.open()

    # ------------------------------------------------------------------
    # Fan-out of picker events
    # ------------------------------------------------------------------
    def select(self, side: str, unit: Mode | str, raw: int) -> Transition:
        """Select a unit value on one side, then restore the ordering."""
        transition = self.picker(side).select(unit, raw)
        return self._after(side, transition)

    def page(self, side: str, direction: int) -> Transition:
        transition = self.picker(side).page(direction)
        return self._after(side, transition)

    def change_mode(self, side: str, mode: Mode | str) -> Transition:
        return self.picker(side).change_mode(mode)

    def set_start(self, value: datetime) -> Transition:
        """Commit a start value, raising the end if it would precede it."""
        return self._after(START, self.start.set_value(value))

    def set_end(self, value: datetime) -> Transition:
        """Commit an end value; refused if it precedes the start."""
        return self._after(END, self.end.set_value(value))

    def _after(self, side: str, transition: Transition) -> Transition:
        if side != START or not transition.notified or transition.value is None:
            return transition
        end_value = self.end.value
        if end_value is not None and transition.value > end_value:
            self._log.debug(
                "end_raised",
                start=transition.value.isoformat(),
                previous_end=end_value.isoformat(),
            )
            self.end.set_value(transition.value)
        return transition
