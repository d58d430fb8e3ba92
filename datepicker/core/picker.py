"""Single date/time picker session logic - platform agnostic.

A Picker answers four questions for every interaction: the new value, the new
mode, whether the widget is open, and whether a change was notified. The
host may control any of ``open``, ``value`` and ``mode``; controlled fields
are only reported through the callbacks and fed back with ``receive``.

Example:
    picker = Picker(PickerConfig(), on_change=handle_change)
    picker.open()
    picker.select("day", 15)      # cascades into hour selection
    picker.select("hour", 14)
    picker.select("minute", 30)   # terminal selection, widget closes
"""

from collections.abc import Callable, Mapping
from datetime import datetime
from typing import Any

from datepicker.core.callbacks import (
    ChangeData,
    ChangeHandler,
    CloseHandler,
    OpenHandler,
    PickerContext,
    Transition,
)
from datepicker.core.config import PickerConfig
from datepicker.core.errors import (
    InvalidTransitionError,
    PickerError,
    classify_error,
    is_surfaced,
)
from datepicker.core.formatting import format_value
from datepicker.core.grid import (
    Cell,
    day_cells,
    hour_cells,
    minute_cells,
    month_cells,
    year_cells,
)
from datepicker.core.logging import get_logger
from datepicker.core.mode_cascade import Mode, UnitFlags, next_mode, page_stride
from datepicker.core.reconciler import Reconciler
from datepicker.core.validator import Constraints, check, clamp
from datepicker.core.value_clock import floor, set_unit, shift

logger = get_logger(__name__)

CONTROLLABLE_FIELDS = ("open", "value", "mode")

ConstraintsProvider = Callable[[], Constraints]


class Picker:
    """Mode cascade and value state of one picker widget.

    Attributes:
        config: Construction-time configuration.
        side: "start" or "end" when owned by a range, otherwise None.
    """

    reconciler = Reconciler.of(*CONTROLLABLE_FIELDS)

    def __init__(
        self,
        config: PickerConfig | None = None,
        *,
        controlled: Mapping[str, Any] | None = None,
        on_open: OpenHandler | None = None,
        on_close: CloseHandler | None = None,
        on_change: ChangeHandler | None = None,
        now: Callable[[], datetime] = datetime.now,
        constraints: ConstraintsProvider | None = None,
        display_constraints: ConstraintsProvider | None = None,
        side: str | None = None,
    ) -> None:
        """Initialize the picker.

        Args:
            config: Picker options. Defaults to a date and time picker.
            controlled: Host-owned fields and their current values. Every key
                present (even with a None value) is treated as controlled.
            on_open: Called when the widget requests to open.
            on_close: Called when the widget requests to close.
            on_change: Called after every accepted change.
            now: Clock used when no value has been assigned yet.
            constraints: Provider of the constraints used to accept values.
                Called before every check. Defaults to the config's.
            display_constraints: Provider of the constraints used to disable
                grid cells. Defaults to ``constraints``.
            side: Label of the picker inside a range.
        """
        self.config = config or PickerConfig()
        self.side = side
        self._on_open = on_open
        self._on_close = on_close
        self._on_change = on_change
        self._now = now
        self._constraints = constraints or (lambda: self.config.constraints)
        self._display_constraints = display_constraints or self._constraints

        external = dict(controlled or {})
        self._controlled = self.reconciler.controlled(external)
        self._external = {k: v for k, v in external.items() if k in self._controlled}

        defaults = {
            "open": self.config.default_open,
            "value": self.config.default_value or now(),
            "mode": self.config.default_mode or self.config.initial_mode,
        }
        self._state = self.reconciler.initialize(
            defaults, self._controlled, self._external
        )
        self._log = logger.bind(picker=self.config.name, side=side)

    # ------------------------------------------------------------------
    # State accessors
    # ------------------------------------------------------------------
    @property
    def value(self) -> datetime | None:
        return self._state.get("value")

    @property
    def mode(self) -> Mode:
        return Mode(self._state.get("mode", self.config.initial_mode))

    @property
    def is_open(self) -> bool:
        return bool(self._state.get("open", False))

    @property
    def flags(self) -> UnitFlags:
        return self.config.unit_flags

    @property
    def controlled_fields(self) -> frozenset[str]:
        return self._controlled

    @property
    def constraints(self) -> Constraints:
        """Constraints in effect right now (recomputed on every access)."""
        return self._constraints()

    @property
    def display_text(self) -> str:
        """Input-field text for the current value."""
        return format_value(self.value, self.config)

    def context(self) -> PickerContext:
        """Snapshot of the configuration and current state."""
        return PickerContext(
            config=self.config,
            value=self.value,
            mode=self.mode,
            open=self.is_open,
            side=self.side,
        )

    def cells(self) -> list[Cell] | list[list[Cell]]:
        """Grid cells for the current mode (weeks of cells in DAY mode)."""
        value = self._current_value()
        constraints = self._display_constraints()
        mode = self.mode
        if mode is Mode.DAY:
            return day_cells(value, self.config.first_day_of_week, constraints)
        if mode is Mode.MONTH:
            return month_cells(value, constraints)
        if mode is Mode.YEAR:
            return year_cells(value, constraints)
        if mode is Mode.HOUR:
            return hour_cells(value, constraints, self.config.hour_formatter)
        if mode is Mode.MINUTE:
            return minute_cells(value, constraints)
        return []

    # ------------------------------------------------------------------
    # Open / close
    # ------------------------------------------------------------------
    def open(self) -> Transition:
        """Request the widget to open."""
        if self.config.disabled:
            self._log.debug("open_ignored", reason="disabled")
            return self._unchanged()
        self._log.debug("open")
        if self._on_open:
            self._on_open(self.context())
        self._commit({"open": True})
        return self._unchanged()

    def close(self) -> Transition:
        """Request the widget to close and reset to the initial mode."""
        self._log.debug("close")
        if self._on_close:
            self._on_close(self.context())
        self._commit({"open": False, "mode": self.config.initial_mode})
        return self._unchanged()

    def toggle(self) -> Transition:
        return self.close() if self.is_open else self.open()

    # ------------------------------------------------------------------
    # Selection and navigation
    # ------------------------------------------------------------------
    def select(self, unit: Mode | str, raw: int) -> Transition:
        """Select ``raw`` for ``unit`` and cascade to the next mode.

        Raises:
            UnitRangeError: If ``raw`` is outside the unit's natural range.
        """
        unit = Mode(unit)
        try:
            if not self.flags.enables(unit):
                raise InvalidTransitionError(unit, "select", "unit not enabled")
            constraints = self.constraints
            candidate = set_unit(self._current_value(), unit, raw)
            # a bound inside the chosen cell pulls the candidate onto it
            fitted = clamp(candidate, constraints)
            if floor(fitted, unit) == floor(candidate, unit):
                candidate = fitted
            check(candidate, constraints)
            mode = next_mode(unit, self.flags)
        except PickerError as ex:
            return self._refused("select", ex)

        self._log.debug("selected", unit=unit.value, value=candidate.isoformat(), mode=mode.value)
        self._commit({"value": candidate, "mode": mode})
        self._notify_change(candidate, mode)
        if mode is Mode.CLOSED:
            self.close()
        return Transition(value=candidate, mode=mode, open=self.is_open, notified=True)

    def page(self, direction: int) -> Transition:
        """Move the displayed anchor one page back (-1) or forward (+1).

        Past a min/max bound the anchor stops on the bound's day with its
        time of day unchanged. Paging never changes the mode.
        """
        mode = self.mode
        current = self._current_value()
        try:
            stride = page_stride(mode, direction)
            if stride is None:
                raise InvalidTransitionError(mode, "page")
            constraints = self.constraints
            shifted = clamp(shift(current, stride), constraints)
            candidate = datetime.combine(shifted.date(), current.time())
            if candidate == current:
                self._log.debug("page_ignored", reason="at_bound")
                return self._unchanged()
            check(candidate, constraints)
        except PickerError as ex:
            return self._refused("page", ex)

        self._log.debug("paged", field=stride.field.value, delta=stride.delta)
        self._commit({"value": candidate})
        self._notify_change(candidate, mode)
        return Transition(value=candidate, mode=mode, open=self.is_open, notified=True)

    def previous_page(self) -> Transition:
        return self.page(-1)

    def next_page(self) -> Transition:
        return self.page(1)

    def change_mode(self, mode: Mode | str) -> Transition:
        """Jump straight to ``mode`` without passing through the cascade."""
        mode = Mode(mode)
        if not self.flags.enables(mode):
            return self._refused(
                "change_mode",
                InvalidTransitionError(self.mode, "change_mode", f"{mode.value} not enabled"),
            )
        value = self.value
        self._commit({"mode": mode})
        self._notify_change(value, mode)
        return Transition(value=value, mode=mode, open=self.is_open, notified=True)

    def set_value(self, value: datetime) -> Transition:
        """Commit a value programmatically, keeping the current mode."""
        try:
            check(value, self.constraints)
        except PickerError as ex:
            return self._refused("set_value", ex)
        mode = self.mode
        self._commit({"value": value})
        self._notify_change(value, mode)
        return Transition(value=value, mode=mode, open=self.is_open, notified=True)

    def receive(self, **external: Any) -> None:
        """Feed back the host's current values for controlled fields.

        Values for fields the host does not control are ignored.
        """
        self._external.update(
            {k: v for k, v in external.items() if k in self._controlled}
        )
        self._state = self.reconciler.receive(
            self._state, self._controlled, self._external
        )

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _current_value(self) -> datetime:
        value = self.value
        if value is None:
            value = self._now()
            self._log.debug("value_seeded", value=value.isoformat())
        return value

    def _commit(self, patch: Mapping[str, Any]) -> None:
        self._state = self.reconciler.try_update(
            self._state, self._controlled, self._external, patch
        )

    def _notify_change(self, value: datetime | None, mode: Mode) -> None:
        if self._on_change:
            self._on_change(self.context(), ChangeData(value=value, mode=mode))

    def _unchanged(self) -> Transition:
        return Transition(value=self.value, mode=self.mode, open=self.is_open)

    def _refused(self, action: str, error: PickerError) -> Transition:
        category = classify_error(error)
        if is_surfaced(category):
            self._log.warning(f"{action}_failed", category=category.name, error=str(error))
            raise error
        self._log.debug(f"{action}_refused", category=category.name, error=str(error))
        return self._unchanged()
