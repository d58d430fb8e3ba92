"""Tests for single picker sessions."""

from collections.abc import Callable
from datetime import date, datetime

import pytest

from datepicker.core.config import PickerConfig
from datepicker.core.errors import UnitRangeError
from datepicker.core.mode_cascade import Mode
from datepicker.core.picker import Picker
from tests.mocks.handlers import RecordingHandlers

MakePicker = Callable[..., Picker]


class TestConstruction:
    """Tests for initial picker state."""

    def test_defaults(self, make_picker: MakePicker) -> None:
        picker = make_picker()
        assert picker.value == datetime(2024, 5, 1, 0, 0)
        assert picker.mode is Mode.DAY
        assert picker.is_open is False
        assert picker.controlled_fields == frozenset()

    def test_value_defaults_to_now(self, fixed_now: Callable[[], datetime]) -> None:
        picker = Picker(PickerConfig(), now=fixed_now)
        assert picker.value == fixed_now()

    def test_time_only_starts_at_hour(self, make_picker: MakePicker) -> None:
        assert make_picker(date=False).mode is Mode.HOUR

    def test_default_open_and_mode(self, make_picker: MakePicker) -> None:
        picker = make_picker(default_open=True, default_mode="year")
        assert picker.is_open is True
        assert picker.mode is Mode.YEAR

    def test_controlled_values_win(self, make_picker: MakePicker) -> None:
        picker = make_picker(controlled={"value": datetime(2030, 1, 1), "open": True})
        assert picker.value == datetime(2030, 1, 1)
        assert picker.is_open is True
        assert picker.controlled_fields == frozenset({"value", "open"})

    def test_controlled_without_value_seeds_default(self, make_picker: MakePicker) -> None:
        picker = make_picker(controlled={"value": None})
        assert picker.value == datetime(2024, 5, 1, 0, 0)
        assert picker.select("day", 2).value == datetime(2024, 5, 2, 0, 0)


class TestCascadeScenarios:
    """End-to-end selection cascades."""

    def test_date_time_cascade(
        self, make_picker: MakePicker, handlers: RecordingHandlers
    ) -> None:
        picker = make_picker()
        picker.open()

        first = picker.select("day", 15)
        assert first.value == datetime(2024, 5, 15, 0, 0)
        assert first.mode is Mode.HOUR
        assert picker.mode is Mode.HOUR

        second = picker.select("hour", 14)
        assert second.value == datetime(2024, 5, 15, 14, 0)
        assert second.mode is Mode.MINUTE

        last = picker.select("minute", 30)
        assert last.value == datetime(2024, 5, 15, 14, 30)
        assert last.mode is Mode.CLOSED
        assert last.open is False
        assert picker.is_open is False
        assert picker.mode is Mode.DAY  # closing restores the initial mode

        assert handlers.events == ["open", "change", "change", "change", "close"]
        assert handlers.changes[-1].data.mode is Mode.CLOSED

    def test_date_only_closes_after_day(
        self, make_picker: MakePicker, handlers: RecordingHandlers
    ) -> None:
        picker = make_picker(time=False)
        transition = picker.select("day", 20)
        assert transition.mode is Mode.CLOSED
        assert len(handlers.closes) == 1

    def test_time_only_cascade(self, make_picker: MakePicker) -> None:
        picker = make_picker(date=False)
        assert picker.select("hour", 8).mode is Mode.MINUTE
        assert picker.select("minute", 5).mode is Mode.CLOSED
        assert picker.mode is Mode.HOUR
        assert picker.value == datetime(2024, 5, 1, 8, 5)

    def test_drill_down_from_year(self, make_picker: MakePicker) -> None:
        picker = make_picker(default_mode="year")
        assert picker.select("year", 2026).mode is Mode.MONTH
        assert picker.select("month", 0).mode is Mode.DAY
        assert picker.value == datetime(2026, 1, 1, 0, 0)

    def test_repeated_selection_does_not_drift(self, make_picker: MakePicker) -> None:
        picker = make_picker(time=False)
        first = picker.select("day", 15)
        second = picker.select("day", 15)
        assert first.value == second.value == datetime(2024, 5, 15, 0, 0)


class TestSelectRefusals:
    """Tests for rejected selections."""

    def test_out_of_range_raises_and_keeps_state(
        self, make_picker: MakePicker, handlers: RecordingHandlers
    ) -> None:
        picker = make_picker()
        with pytest.raises(UnitRangeError):
            picker.select("hour", 25)
        assert picker.value == datetime(2024, 5, 1, 0, 0)
        assert picker.mode is Mode.DAY
        assert handlers.events == []

    def test_constraint_violation_is_silent(
        self, make_picker: MakePicker, handlers: RecordingHandlers
    ) -> None:
        picker = make_picker(max_date=date(2024, 5, 10))
        transition = picker.select("day", 15)
        assert transition.notified is False
        assert transition.value == datetime(2024, 5, 1, 0, 0)
        assert picker.mode is Mode.DAY
        assert handlers.events == []

    def test_day_holding_exact_min_selects_the_min(self, make_picker: MakePicker) -> None:
        picker = make_picker(min_date=datetime(2024, 5, 10, 14, 0))
        transition = picker.select("day", 10)
        assert transition.notified is True
        assert transition.value == datetime(2024, 5, 10, 14, 0)

    def test_hour_before_exact_min_is_refused(self, make_picker: MakePicker) -> None:
        picker = make_picker(min_date=datetime(2024, 5, 1, 14, 0), default_mode="hour")
        assert picker.select("hour", 9).notified is False
        assert picker.select("hour", 14).value == datetime(2024, 5, 1, 14, 0)

    def test_disabled_day_refuses_time(self, make_picker: MakePicker) -> None:
        picker = make_picker(disabled_dates=[date(2024, 5, 1)], default_mode="hour")
        assert picker.select("hour", 10).notified is False

    def test_unit_not_enabled_is_ignored(
        self, make_picker: MakePicker, handlers: RecordingHandlers
    ) -> None:
        picker = make_picker(time=False)
        transition = picker.select("hour", 3)
        assert transition.notified is False
        assert picker.value == datetime(2024, 5, 1, 0, 0)
        assert handlers.events == []

    def test_unknown_unit_raises(self, make_picker: MakePicker) -> None:
        with pytest.raises(ValueError):
            make_picker().select("week", 1)


class TestOpenClose:
    """Tests for open, close and toggle."""

    def test_toggle(self, make_picker: MakePicker, handlers: RecordingHandlers) -> None:
        picker = make_picker()
        picker.toggle()
        assert picker.is_open is True
        picker.toggle()
        assert picker.is_open is False
        assert handlers.events == ["open", "close"]

    def test_close_resets_mode(self, make_picker: MakePicker) -> None:
        picker = make_picker()
        picker.open()
        picker.change_mode("year")
        picker.close()
        assert picker.mode is Mode.DAY

    def test_open_notifies_with_context(
        self, make_picker: MakePicker, handlers: RecordingHandlers
    ) -> None:
        picker = make_picker(name="appointment")
        picker.open()
        context = handlers.opens[0]
        assert context.config.name == "appointment"
        assert context.value == datetime(2024, 5, 1, 0, 0)
        assert context.side is None

    def test_disabled_picker_does_not_open(
        self, make_picker: MakePicker, handlers: RecordingHandlers
    ) -> None:
        picker = make_picker(disabled=True)
        picker.toggle()
        assert picker.is_open is False
        assert handlers.events == []


class TestPaging:
    """Tests for page navigation."""

    def test_day_mode_pages_by_month(
        self, make_picker: MakePicker, handlers: RecordingHandlers
    ) -> None:
        picker = make_picker()
        transition = picker.next_page()
        assert transition.value == datetime(2024, 6, 1, 0, 0)
        assert transition.mode is Mode.DAY
        assert picker.mode is Mode.DAY
        assert handlers.changes[-1].data.mode is Mode.DAY

    def test_month_mode_pages_by_year(self, make_picker: MakePicker) -> None:
        picker = make_picker(default_mode="month")
        assert picker.previous_page().value == datetime(2023, 5, 1, 0, 0)

    def test_year_mode_pages_by_sixteen(self, make_picker: MakePicker) -> None:
        picker = make_picker(default_mode="year")
        picker.page(1)
        assert picker.value.year == 2040
        assert picker.mode is Mode.YEAR

    def test_time_modes_do_not_page(
        self, make_picker: MakePicker, handlers: RecordingHandlers
    ) -> None:
        picker = make_picker(default_mode="hour")
        transition = picker.page(1)
        assert transition.notified is False
        assert picker.value == datetime(2024, 5, 1, 0, 0)
        assert handlers.events == []

    def test_paging_stops_on_max_day_keeping_time(
        self, fixed_now: Callable[[], datetime]
    ) -> None:
        picker = Picker(PickerConfig(max_date=date(2024, 5, 20)), now=fixed_now)
        assert picker.next_page().value == datetime(2024, 5, 20, 9, 45)
        assert picker.display_text == "2024-05-20 09:45"
        assert picker.next_page().notified is False
        assert picker.value == datetime(2024, 5, 20, 9, 45)

    def test_paging_stops_on_min_day_keeping_time(self) -> None:
        picker = Picker(
            PickerConfig(min_date=date(2024, 5, 1)),
            now=lambda: datetime(2024, 5, 15, 10, 30),
        )
        assert picker.previous_page().value == datetime(2024, 5, 1, 10, 30)

    def test_paging_past_exact_max_is_refused(
        self, fixed_now: Callable[[], datetime], handlers: RecordingHandlers
    ) -> None:
        picker = Picker(
            PickerConfig(max_date=datetime(2024, 5, 20, 8, 0)),
            now=fixed_now,
            **handlers.as_kwargs(),
        )
        assert picker.next_page().notified is False
        assert picker.value == datetime(2024, 5, 1, 9, 45)
        assert handlers.events == []

    def test_selection_after_paging_keeps_time(
        self, fixed_now: Callable[[], datetime]
    ) -> None:
        picker = Picker(PickerConfig(max_date=date(2024, 5, 20)), now=fixed_now)
        picker.next_page()
        assert picker.select("day", 18).value == datetime(2024, 5, 18, 9, 45)


class TestChangeMode:
    """Tests for explicit mode changes."""

    def test_jumps_and_notifies_same_value(
        self, make_picker: MakePicker, handlers: RecordingHandlers
    ) -> None:
        picker = make_picker()
        transition = picker.change_mode("year")
        assert transition.mode is Mode.YEAR
        assert picker.mode is Mode.YEAR
        assert handlers.changes[-1].data.value == datetime(2024, 5, 1, 0, 0)

    def test_disabled_granularity_is_ignored(self, make_picker: MakePicker) -> None:
        picker = make_picker(time=False)
        assert picker.change_mode("hour").notified is False
        assert picker.mode is Mode.DAY

    def test_closed_is_not_a_target(self, make_picker: MakePicker) -> None:
        assert make_picker().change_mode(Mode.CLOSED).notified is False


class TestControlledFields:
    """Tests for host-controlled state."""

    def test_controlled_value_is_only_reported(
        self, make_picker: MakePicker, handlers: RecordingHandlers
    ) -> None:
        owned = datetime(2024, 5, 1, 0, 0)
        picker = make_picker(controlled={"value": owned})
        transition = picker.select("day", 15)
        assert transition.value == datetime(2024, 5, 15, 0, 0)
        assert handlers.changes[-1].data.value == datetime(2024, 5, 15, 0, 0)
        assert picker.value == owned
        assert picker.mode is Mode.HOUR  # mode is still internally owned

        picker.receive(value=transition.value)
        assert picker.value == datetime(2024, 5, 15, 0, 0)

    def test_controlled_open(
        self, make_picker: MakePicker, handlers: RecordingHandlers
    ) -> None:
        picker = make_picker(controlled={"open": False})
        picker.open()
        assert handlers.events == ["open"]
        assert picker.is_open is False
        picker.receive(open=True)
        assert picker.is_open is True

    def test_controlled_mode(self, make_picker: MakePicker) -> None:
        picker = make_picker(controlled={"mode": "day"})
        assert picker.select("day", 3).mode is Mode.HOUR
        assert picker.mode is Mode.DAY

    def test_receive_ignores_uncontrolled(self, make_picker: MakePicker) -> None:
        picker = make_picker()
        picker.receive(value=datetime(2030, 1, 1), bogus=True)
        assert picker.value == datetime(2024, 5, 1, 0, 0)


class TestDisplay:
    """Tests for display helpers."""

    def test_display_text(self, make_picker: MakePicker) -> None:
        assert make_picker().display_text == "2024-05-01 00:00"
        assert make_picker(time=False).display_text == "2024-05-01"
        assert make_picker(date=False).display_text == "00:00"

    def test_cells_follow_mode(self, make_picker: MakePicker) -> None:
        picker = make_picker()
        weeks = picker.cells()
        assert all(len(week) == 7 for week in weeks)
        picker.change_mode("month")
        assert len(picker.cells()) == 12
        picker.change_mode("hour")
        assert len(picker.cells()) == 24

    def test_set_value(self, make_picker: MakePicker) -> None:
        picker = make_picker(max_date=date(2024, 6, 1))
        assert picker.set_value(datetime(2024, 5, 20, 8, 0)).notified is True
        assert picker.set_value(datetime(2024, 7, 1)).notified is False
        assert picker.value == datetime(2024, 5, 20, 8, 0)
