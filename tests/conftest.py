"""Shared pytest fixtures for picker tests."""

from collections.abc import Callable
from datetime import datetime

import pytest

from datepicker.core.config import PickerConfig
from datepicker.core.picker import Picker
from tests.mocks.handlers import RecordingHandlers

FIXED_NOW = datetime(2024, 5, 1, 9, 45)


@pytest.fixture
def fixed_now() -> Callable[[], datetime]:
    """Provide a clock that always returns FIXED_NOW."""
    return lambda: FIXED_NOW


@pytest.fixture
def handlers() -> RecordingHandlers:
    """Provide fresh recording handlers for each test."""
    return RecordingHandlers()


@pytest.fixture
def make_picker(
    handlers: RecordingHandlers, fixed_now: Callable[[], datetime]
) -> Callable[..., Picker]:
    """Provide a factory for pickers wired to the recording handlers.

    Keyword arguments are PickerConfig options, except ``controlled`` which
    is passed to the Picker.

    Example:
        def test_time_only(make_picker):
            picker = make_picker(date=False)
            assert picker.mode is Mode.HOUR
    """

    def factory(controlled: dict | None = None, **options: object) -> Picker:
        options.setdefault("default_value", datetime(2024, 5, 1, 0, 0))
        return Picker(
            PickerConfig(**options),
            controlled=controlled,
            now=fixed_now,
            **handlers.as_kwargs(),
        )

    return factory
