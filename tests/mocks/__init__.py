"""Mock implementations for testing."""

from tests.mocks.handlers import ChangeCall, RecordingHandlers

__all__ = ["ChangeCall", "RecordingHandlers"]
