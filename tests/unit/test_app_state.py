"""Tests for AppState NamedTuple."""

from src.app_state import AppState


class TestAppState:
    def test_app_state_is_named_tuple(self):
        """AppState should be a NamedTuple subclass."""
        assert issubclass(AppState, tuple)

    def test_app_state_has_session_field(self):
        """AppState should have a 'session' field."""
        assert AppState._fields == ("session",)
