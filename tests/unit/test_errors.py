"""Unit tests for the sticky error state."""

import pytest

from db_access.core.errors import ErrorState
from db_access.exceptions import DatabaseError


class TestErrorState:
    """Test recording and reporting of errors."""

    def test_no_error(self):
        errors = ErrorState()
        assert errors.error() is None
        assert errors.error_number() == 0
        assert not errors.has_error

    def test_message_without_code(self):
        """Test that a message alone reports code -1."""
        errors = ErrorState()
        assert errors.set_error("Something broke") is False
        assert errors.error() == "Something broke"
        assert errors.error_number() == -1

    def test_message_with_code(self):
        """Test that real engine codes are appended to the description."""
        errors = ErrorState()
        errors.set_error("Table doesn't exist", 1146)
        assert errors.error() == "Table doesn't exist (#1146)"
        assert errors.error_number() == 1146

    def test_internal_code_is_not_appended(self):
        errors = ErrorState()
        errors.set_error("No connection", -1)
        assert errors.error() == "No connection"

    def test_code_without_message(self):
        errors = ErrorState()
        errors.set_error(code=2006)
        assert errors.error() == "Unknown Error (#2006)"
        assert errors.error_number() == 2006

    def test_first_error_wins(self):
        """Test that later errors do not overwrite the first one."""
        errors = ErrorState()
        errors.set_error("first", -1)
        errors.set_error("second", 42)
        assert errors.error() == "first"
        assert errors.error_number() == -1

    def test_reset_is_idempotent(self):
        errors = ErrorState()
        errors.set_error("boom")
        errors.reset()
        errors.reset()
        assert errors.error() is None
        assert errors.error_number() == 0

    def test_engine_error_fallback(self):
        """Test that missing details come from the engine."""
        errors = ErrorState(engine_error=lambda: (1064, "You have an error in your SQL syntax"))
        errors.set_error()
        assert errors.error() == "You have an error in your SQL syntax (#1064)"

    def test_explicit_message_overrides_engine(self):
        errors = ErrorState(engine_error=lambda: (1064, "syntax"))
        errors.set_error("Could not rollback transaction", -1)
        assert errors.error() == "Could not rollback transaction"

    def test_throw_exceptions(self):
        """Test that strict mode raises the recorded error."""
        errors = ErrorState(throw_exceptions=True)
        with pytest.raises(DatabaseError, match="Bad thing") as exc_info:
            errors.set_error("Bad thing", 7)
        assert exc_info.value.code == 7
        # The error is still recorded
        assert errors.error_number() == 7
