"""Unit tests for validation utilities."""
import pytest

from attendance_tracker.utils.exceptions import AttendanceTrackerError, ValidationError
from attendance_tracker.utils.validation import is_blank, parse_sessions, validate_registration


class TestIsBlank:
    """Test is_blank function."""

    @pytest.mark.parametrize("value", [None, "", "   ", "\t\n"])
    def test_blank_values(self, value):
        assert is_blank(value) is True

    @pytest.mark.parametrize("value", ["a", " 0 ", 3])
    def test_non_blank_values(self, value):
        assert is_blank(value) is False


class TestValidateRegistration:
    """Test validate_registration function."""

    def test_valid_registration(self):
        assert validate_registration("+254700000000", "John Doe", "male", "Nairobi") == (True, "")

    def test_gender_is_case_insensitive(self):
        is_valid, _ = validate_registration("1", "Jane", "FEMALE", "Mombasa")

        assert is_valid is True

    def test_county_surrounding_whitespace_ignored(self):
        is_valid, _ = validate_registration("1", "Jane", "female", "  Mombasa ")

        assert is_valid is True

    def test_blank_field(self):
        is_valid, error_msg = validate_registration("1", "", "female", "Mombasa")

        assert is_valid is False
        assert error_msg == "Please fill in all fields"

    def test_blank_check_comes_before_gender_check(self):
        _, error_msg = validate_registration("", "Jane", "other", "Mombasa")

        assert error_msg == "Please fill in all fields"

    def test_invalid_gender(self):
        is_valid, error_msg = validate_registration("1", "Jane", "other", "Mombasa")

        assert is_valid is False
        assert error_msg == "Gender must be 'male' or 'female'"

    def test_county_is_case_sensitive(self):
        is_valid, error_msg = validate_registration("1", "Jane", "female", "mombasa")

        assert is_valid is False
        assert error_msg == "Invalid county 'mombasa'"


class TestParseSessions:
    """Test parse_sessions function."""

    @pytest.mark.parametrize("value,expected", [(1, 1), (12, 12), ("3", 3), (" 4 ", 4)])
    def test_valid_values(self, value, expected):
        assert parse_sessions(value) == expected

    @pytest.mark.parametrize("value", [0, -2, "0", "-1", True])
    def test_non_positive_rejected(self, value):
        with pytest.raises(ValueError, match="Number of sessions must be greater than 0"):
            parse_sessions(value)

    def test_non_numeric_rejected(self):
        with pytest.raises(ValueError, match="Invalid number of sessions: abc"):
            parse_sessions("abc")

    def test_float_rejected(self):
        with pytest.raises(ValueError):
            parse_sessions(2.5)

    def test_raises_validation_error(self):
        with pytest.raises(ValidationError) as exc_info:
            parse_sessions("0")

        assert isinstance(exc_info.value, AttendanceTrackerError)
