"""Form validation utilities."""
from typing import Any, Optional, Tuple

from attendance_tracker.models.participant import County, Gender
from attendance_tracker.utils.exceptions import ValidationError

FILL_ALL_FIELDS = "Please fill in all fields"


def is_blank(value: Optional[str]) -> bool:
    """True for None, empty, or whitespace-only strings."""
    return value is None or not str(value).strip()


def validate_registration(phone: str, name: str, gender: str, county: str) -> Tuple[bool, str]:
    """
    Validate a single registration form.

    Args:
        phone: Phone number (natural key)
        name: Full name
        gender: 'male' or 'female', any case
        county: Exact county name

    Returns:
        Tuple of (is_valid: bool, error_message: str)
        - (True, "") if valid
        - (False, "Please fill in all fields") if anything is blank
        - (False, "Gender must be 'male' or 'female'") for unknown gender
        - (False, "Invalid county '<county>'") for unknown county
    """
    if any(is_blank(value) for value in (phone, name, gender, county)):
        return False, FILL_ALL_FIELDS

    if Gender.parse(gender) is None:
        return False, "Gender must be 'male' or 'female'"

    if County.parse(county.strip()) is None:
        return False, f"Invalid county '{county.strip()}'"

    return True, ""


def parse_sessions(value: Any) -> int:
    """
    Convert a sessions form value to a positive integer.

    Args:
        value: int or numeric string from the attendance form

    Returns:
        The number of sessions

    Raises:
        ValidationError: If value is not an integer greater than 0
    """
    if isinstance(value, bool):
        raise ValidationError("Number of sessions must be greater than 0")

    if isinstance(value, str):
        try:
            value = int(value.strip())
        except ValueError as e:
            raise ValidationError(f"Invalid number of sessions: {value}") from e

    if not isinstance(value, int) or value <= 0:
        raise ValidationError("Number of sessions must be greater than 0")

    return value
