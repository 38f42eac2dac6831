"""Registration service for single participants and attendance."""
import logging
from typing import Any, Optional, Tuple

from attendance_tracker.models.participant import County, Gender, Participant
from attendance_tracker.services.participant_service import (
    ensure_store_file,
    load_participants,
    save_participants,
)
from attendance_tracker.services.storage_service import lock_file
from attendance_tracker.utils.exceptions import (
    AttendanceTrackerError,
    FileWriteError,
    ParticipantNotFoundError,
    ValidationError,
)
from attendance_tracker.utils.validation import (
    FILL_ALL_FIELDS,
    is_blank,
    parse_sessions,
    validate_registration,
)

logger = logging.getLogger(__name__)

SYSTEM_ERROR = "System error, please try again later"


def register_participant(
    phone: str,
    name: str,
    gender: str,
    county: str,
    data_file: Optional[str] = None,
) -> Tuple[bool, str]:
    """
    Register one participant.

    Args:
        phone: Phone number, unique across participants
        name: Full name
        gender: 'male' or 'female'
        county: County name
        data_file: Store file (defaults to PARTICIPANTS_FILE)

    Returns:
        Tuple of (success: bool, message: str)
        - (True, "<name> registered successfully!") on success
        - (False, "Phone number already registered") if phone exists
        - (False, error_message) on validation failure
        - (False, "System error, please try again later") if the store file
          can't be read or written

    Behavior:
        - Trims all fields; gender is stored lowercase
        - Reloads the store under the file lock before checking the phone
        - New participants start with zero attendance
    """
    is_valid, error_msg = validate_registration(phone, name, gender, county)
    if not is_valid:
        return False, error_msg

    participant = Participant(
        phone=phone.strip(),
        name=name.strip(),
        gender=Gender.parse(gender),
        county=County(county.strip()),
        attendance_count=0,
    )

    try:
        path = ensure_store_file(data_file)
        with lock_file(path):
            # Reload to see registrations made since the form was shown
            store = load_participants(path)
            if store.contains(participant.phone):
                return False, "Phone number already registered"
            store.add(participant)
            save_participants(store, path)
    except (OSError, FileWriteError) as e:
        logger.error(f"File operation failed during registration: {e}")
        return False, SYSTEM_ERROR
    except (ValueError, AttendanceTrackerError) as e:
        logger.error(f"Unreadable participant store during registration: {e}")
        return False, SYSTEM_ERROR

    logger.info(f"Registered participant {participant.phone}")
    return True, f"{participant.name} registered successfully!"


def record_attendance(phone: str, sessions: Any, data_file: Optional[str] = None) -> Tuple[bool, str]:
    """
    Add attended sessions to a registered participant.

    Args:
        phone: Registered phone number
        sessions: Number of sessions attended (int or numeric string)
        data_file: Store file (defaults to PARTICIPANTS_FILE)

    Returns:
        Tuple of (success: bool, message: str)
        - (True, "Attendance recorded: N session(s) for <name>") on success
        - (False, "Please fill in all fields") if phone or sessions is blank
        - (False, "Phone number not registered. Please register first.")
        - (False, "Number of sessions must be greater than 0")
        - (False, "System error, please try again later") if the store file
          can't be read or written
    """
    if is_blank(phone) or is_blank(sessions):
        return False, FILL_ALL_FIELDS

    phone = phone.strip()

    try:
        path = ensure_store_file(data_file)
        with lock_file(path):
            store = load_participants(path)
            participant = store.require(phone)
            count = parse_sessions(sessions)
            participant.record_attendance(count)
            save_participants(store, path)
    except ParticipantNotFoundError:
        return False, "Phone number not registered. Please register first."
    except ValidationError as e:
        return False, str(e)
    except (OSError, FileWriteError) as e:
        logger.error(f"File operation failed while recording attendance: {e}")
        return False, SYSTEM_ERROR
    except (ValueError, AttendanceTrackerError) as e:
        logger.error(f"Unreadable participant store while recording attendance: {e}")
        return False, SYSTEM_ERROR

    logger.info(f"Recorded {count} session(s) for {phone}")
    return True, f"Attendance recorded: {count} session(s) for {participant.name}"
