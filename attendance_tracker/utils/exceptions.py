"""Custom exception classes."""


class AttendanceTrackerError(Exception):
    """Base class for attendance tracker errors."""
    pass


class ParticipantNotFoundError(AttendanceTrackerError):
    """Raised when a phone number isn't registered."""

    def __init__(self, phone: str):
        super().__init__(f"Phone number {phone} not registered")
        self.phone = phone


class DuplicateParticipantError(AttendanceTrackerError):
    """Raised when a phone number is already present in the store."""

    def __init__(self, phone: str):
        super().__init__(f"Phone number {phone} already registered")
        self.phone = phone


class ValidationError(AttendanceTrackerError, ValueError):
    """Raised when form input fails validation."""
    pass


class EmptyImportError(AttendanceTrackerError):
    """Raised when an import is committed without any valid candidates."""

    def __init__(self, message: str = "No valid data to import"):
        super().__init__(message)


class StaleImportError(AttendanceTrackerError):
    """Raised when candidates were registered after the import preview was built."""

    def __init__(self, phones):
        self.phones = list(phones)
        super().__init__(
            "Participants registered since preview: " + ", ".join(self.phones)
        )


class UnreadableInputError(AttendanceTrackerError):
    """Raised when an upload cannot be read as text."""
    pass


class FileWriteError(AttendanceTrackerError):
    """Raised when unable to write to JSON file."""
    pass
