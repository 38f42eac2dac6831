"""Import batch result models."""
from dataclasses import dataclass, field
from enum import Enum
from typing import List

from attendance_tracker.models.participant import Participant


class ImportErrorKind(str, Enum):
    """Reasons a CSV row can be rejected."""

    MISSING_FIELDS = "missing_fields"
    INVALID_GENDER = "invalid_gender"
    INVALID_COUNTY = "invalid_county"
    DUPLICATE_IN_BATCH = "duplicate_in_batch"
    ALREADY_REGISTERED = "already_registered"


@dataclass(frozen=True)
class RowDiagnostic:
    """A rejected row: where it was and why."""

    line_number: int
    kind: ImportErrorKind
    message: str

    def __str__(self) -> str:
        return f"Row {self.line_number}: {self.message}"


@dataclass
class ImportBatchResult:
    """Accepted candidates and row errors from one upload, in file order."""

    candidates: List[Participant] = field(default_factory=list)
    errors: List[RowDiagnostic] = field(default_factory=list)

    @property
    def valid_count(self) -> int:
        return len(self.candidates)

    @property
    def error_count(self) -> int:
        return len(self.errors)

    @property
    def ready_to_commit(self) -> bool:
        """True when at least one row can be imported."""
        return len(self.candidates) > 0

    def error_messages(self) -> List[str]:
        """Return errors formatted as 'Row N: message'."""
        return [str(error) for error in self.errors]
