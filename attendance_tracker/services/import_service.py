"""
Bulk participant import from comma-separated text.

An import is two-phase. parse_import() reads the upload against the current
store and returns an ImportBatchResult (accepted candidates plus one
diagnostic per rejected row) without touching the store. Only
commit_import() / import_participants() add the candidates.

Rows are split on every comma and double quotes are stripped; quoting is not
CSV escaping, so a quoted name containing a comma splits into two fields.
"""
import logging
from typing import Iterator, List, Optional, Set, Tuple, Union

from attendance_tracker.models.import_batch import ImportBatchResult, ImportErrorKind, RowDiagnostic
from attendance_tracker.models.participant import County, Gender, Participant
from attendance_tracker.models.participant_store import ParticipantStore
from attendance_tracker.services.participant_service import (
    ensure_store_file,
    load_participants,
    save_participants,
)
from attendance_tracker.services.storage_service import lock_file
from attendance_tracker.utils.exceptions import (
    AttendanceTrackerError,
    EmptyImportError,
    FileWriteError,
    StaleImportError,
    UnreadableInputError,
)

logger = logging.getLogger(__name__)

COLUMNS = ("phone", "name", "gender", "county")
HEADER_MARKER = "phone"
MAX_UPLOAD_BYTES = 10 * 1024 * 1024

TEMPLATE_FILENAME = "participants_template.csv"
CSV_TEMPLATE = (
    "phone,name,gender,county\n"
    "+254700000000,John Doe,male,Nairobi\n"
    "+254700000001,Jane Smith,female,Mombasa"
)

Fields = Tuple[str, str, str, str]


def build_template() -> str:
    """Return the downloadable example CSV."""
    return CSV_TEMPLATE


def validate_upload_filename(filename: str) -> Tuple[bool, str]:
    """Only .csv uploads are accepted."""
    if not filename or not filename.lower().endswith(".csv"):
        return False, "Please upload a CSV file"
    return True, ""


def decode_upload(raw: Union[str, bytes]) -> str:
    """
    Turn uploaded content into text.

    Args:
        raw: File bytes (decoded as UTF-8) or already-decoded text

    Returns:
        The text without a leading byte order mark

    Raises:
        UnreadableInputError: If the upload is too large or isn't UTF-8 text
    """
    if isinstance(raw, (bytes, bytearray)):
        if len(raw) > MAX_UPLOAD_BYTES:
            raise UnreadableInputError("File is larger than the 10MB limit")
        try:
            text = bytes(raw).decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise UnreadableInputError(f"File is not valid UTF-8 text: {e}") from e
    elif isinstance(raw, str):
        text = raw[1:] if raw.startswith("\ufeff") else raw
        if len(text.encode("utf-8", errors="surrogatepass")) > MAX_UPLOAD_BYTES:
            raise UnreadableInputError("File is larger than the 10MB limit")
    else:
        raise UnreadableInputError(f"Unsupported upload type: {type(raw).__name__}")

    return text


# ---------------------------------------------------------------------------
# Row parsing
# ---------------------------------------------------------------------------

def normalize_field(raw: str) -> str:
    """Trim whitespace and drop every double quote."""
    return raw.strip().replace('"', "").strip()


def split_lines(text: str) -> List[str]:
    """
    Split the trimmed upload into lines; index + 1 is the row number.

    Lines end at LF, CRLF or a lone CR. Form feeds, U+2028 and the other
    separators str.splitlines() knows about stay inside their row.
    """
    stripped = text.strip()
    if not stripped:
        return []
    return stripped.replace("\r\n", "\n").replace("\r", "\n").split("\n")


def is_header(line: str) -> bool:
    return HEADER_MARKER in line.lower()


def parse_row(line: str) -> Fields:
    """
    Split one data line into (phone, name, gender, county).

    Missing columns come back as empty strings; extra columns are ignored.
    """
    cells = [normalize_field(cell) for cell in line.split(",")]
    cells.extend([""] * (len(COLUMNS) - len(cells)))
    phone, name, gender, county = cells[: len(COLUMNS)]
    return phone, name, gender, county


def iter_rows(text: str) -> Iterator[Tuple[int, Fields]]:
    """
    Yield (line_number, fields) for every data line.

    The first line is skipped as a header when it mentions 'phone'; blank
    lines are skipped anywhere.
    """
    for index, raw_line in enumerate(split_lines(text)):
        line = raw_line.strip()
        if not line:
            continue
        if index == 0 and is_header(line):
            continue
        yield index + 1, parse_row(line)


# ---------------------------------------------------------------------------
# Row checks
# ---------------------------------------------------------------------------

def validate_record(fields: Fields, line_number: int) -> Union[Participant, RowDiagnostic]:
    """
    Check completeness, then gender, then county; first failure wins.

    Returns:
        A candidate Participant with zero attendance, or the RowDiagnostic
        explaining why the row was rejected
    """
    phone, name, gender_raw, county_raw = fields

    if not all(fields):
        return RowDiagnostic(line_number, ImportErrorKind.MISSING_FIELDS, "Missing required fields")

    gender = Gender.parse(gender_raw)
    if gender is None:
        return RowDiagnostic(
            line_number, ImportErrorKind.INVALID_GENDER, "Gender must be 'male' or 'female'"
        )

    county = County.parse(county_raw)
    if county is None:
        return RowDiagnostic(
            line_number, ImportErrorKind.INVALID_COUNTY, f"Invalid county '{county_raw}'"
        )

    return Participant(phone=phone, name=name, gender=gender, county=county, attendance_count=0)


class BatchDeduplicator:
    """
    Remembers phone numbers accepted earlier in the same upload.

    Only rows that pass every check are recorded, so a row rejected as
    already registered doesn't turn later repeats into batch duplicates.
    """

    def __init__(self):
        self._seen: Set[str] = set()

    def check(self, phone: str, line_number: int) -> Optional[RowDiagnostic]:
        """Return a diagnostic if phone was already accepted in this batch."""
        if phone in self._seen:
            return RowDiagnostic(
                line_number, ImportErrorKind.DUPLICATE_IN_BATCH, "Duplicate phone number in CSV"
            )
        return None

    def accept(self, phone: str) -> None:
        self._seen.add(phone)


def check_existing(phone: str, store: ParticipantStore, line_number: int) -> Optional[RowDiagnostic]:
    """Reject phone numbers that are already in the store."""
    if store.contains(phone):
        return RowDiagnostic(
            line_number,
            ImportErrorKind.ALREADY_REGISTERED,
            f"Phone number {phone} already registered",
        )
    return None


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------

def parse_import(raw_text: Union[str, bytes], store: ParticipantStore) -> ImportBatchResult:
    """
    Build an import preview; the store is only read.

    Args:
        raw_text: Uploaded CSV content
        store: Participants registered so far

    Returns:
        ImportBatchResult with candidates and diagnostics in file order. Every
        data line produces exactly one of the two.

    Raises:
        UnreadableInputError: If raw_text can't be read as text. Malformed
            rows never raise.
    """
    text = decode_upload(raw_text)
    result = ImportBatchResult()
    dedup = BatchDeduplicator()

    for line_number, fields in iter_rows(text):
        outcome = validate_record(fields, line_number)
        if isinstance(outcome, RowDiagnostic):
            result.errors.append(outcome)
            continue

        diagnostic = dedup.check(outcome.phone, line_number)
        if diagnostic is None:
            diagnostic = check_existing(outcome.phone, store, line_number)
        if diagnostic is not None:
            result.errors.append(diagnostic)
            continue

        dedup.accept(outcome.phone)
        result.candidates.append(outcome)

    logger.info(
        f"Parsed import: {result.valid_count} valid, {result.error_count} rejected"
    )
    return result


def commit_import(batch: ImportBatchResult, store: ParticipantStore) -> ParticipantStore:
    """
    Append every candidate of batch to a copy of store.

    Args:
        batch: Result of parse_import
        store: Current participants; never modified

    Returns:
        A new ParticipantStore with the candidates appended in order

    Raises:
        EmptyImportError: If batch has no candidates
        StaleImportError: If some candidates are in store already (registered
            after the preview was built); nothing is appended
    """
    if not batch.ready_to_commit:
        raise EmptyImportError()

    stale = [p.phone for p in batch.candidates if store.contains(p.phone)]
    if stale:
        raise StaleImportError(stale)

    updated = store.copy()
    updated.extend(Participant.from_dict(p.to_dict()) for p in batch.candidates)
    return updated


def import_participants(batch: ImportBatchResult, data_file: Optional[str] = None) -> Tuple[bool, str]:
    """
    Commit a previewed batch to the store file.

    Returns:
        Tuple of (success: bool, message: str)
        - (True, "Successfully imported N participants!") on success
        - (False, "No valid data to import") for an empty batch
        - (False, message) if participants were registered since the preview
        - (False, "System error, please try again later") on I/O failure or an
          unreadable store file

    Behavior:
        - Reloads the store under the file lock so the duplicate check sees
          registrations made after the preview
        - Writes all candidates or none
    """
    if not batch.ready_to_commit:
        return False, "No valid data to import"

    try:
        path = ensure_store_file(data_file)
        with lock_file(path):
            current = load_participants(path)
            updated = commit_import(batch, current)
            save_participants(updated, path)
    except StaleImportError as e:
        logger.warning(f"Import rejected, stale preview: {e}")
        return False, (
            "Some phone numbers were registered after the preview "
            f"({', '.join(e.phones)}). Please upload the file again."
        )
    except (OSError, FileWriteError) as e:
        logger.error(f"File operation failed during import: {e}")
        return False, "System error, please try again later"
    except (ValueError, AttendanceTrackerError) as e:
        logger.error(f"Unreadable participant store during import: {e}")
        return False, "System error, please try again later"

    logger.info(f"Imported {batch.valid_count} participants into {path}")
    return True, f"Successfully imported {batch.valid_count} participants!"
