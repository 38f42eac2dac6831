"""Participant store persistence with caching."""
import logging
import os
from typing import List, Optional

from attendance_tracker.models.participant import Participant
from attendance_tracker.models.participant_store import ParticipantStore
from attendance_tracker.services.storage_service import ensure_json_file, load_json, save_json

logger = logging.getLogger(__name__)

# Store file location
PARTICIPANTS_FILE = os.getenv("ATTENDANCE_DATA_FILE", "data/participants.json")

EMPTY_STORE = {"participants": []}

# Read cache: (file path, store)
_store_cache: Optional[tuple] = None


def _clear_cache():
    """Drop the cached store so the next read reloads the file."""
    global _store_cache
    _store_cache = None


def _resolve(data_file: Optional[str]) -> str:
    return data_file or PARTICIPANTS_FILE


def ensure_store_file(data_file: Optional[str] = None) -> str:
    """Create an empty store file if none exists and return its path."""
    path = _resolve(data_file)
    ensure_json_file(path, EMPTY_STORE)
    return path


def load_participants(data_file: Optional[str] = None) -> ParticipantStore:
    """
    Read the store file, bypassing the cache.

    A missing file is an empty store.

    Raises:
        json.JSONDecodeError: If the file is malformed
        ValueError: If a record is invalid
    """
    path = _resolve(data_file)
    if not os.path.exists(path):
        return ParticipantStore()
    return ParticipantStore.from_dict(load_json(path))


def save_participants(store: ParticipantStore, data_file: Optional[str] = None) -> None:
    """
    Write store as the new snapshot of the store file.

    Raises:
        FileWriteError: If the write fails
    """
    path = _resolve(data_file)
    save_json(path, store.to_dict(), backup=True)
    _clear_cache()
    logger.info(f"Saved {len(store)} participants to {path}")


def get_participant_store(data_file: Optional[str] = None) -> ParticipantStore:
    """
    Return the store for read-only use, loading it once per file.

    Callers must not mutate the returned store; writes go through
    load_participants under lock_file, then save_participants.
    """
    global _store_cache

    path = _resolve(data_file)
    if _store_cache is not None and _store_cache[0] == path:
        return _store_cache[1]

    store = load_participants(path)
    _store_cache = (path, store)
    return store


def get_all_participants(data_file: Optional[str] = None) -> List[Participant]:
    """List participants in registration order."""
    return list(get_participant_store(data_file))


def find_participant(phone: str, data_file: Optional[str] = None) -> Optional[Participant]:
    """Find a participant by phone number."""
    return get_participant_store(data_file).get(phone.strip())
