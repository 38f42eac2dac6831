"""JSON blob store: atomic file I/O and advisory locking."""
import json
import logging
import os
import shutil
import sys
import tempfile
import time
from contextlib import contextmanager
from typing import Any, Dict, Optional

from attendance_tracker.utils.exceptions import FileWriteError

if sys.platform != "win32":
    import fcntl

logger = logging.getLogger(__name__)


def load_json(file_path: str, retry_count: int = 3, retry_delay: float = 0.1) -> Dict[str, Any]:
    """
    Load and parse a UTF-8 JSON file.

    Args:
        file_path: Path to JSON file
        retry_count: Attempts made when the file is temporarily unreadable
        retry_delay: Seconds between attempts

    Returns:
        dict: Parsed JSON content

    Raises:
        FileNotFoundError: If file doesn't exist
        json.JSONDecodeError: If JSON is malformed
        PermissionError: If file not readable after retries
    """
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"File not found: {file_path}")

    for attempt in range(retry_count):
        try:
            with open(file_path, "r", encoding="utf-8") as f:
                return json.load(f)
        except PermissionError:
            if attempt < retry_count - 1:
                time.sleep(retry_delay)
                continue
        except json.JSONDecodeError as e:
            raise json.JSONDecodeError(f"Malformed JSON in {file_path}: {e.msg}", e.doc, e.pos)

    raise PermissionError(f"Cannot read file after {retry_count} attempts: {file_path}")


def save_json(file_path: str, data: Dict[str, Any], backup: bool = True) -> None:
    """
    Write data as a new snapshot of the JSON file.

    The snapshot is written to a temp file in the same directory and renamed
    over the target, so readers see either the old or the new content.

    Args:
        file_path: Path to JSON file
        data: Dictionary to save
        backup: Copy the previous snapshot to '<file>.backup' first

    Raises:
        FileWriteError: If the backup or the write fails
    """
    dir_path = os.path.dirname(file_path)
    if dir_path:
        os.makedirs(dir_path, exist_ok=True)

    if backup and os.path.exists(file_path):
        try:
            shutil.copy2(file_path, f"{file_path}.backup")
        except OSError as e:
            raise FileWriteError(f"Failed to create backup: {e}") from e

    temp_fd, temp_path = tempfile.mkstemp(dir=dir_path or ".", prefix=".tmp_", suffix=".json")
    try:
        with os.fdopen(temp_fd, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)
            f.flush()
            os.fsync(f.fileno())
        os.replace(temp_path, file_path)
    except (OSError, TypeError, ValueError) as e:
        if os.path.exists(temp_path):
            try:
                os.remove(temp_path)
            except OSError:
                logger.warning(f"Could not remove temp file {temp_path}")
        raise FileWriteError(f"Failed to write file {file_path}: {e}") from e


def ensure_json_file(file_path: str, default: Optional[Dict[str, Any]] = None) -> None:
    """Create file_path with default content if it doesn't exist yet."""
    if os.path.exists(file_path):
        return
    logger.info(f"Creating data file {file_path}")
    save_json(file_path, default if default is not None else {}, backup=False)


@contextmanager
def lock_file(file_path: str, timeout: float = 5.0):
    """
    Hold an exclusive lock on file_path for the duration of the block.

    Usage:
        with lock_file('data/participants.json'):
            data = load_json('data/participants.json')
            data['participants'].append(record)
            save_json('data/participants.json', data)

    Raises:
        TimeoutError: If unable to acquire lock within timeout
        FileNotFoundError: If file doesn't exist
    """
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"Cannot lock non-existent file: {file_path}")

    if sys.platform == "win32":
        # A sibling lock file avoids holding a handle on the data file,
        # which would block the rename in save_json.
        lock_path = f"{file_path}.lock"
        start_time = time.time()
        while True:
            try:
                lock_fd = os.open(lock_path, os.O_CREAT | os.O_EXCL | os.O_RDWR)
                break
            except FileExistsError:
                if time.time() - start_time > timeout:
                    raise TimeoutError(f"Could not acquire lock on {file_path} within {timeout}s")
                time.sleep(0.05)
        try:
            yield
        finally:
            os.close(lock_fd)
            try:
                os.remove(lock_path)
            except OSError:
                logger.warning(f"Could not remove lock file {lock_path}")
    else:
        lock_fh = open(file_path, "r+")
        try:
            start_time = time.time()
            while True:
                try:
                    fcntl.flock(lock_fh.fileno(), fcntl.LOCK_EX | fcntl.LOCK_NB)
                    break
                except OSError:
                    if time.time() - start_time > timeout:
                        raise TimeoutError(f"Could not acquire lock on {file_path} within {timeout}s")
                    time.sleep(0.05)
            yield
        finally:
            try:
                fcntl.flock(lock_fh.fileno(), fcntl.LOCK_UN)
            except OSError:
                logger.warning(f"Could not release lock on {file_path}")
            lock_fh.close()
