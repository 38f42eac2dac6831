"""Login against static credentials, tracked in Streamlit session state."""
import logging
import os
from pathlib import Path
from threading import Lock
from typing import Dict, List, Optional, Tuple

import streamlit as st

from attendance_tracker.models.user import User

logger = logging.getLogger(__name__)

AUTH_USER_KEY = "auth_user"

_ENV_KEYS = {"ADMIN_USERNAME", "ADMIN_PASSWORD", "USER_USERNAME", "USER_PASSWORD"}
_ENV_LOADED = False
_ENV_LOCK = Lock()


def _load_auth_env() -> None:
    """Load credential overrides from .env file if present."""
    global _ENV_LOADED

    if _ENV_LOADED:
        return

    with _ENV_LOCK:
        if _ENV_LOADED:
            return

        env_path = Path(".env")
        if env_path.exists():
            for raw_line in env_path.read_text(encoding="utf-8").splitlines():
                line = raw_line.strip()
                if not line or line.startswith("#") or "=" not in line:
                    continue

                key, value = line.split("=", 1)
                key = key.strip()
                value = value.strip().strip('"\'')

                if key in _ENV_KEYS and key not in os.environ:
                    os.environ[key] = value

        _ENV_LOADED = True


def _accounts() -> List[Dict[str, str]]:
    """Demo accounts, overridable from the environment."""
    _load_auth_env()
    return [
        {
            "id": "1",
            "username": os.getenv("ADMIN_USERNAME", "admin"),
            "password": os.getenv("ADMIN_PASSWORD", "admin123"),
            "role": "admin",
        },
        {
            "id": "2",
            "username": os.getenv("USER_USERNAME", "user"),
            "password": os.getenv("USER_PASSWORD", "user123"),
            "role": "user",
        },
    ]


def authenticate(username: str, password: str) -> Optional[User]:
    """
    Look credentials up in the static account list.

    Returns:
        The matching User (without password), or None

    Security:
        - Plain-text comparison against configured values
        - Intended for a single trusted deployment
    """
    for account in _accounts():
        if username == account["username"] and password == account["password"]:
            return User(id=account["id"], username=account["username"], role=account["role"])
    return None


def login(username: str, password: str) -> Tuple[bool, str]:
    """
    Log a user in for the current Streamlit session.

    Returns:
        Tuple of (success: bool, message: str)
        - (True, "Welcome to AttendanceTracker!") on success
        - (False, "Please fill in all fields") if either field is empty
        - (False, "Invalid username or password") on failure
    """
    if not username or not password:
        return False, "Please fill in all fields"

    user = authenticate(username, password)
    if user is None:
        logger.warning(f"Failed login attempt for '{username}'")
        return False, "Invalid username or password"

    st.session_state[AUTH_USER_KEY] = user.to_dict()
    return True, "Welcome to AttendanceTracker!"


def current_user() -> Optional[User]:
    """Return the signed-in user, dropping unreadable session data."""
    data = st.session_state.get(AUTH_USER_KEY)
    if not data:
        return None

    try:
        return User(id=data["id"], username=data["username"], role=data["role"])
    except (KeyError, TypeError, ValueError) as e:
        logger.error(f"Error parsing saved user: {e}")
        logout()
        return None


def is_authenticated() -> bool:
    return current_user() is not None


def logout() -> None:
    """Forget the signed-in user."""
    if AUTH_USER_KEY in st.session_state:
        del st.session_state[AUTH_USER_KEY]
