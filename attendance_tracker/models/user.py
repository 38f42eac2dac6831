"""User account model."""
from dataclasses import dataclass
from typing import Dict

VALID_ROLES = ("admin", "user")


@dataclass
class User:
    """Signed-in account, without credentials."""

    id: str
    username: str
    role: str

    def __post_init__(self):
        """Validate user data after initialization."""
        if not self.username or not self.username.strip():
            raise ValueError("Username cannot be empty")

        if self.role not in VALID_ROLES:
            raise ValueError(f"Role must be one of {list(VALID_ROLES)}, got: {self.role}")

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"

    def to_dict(self) -> Dict[str, str]:
        return {"id": self.id, "username": self.username, "role": self.role}
