"""
Session user — the person signed in to the inventory UI.

Credentials are verified by the remote inventory API.  After a
successful login the API's user object is kept in the Flask session
and rebuilt on every request by the Flask-Login user loader.

Role = what you can do.  Only ``Admin`` may delete records or add
them without approval.
"""

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any

from flask_login import UserMixin


class UserRole(str, Enum):
    """Application roles as returned by the inventory API."""

    ADMIN = "Admin"
    USER = "User"


@dataclass(eq=False)
class SessionUser(UserMixin):
    """
    Authenticated user stored in the Flask session.

    Inherits from ``UserMixin`` to satisfy Flask-Login requirements
    (``is_authenticated``, ``is_active``, ``get_id``).
    """

    id: int
    username: str
    display_name: str = ""
    email: str = ""
    role: str = UserRole.USER.value

    @classmethod
    def from_api(cls, payload: dict[str, Any]) -> "SessionUser":
        """Build a session user from the API's login response."""
        username = payload.get("username", "")
        return cls(
            id=payload["id"],
            username=username,
            display_name=payload.get("realName") or payload.get("name") or username,
            email=payload.get("email") or "",
            role=payload.get("role") or UserRole.USER.value,
        )

    @classmethod
    def from_session(cls, data: dict[str, Any]) -> "SessionUser":
        """Rebuild a user from the dict stored by ``to_session()``."""
        return cls(**data)

    def to_session(self) -> dict[str, Any]:
        """Return a JSON-serializable dict for the Flask session."""
        return asdict(self)

    @property
    def is_admin(self) -> bool:
        """Return True if the user holds the elevated role."""
        return self.role == UserRole.ADMIN.value

    def has_role(self, *role_names: str) -> bool:
        """Check if the user has any of the given role names."""
        return self.role in role_names

    def __repr__(self) -> str:
        return f"<SessionUser {self.username} role={self.role}>"
