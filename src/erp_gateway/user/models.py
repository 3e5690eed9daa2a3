"""Domain models for users: pure dataclasses, no business logic."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any

_PATCHABLE_FIELDS = ("username", "password_hash", "email")


@dataclass
class User:
    id: str
    username: str
    email: str
    password_hash: str
    is_admin: bool
    created_at: datetime


@dataclass
class CurrentUser:
    """Non-secret identity attached to an authenticated request."""

    id: str
    username: str
    email: str
    is_admin: bool


@dataclass
class UserPatch:
    """Partial update: only the fields that are set are written."""

    username: str | None = None
    password_hash: str | None = None
    email: str | None = None

    def values(self) -> dict[str, Any]:
        return {
            name: getattr(self, name)
            for name in _PATCHABLE_FIELDS
            if getattr(self, name) is not None
        }

    def is_empty(self) -> bool:
        return not self.values()
