"""Pydantic request/response schemas for users and auth.

Request fields are all optional at the schema layer: presence and password
length are checked by UserService so that every input problem is reported as
a 400 ValidationFailedError with a readable message.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, field_validator

from src.erp_gateway.user.models import User


class _TextRequest(BaseModel):
    """Rejects strings that cannot be encoded as UTF-8 (e.g. lone surrogates)."""

    @field_validator("*")
    @classmethod
    def encodable_as_utf8(cls, v: Any) -> Any:
        if isinstance(v, str):
            try:
                v.encode("utf-8")
            except UnicodeEncodeError:
                raise ValueError("must be valid UTF-8 text") from None
        return v


class RegisterRequest(_TextRequest):
    username: str | None = None
    password: str | None = None
    email: str | None = None


class LoginRequest(_TextRequest):
    email: str | None = None
    password: str | None = None


class CreateUserRequest(RegisterRequest):
    """Admin-initiated creation. There is no is_admin field."""


class UpdateUserRequest(_TextRequest):
    username: str | None = None
    password: str | None = None
    email: str | None = None


class UserOut(BaseModel):
    """Public projection of a user: password_hash is never included."""

    id: str
    username: str
    email: str
    is_admin: bool
    created_at: datetime

    @classmethod
    def from_user(cls, user: User) -> "UserOut":
        return cls(
            id=user.id,
            username=user.username,
            email=user.email,
            is_admin=user.is_admin,
            created_at=user.created_at,
        )


class AuthResponse(BaseModel):
    message: str
    token: str
    user: UserOut
