"""User domain service: register, login and the user CRUD operations.

Stateless apart from the injected store; instantiate once per app and reuse
across requests. Store calls return Ok/Err values, mapped here to AppErrors.
"""

import logging
import uuid
from typing import Any

from src.erp_common.datetime_utils import utc_now
from src.erp_common.errors import (
    EmailExistsError,
    InternalError,
    InvalidCredentialsError,
    UserNotFoundError,
    ValidationFailedError,
)
from src.erp_common.result import Err, Ok, StoreFailure
from src.erp_gateway.auth.jwt_handler import TokenClaims, create_access_token
from src.erp_gateway.auth.password import hash_password, verify_password
from src.erp_gateway.user.models import User, UserPatch
from src.erp_gateway.user.repository import UserStoreProtocol

logger = logging.getLogger("erp.users")

MIN_PASSWORD_LENGTH = 8


def _validate_new_user(
    username: str | None,
    password: str | None,
    email: str | None,
) -> tuple[str, str, str]:
    """Return (username, password, email) once all are present and valid."""
    if not username or not password or not email:
        raise ValidationFailedError(
            "Missing required fields",
            "username, password and email are required",
        )
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationFailedError(
            "Password too weak",
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters",
        )
    return username, password, email


def _unwrap(result: Ok[Any] | Err, user_id: str | None = None) -> Any:
    """Return the Ok value, or raise the AppError matching the Err."""
    if isinstance(result, Ok):
        return result.value
    if result.failure is StoreFailure.DUPLICATE_EMAIL:
        raise EmailExistsError()
    if result.failure is StoreFailure.NOT_FOUND:
        raise UserNotFoundError(user_id or "")
    raise InternalError()


def issue_token(user: User) -> str:
    return create_access_token(
        TokenClaims(
            user_id=user.id,
            username=user.username,
            email=user.email,
            is_admin=user.is_admin,
        )
    )


class UserService:
    def __init__(self, store: UserStoreProtocol) -> None:
        self._store = store

    async def _insert_new_user(self, username: str, password: str, email: str) -> User:
        user = User(
            id=str(uuid.uuid4()),
            username=username,
            email=email,
            password_hash=await hash_password(password),
            is_admin=False,
            created_at=utc_now(),
        )
        created: User = _unwrap(await self._store.insert(user))
        return created

    async def register(
        self,
        username: str | None,
        password: str | None,
        email: str | None,
    ) -> tuple[User, str]:
        """Self-service registration. Always creates a non-admin user.

        Returns (user, access_token).
        """
        user = await self._insert_new_user(*_validate_new_user(username, password, email))
        logger.info("user registered id=%s", user.id)
        return user, issue_token(user)

    async def login(self, email: str | None, password: str | None) -> tuple[User, str]:
        """Authenticate by email + password and return (user, access_token).

        Note: "email not found" and "wrong password" both raise
        InvalidCredentialsError intentionally, which prevents account enumeration.
        """
        if not email or not password:
            raise ValidationFailedError(
                "Missing required fields",
                "email and password are required",
            )

        user = await self._store.find_by_email(email)
        if user is None or not await verify_password(password, user.password_hash):
            raise InvalidCredentialsError()

        return user, issue_token(user)

    async def list_users(self) -> list[User]:
        return await self._store.list_all()

    async def get_user(self, user_id: str) -> User:
        user = await self._store.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    async def create_user(
        self,
        username: str | None,
        password: str | None,
        email: str | None,
    ) -> User:
        """Admin-initiated creation; the new user is non-admin regardless of caller."""
        user = await self._insert_new_user(*_validate_new_user(username, password, email))
        logger.info("user created by admin id=%s", user.id)
        return user

    async def update_user(
        self,
        user_id: str,
        username: str | None = None,
        password: str | None = None,
        email: str | None = None,
    ) -> User:
        """Partial update of username/password/email. is_admin is not updatable."""
        if await self._store.find_by_id(user_id) is None:
            raise UserNotFoundError(user_id)

        patch = UserPatch(username=username, email=email)
        if password is not None:
            patch.password_hash = await hash_password(password)

        if patch.is_empty():
            raise ValidationFailedError(
                "No fields to update",
                "Provide at least one field: username, password or email",
            )

        updated: User = _unwrap(await self._store.update(user_id, patch), user_id)
        logger.info("user updated id=%s fields=%s", user_id, sorted(patch.values()))
        return updated

    async def delete_user(self, user_id: str) -> None:
        _unwrap(await self._store.delete(user_id), user_id)
        logger.info("user deleted id=%s", user_id)
