"""UserStore: concrete implementation of UserStoreProtocol.

Each call opens its own session and transaction; every mutation is a single
atomic statement on one row. The only UNIQUE constraint on ``users`` is the
email, so an IntegrityError on insert/update is reported as
``Err(StoreFailure.DUPLICATE_EMAIL)``. Any other driver error is logged here
and surfaced as InternalError so driver text never reaches a client.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from src.erp_common.datetime_utils import as_utc
from src.erp_common.errors import InternalError
from src.erp_common.result import Err, Ok, StoreFailure
from src.erp_gateway.user.db_models import UserModel
from src.erp_gateway.user.models import User, UserPatch

logger = logging.getLogger("erp.store")


def _row_to_user(row: UserModel) -> User:
    return User(
        id=row.id,
        username=row.username,
        email=row.email,
        password_hash=row.password_hash,
        is_admin=bool(row.is_admin),
        created_at=as_utc(row.created_at),
    )


class UserStore:
    """Persistence of user rows. Constructed once at startup, shared by requests."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    @asynccontextmanager
    async def _transaction(self) -> AsyncIterator[AsyncSession]:
        """Session + transaction; IntegrityError is left for the caller to map."""
        try:
            async with self._session_factory() as session, session.begin():
                yield session
        except IntegrityError:
            raise
        except SQLAlchemyError as exc:
            logger.exception("users store operation failed")
            raise InternalError() from exc

    async def insert(self, user: User) -> Ok[User] | Err:
        try:
            async with self._transaction() as session:
                session.add(
                    UserModel(
                        id=user.id,
                        username=user.username,
                        password_hash=user.password_hash,
                        email=user.email,
                        is_admin=user.is_admin,
                        created_at=user.created_at,
                    )
                )
        except IntegrityError:
            return Err(StoreFailure.DUPLICATE_EMAIL)
        return Ok(user)

    async def find_by_id(self, user_id: str) -> User | None:
        async with self._transaction() as session:
            result = await session.execute(select(UserModel).where(UserModel.id == user_id))
            row = result.scalar_one_or_none()
            return _row_to_user(row) if row else None

    async def find_by_email(self, email: str) -> User | None:
        async with self._transaction() as session:
            result = await session.execute(select(UserModel).where(UserModel.email == email))
            row = result.scalar_one_or_none()
            return _row_to_user(row) if row else None

    async def list_all(self) -> list[User]:
        async with self._transaction() as session:
            result = await session.execute(select(UserModel).order_by(UserModel.created_at))
            return [_row_to_user(row) for row in result.scalars().all()]

    async def update(self, user_id: str, patch: UserPatch) -> Ok[User] | Err:
        values = patch.values()
        if not values:
            raise ValueError("UserPatch has no fields set")

        try:
            async with self._transaction() as session:
                result = await session.execute(
                    update(UserModel)
                    .where(UserModel.id == user_id)
                    .values(**values)
                    .execution_options(synchronize_session=False)
                )
                if result.rowcount == 0:
                    return Err(StoreFailure.NOT_FOUND)
                refreshed = await session.execute(
                    select(UserModel).where(UserModel.id == user_id)
                )
                row = refreshed.scalar_one()
                return Ok(_row_to_user(row))
        except IntegrityError:
            return Err(StoreFailure.DUPLICATE_EMAIL)

    async def delete(self, user_id: str) -> Ok[None] | Err:
        async with self._transaction() as session:
            result = await session.execute(
                delete(UserModel)
                .where(UserModel.id == user_id)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                return Err(StoreFailure.NOT_FOUND)
        return Ok(None)
