"""Repository Protocol: dependency inversion for testability.

Unit tests inject a mock that conforms to this Protocol.
``UserStore`` in store.py provides the real implementation.
"""

from typing import Protocol

from src.erp_common.result import Err, Ok
from src.erp_gateway.user.models import User, UserPatch


class UserStoreProtocol(Protocol):
    async def insert(self, user: User) -> Ok[User] | Err: ...

    async def find_by_id(self, user_id: str) -> User | None: ...

    async def find_by_email(self, email: str) -> User | None: ...

    async def list_all(self) -> list[User]: ...

    async def update(self, user_id: str, patch: UserPatch) -> Ok[User] | Err: ...

    async def delete(self, user_id: str) -> Ok[None] | Err: ...
