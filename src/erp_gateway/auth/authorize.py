"""Authorization predicates and their FastAPI dependency wrappers.

The predicates are plain functions over the CurrentUser produced by
get_current_user. Route pipeline: get_current_user -> predicate -> handler.
"""

from typing import Annotated

from fastapi import Depends

from src.erp_common.errors import ForbiddenError, UnauthenticatedError
from src.erp_gateway.auth.dependencies import get_current_user
from src.erp_gateway.user.models import CurrentUser


def require_admin(user: CurrentUser | None) -> CurrentUser:
    if user is None:
        raise UnauthenticatedError()
    if not user.is_admin:
        raise ForbiddenError("Access denied. Administrators only.")
    return user


def require_admin_or_owner(user: CurrentUser | None, target_id: str) -> CurrentUser:
    if user is None:
        raise UnauthenticatedError()
    if not user.is_admin and user.id != target_id:
        raise ForbiddenError()
    return user


async def admin_user(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> CurrentUser:
    return require_admin(current_user)


async def admin_or_owner_user(
    id: str,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> CurrentUser:
    """``id`` is the ``{id}`` path parameter of the route."""
    return require_admin_or_owner(current_user, id)
