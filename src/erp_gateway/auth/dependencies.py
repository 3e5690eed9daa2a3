"""FastAPI dependencies: store/service injection and get_current_user.

Usage in any protected router:
    from src.erp_gateway.auth.dependencies import get_current_user

    @router.get("/protected")
    async def protected(user: CurrentUser = Depends(get_current_user)):
        ...
"""

from typing import Annotated

from fastapi import Depends, Header, Request

from src.erp_common.errors import MissingTokenError, UnknownSubjectError
from src.erp_gateway.auth.jwt_handler import decode_token
from src.erp_gateway.user.models import CurrentUser
from src.erp_gateway.user.service import UserService
from src.erp_gateway.user.store import UserStore


def get_user_store(request: Request) -> UserStore:
    """The store built in the app lifespan."""
    store: UserStore = request.app.state.user_store
    return store


def get_user_service(
    store: Annotated[UserStore, Depends(get_user_store)],
) -> UserService:
    return UserService(store)


def parse_bearer(authorization: str | None) -> str:
    """Return the token from an exact ``Bearer <token>`` header value."""
    if not authorization:
        raise MissingTokenError()
    parts = authorization.split(" ")
    if len(parts) != 2 or parts[0] != "Bearer" or not parts[1]:
        raise MissingTokenError()
    return parts[1]


async def get_current_user(
    request: Request,
    store: Annotated[UserStore, Depends(get_user_store)],
    authorization: Annotated[str | None, Header()] = None,
) -> CurrentUser:
    """Resolve the Bearer token to a live user.

    Raises 401 MissingTokenError for an absent/malformed header, 403
    InvalidTokenError / ExpiredTokenError from token verification, and 401
    UnknownSubjectError when the user was deleted after the token was issued.
    """
    token = parse_bearer(authorization)
    claims = decode_token(token)

    user = await store.find_by_id(claims.user_id)
    if user is None:
        raise UnknownSubjectError()

    current = CurrentUser(
        id=user.id,
        username=user.username,
        email=user.email,
        is_admin=user.is_admin,
    )
    request.state.user = current
    return current
