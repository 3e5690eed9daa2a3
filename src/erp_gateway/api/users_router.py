"""Users REST API: every endpoint requires a Bearer token.

GET /users, POST /users, DELETE /users/{id}: admin only.
GET /users/{id}, PUT /users/{id}: admin or the user themself.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status

from src.erp_gateway.auth.authorize import admin_or_owner_user, admin_user
from src.erp_gateway.auth.dependencies import get_user_service
from src.erp_gateway.user.models import CurrentUser
from src.erp_gateway.user.schemas import CreateUserRequest, UpdateUserRequest, UserOut
from src.erp_gateway.user.service import UserService

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=list[UserOut])
async def list_users(
    _admin: Annotated[CurrentUser, Depends(admin_user)],
    service: Annotated[UserService, Depends(get_user_service)],
) -> list[UserOut]:
    users = await service.list_users()
    return [UserOut.from_user(u) for u in users]


@router.get("/{id}", response_model=UserOut)
async def get_user(
    id: str,
    _caller: Annotated[CurrentUser, Depends(admin_or_owner_user)],
    service: Annotated[UserService, Depends(get_user_service)],
) -> UserOut:
    return UserOut.from_user(await service.get_user(id))


@router.post("", status_code=status.HTTP_201_CREATED, response_model=UserOut)
async def create_user(
    body: CreateUserRequest,
    _admin: Annotated[CurrentUser, Depends(admin_user)],
    service: Annotated[UserService, Depends(get_user_service)],
) -> UserOut:
    user = await service.create_user(body.username, body.password, body.email)
    return UserOut.from_user(user)


@router.put("/{id}", response_model=UserOut)
async def update_user(
    id: str,
    body: UpdateUserRequest,
    _caller: Annotated[CurrentUser, Depends(admin_or_owner_user)],
    service: Annotated[UserService, Depends(get_user_service)],
) -> UserOut:
    user = await service.update_user(
        id,
        username=body.username,
        password=body.password,
        email=body.email,
    )
    return UserOut.from_user(user)


@router.delete("/{id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def delete_user(
    id: str,
    _admin: Annotated[CurrentUser, Depends(admin_user)],
    service: Annotated[UserService, Depends(get_user_service)],
) -> Response:
    await service.delete_user(id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
