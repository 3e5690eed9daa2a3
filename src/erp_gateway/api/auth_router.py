"""Auth API router: register, login. Both endpoints are public."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from src.erp_gateway.auth.dependencies import get_user_service
from src.erp_gateway.user.schemas import AuthResponse, LoginRequest, RegisterRequest, UserOut
from src.erp_gateway.user.service import UserService

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    response_model=AuthResponse,
    summary="User registration",
)
async def register(
    body: RegisterRequest,
    service: Annotated[UserService, Depends(get_user_service)],
) -> AuthResponse:
    user, token = await service.register(body.username, body.password, body.email)
    return AuthResponse(
        message="User created successfully",
        token=token,
        user=UserOut.from_user(user),
    )


@router.post(
    "/login",
    status_code=status.HTTP_200_OK,
    response_model=AuthResponse,
    summary="User login",
)
async def login(
    body: LoginRequest,
    service: Annotated[UserService, Depends(get_user_service)],
) -> AuthResponse:
    user, token = await service.login(body.email, body.password)
    return AuthResponse(
        message="Login successful",
        token=token,
        user=UserOut.from_user(user),
    )
