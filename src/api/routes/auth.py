"""Authentication API routes."""

from fastapi import APIRouter, Depends, Request

from api.dependencies.auth import CurrentUser
from api.dependencies.services import get_user_service
from api.schemas.auth import LoginRequest, TokenResponse, UserResponse
from core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from domain.services.user_service import UserService

router = APIRouter(prefix="/auth", tags=["auth"])


@router.get(
    "",
    response_model=UserResponse,
    summary="Get the current user",
    responses={
        200: {"description": "The authenticated user"},
        401: {"description": "Missing or invalid token"},
    },
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_me(
    request: Request,
    user: CurrentUser,
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    """Return the account behind the token, without its password hash."""
    account = await service.get_current(user.id)
    return UserResponse(
        id=account.id,
        name=account.name,
        email=account.email,
        avatar=account.avatar,
        created_at=account.created_at,
    )


@router.post(
    "",
    response_model=TokenResponse,
    summary="Log in",
    responses={
        200: {"description": "Credentials accepted"},
        401: {"description": "Invalid credentials"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def login(
    request: Request,
    body: LoginRequest,
    service: UserService = Depends(get_user_service),
) -> TokenResponse:
    """Exchange email and password for a session token."""
    token = await service.authenticate(body.email, body.password)
    return TokenResponse(token=token)
