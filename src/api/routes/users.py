"""User registration route."""

from fastapi import APIRouter, Depends, Request

from api.dependencies.services import get_user_service
from api.schemas.auth import RegisterRequest, TokenResponse
from core.rate_limit import WRITE_LIMIT, limiter
from domain.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])


@router.post(
    "",
    response_model=TokenResponse,
    summary="Register a user",
    responses={
        200: {"description": "User registered"},
        400: {"description": "User already exists"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def register(
    request: Request,
    body: RegisterRequest,
    service: UserService = Depends(get_user_service),
) -> TokenResponse:
    """Create an account and return a session token for it."""
    token = await service.register(body.name, body.email, body.password)
    return TokenResponse(token=token)
