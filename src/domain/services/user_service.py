"""User service: registration, login and the current-user lookup."""

from typing import Callable
from uuid import UUID

import structlog
from starlette.concurrency import run_in_threadpool

from core.exceptions import AuthenticationError, ErrorCode, UserAlreadyExistsError
from domain.entities.user import User
from domain.repositories.unit_of_work import IUnitOfWork
from infrastructure.auth.gravatar import gravatar_url
from infrastructure.auth.password import IPasswordHasher
from infrastructure.auth.provider import IAuthProvider, TokenUser

logger = structlog.get_logger()


class UserService:
    """Service layer for accounts and credentials."""

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        auth_provider: IAuthProvider,
        password_hasher: IPasswordHasher,
    ) -> None:
        self._uow_factory = uow_factory
        self._auth = auth_provider
        self._hasher = password_hasher

    async def register(self, name: str, email: str, password: str) -> str:
        """Create an account and return a session token for it."""
        async with self._uow_factory() as uow:
            existing = await uow.users.get_by_email(email)
            if existing:
                raise UserAlreadyExistsError(email)

            # Hashing runs in a worker thread
            password_hash = await run_in_threadpool(self._hasher.hash, password)
            user = User(
                name=name,
                email=email,
                password_hash=password_hash,
                avatar=gravatar_url(email),
            )

            created = await uow.users.create(user)
            await uow.commit()

        logger.info("user_registered", user_id=str(created.id))
        return self._auth.create_token(TokenUser(id=created.id))

    async def authenticate(self, email: str, password: str) -> str:
        """Check credentials and return a session token.

        Unknown email and wrong password fail the same way.
        """
        async with self._uow_factory() as uow:
            user = await uow.users.get_by_email(email)

        if not user or not await run_in_threadpool(
            self._hasher.verify, password, user.password_hash
        ):
            logger.info("login_failed")
            raise AuthenticationError(
                message="Invalid credentials",
                error_code=ErrorCode.INVALID_CREDENTIALS,
            )

        return self._auth.create_token(TokenUser(id=user.id))

    async def get_current(self, user_id: UUID) -> User:
        """Get the account behind a validated token."""
        async with self._uow_factory() as uow:
            user = await uow.users.get(user_id)
            if not user:
                raise AuthenticationError(message="User no longer exists")
            return user
