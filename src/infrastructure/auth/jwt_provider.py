"""JWT authentication provider implementation.

Token payload structure:
    {
        "user": { "id": "user-uuid" },
        "iat": 1234567890,
        "exp": 1234927890
    }
"""

import logging
from datetime import datetime, timedelta
from typing import Optional
from uuid import UUID

from jose import JWTError, jwt

from core.config import settings
from infrastructure.auth.provider import TokenUser

logger = logging.getLogger(__name__)


class JWTAuthProvider:
    """JWT-based authentication provider (shared-secret HS256)."""

    def __init__(
        self,
        secret_key: str = settings.jwt_secret_key,
        algorithm: str = settings.jwt_algorithm,
        expire_seconds: int = settings.jwt_expire_seconds,
    ) -> None:
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._expire_seconds = expire_seconds

    async def validate_token(self, token: str) -> Optional[TokenUser]:
        """
        Validate a JWT token and extract user info.

        Args:
            token: The JWT to validate

        Returns:
            TokenUser if valid, None if invalid, expired or malformed
        """
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
            )
        except JWTError as e:
            logger.debug("Rejected token: %s", e)
            return None

        user = payload.get("user")
        if not isinstance(user, dict):
            return None

        user_id = user.get("id")
        if not user_id:
            return None

        try:
            return TokenUser(id=UUID(str(user_id)))
        except ValueError:
            return None

    def create_token(self, user: TokenUser) -> str:
        """
        Create a signed JWT for a user.

        Args:
            user: The user to create a token for

        Returns:
            The generated JWT string
        """
        issued = datetime.utcnow()
        expire = issued + timedelta(seconds=self._expire_seconds)

        payload: dict = {
            "user": {"id": str(user.id)},
            "iat": issued,
            "exp": expire,
        }

        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)
