"""Password hashing with bcrypt."""

from typing import Protocol

import bcrypt

from core.config import settings


class IPasswordHasher(Protocol):
    """Protocol for password hashers."""

    def hash(self, password: str) -> str:
        """Hash a plaintext password."""
        ...

    def verify(self, password: str, password_hash: str) -> bool:
        """Check a plaintext password against a stored hash."""
        ...


class BcryptPasswordHasher:
    """Salted bcrypt hashes with a configurable cost factor."""

    def __init__(self, rounds: int = settings.password_hash_rounds) -> None:
        self._rounds = rounds

    def hash(self, password: str) -> str:
        salt = bcrypt.gensalt(rounds=self._rounds)
        return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        try:
            return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
        except ValueError:
            # Stored value is not a bcrypt hash
            return False
