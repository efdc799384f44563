"""Gravatar avatar URLs."""

import hashlib
from urllib.parse import urlencode

from core.config import settings

GRAVATAR_BASE_URL = "https://www.gravatar.com/avatar/"


def gravatar_url(
    email: str,
    size: int = settings.gravatar_size,
    rating: str = settings.gravatar_rating,
    default: str = settings.gravatar_default,
) -> str:
    """Build the Gravatar image URL for an email address."""
    digest = hashlib.md5(email.strip().lower().encode("utf-8")).hexdigest()
    query = urlencode({"s": size, "r": rating, "d": default})
    return f"{GRAVATAR_BASE_URL}{digest}?{query}"
