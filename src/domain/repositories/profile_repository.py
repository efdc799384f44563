"""Profile repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.profile import Profile, ProfileWithOwner


class IProfileRepository(Protocol):
    """Repository interface for Profile entities."""

    async def get_by_user(self, user_id: UUID) -> Profile | None:
        """Get the profile belonging to a user."""
        ...

    async def get_with_owner(self, user_id: UUID) -> ProfileWithOwner | None:
        """Get a user's profile joined with the owner's current name and avatar."""
        ...

    async def list_with_owners(self) -> list[ProfileWithOwner]:
        """Get every profile joined with its owner's current name and avatar."""
        ...

    async def create(self, profile: Profile) -> Profile:
        """Create a new profile."""
        ...

    async def update(self, profile: Profile) -> Profile:
        """Persist every field of an existing profile."""
        ...

    async def delete_by_user(self, user_id: UUID) -> bool:
        """Delete a user's profile and return success status."""
        ...
