"""Profile service layer with business logic."""

from typing import Callable, List
from uuid import UUID

import structlog

from core.exceptions import (
    AuthenticationError,
    DomainValidationError,
    NoProfileError,
    ProfileNotFoundError,
)
from domain.entities.profile import (
    EducationEntry,
    ExperienceEntry,
    Profile,
    ProfileUpdate,
    ProfileWithOwner,
    RepoSummary,
)
from domain.repositories.unit_of_work import IUnitOfWork
from infrastructure.github.client import IRepositoryLookup

logger = structlog.get_logger()


class ProfileService:
    """Service layer for developer profiles.

    A user has at most one profile. Experience and education lists are
    changed by read-then-save on the profile row; only the owner edits them.
    """

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        repo_lookup: IRepositoryLookup,
    ) -> None:
        self._uow_factory = uow_factory
        self._repo_lookup = repo_lookup

    async def get_own(self, user_id: UUID) -> ProfileWithOwner:
        """Get the caller's profile."""
        async with self._uow_factory() as uow:
            found = await uow.profiles.get_with_owner(user_id)
            if not found:
                raise NoProfileError()
            return found

    async def upsert(self, user_id: UUID, update: ProfileUpdate) -> ProfileWithOwner:
        """Create the caller's profile, or merge the update into it."""
        if not update.skills:
            raise DomainValidationError("Skills is required", field="skills")

        async with self._uow_factory() as uow:
            if not await uow.users.get(user_id):
                raise AuthenticationError(message="User no longer exists")

            profile = await uow.profiles.get_by_user(user_id)
            if profile:
                profile.apply(update)
                await uow.profiles.update(profile)
            else:
                profile = Profile(user_id=user_id, status=update.status)
                profile.apply(update)
                await uow.profiles.create(profile)

            await uow.commit()
            return await self._reload(uow, user_id)

    async def list_all(self) -> List[ProfileWithOwner]:
        """Get every profile with its owner's current name and avatar."""
        async with self._uow_factory() as uow:
            return await uow.profiles.list_with_owners()

    async def get_by_user_id(self, user_id: UUID) -> ProfileWithOwner:
        """Get another user's profile."""
        async with self._uow_factory() as uow:
            found = await uow.profiles.get_with_owner(user_id)
            if not found:
                raise ProfileNotFoundError(str(user_id))
            return found

    async def delete_account(self, user_id: UUID) -> None:
        """Delete the caller's profile, then the account itself.

        The profile goes first so a failure part-way can only leave an
        account without a profile. Posts and comments are kept.
        """
        async with self._uow_factory() as uow:
            await uow.profiles.delete_by_user(user_id)
            await uow.users.delete(user_id)
            await uow.commit()

        logger.info("account_deleted", user_id=str(user_id))

    async def add_experience(
        self, user_id: UUID, entry: ExperienceEntry
    ) -> ProfileWithOwner:
        """Prepend an experience entry to the caller's profile."""
        async with self._uow_factory() as uow:
            profile = await self._require_own(uow, user_id)
            profile.add_experience(entry)
            await uow.profiles.update(profile)
            await uow.commit()
            return await self._reload(uow, user_id)

    async def remove_experience(
        self, user_id: UUID, experience_id: UUID
    ) -> ProfileWithOwner:
        """Remove an experience entry. Unknown ids leave the profile unchanged."""
        async with self._uow_factory() as uow:
            profile = await self._require_own(uow, user_id)
            if profile.remove_experience(experience_id):
                await uow.profiles.update(profile)
                await uow.commit()
            return await self._reload(uow, user_id)

    async def add_education(
        self, user_id: UUID, entry: EducationEntry
    ) -> ProfileWithOwner:
        """Prepend an education entry to the caller's profile."""
        async with self._uow_factory() as uow:
            profile = await self._require_own(uow, user_id)
            profile.add_education(entry)
            await uow.profiles.update(profile)
            await uow.commit()
            return await self._reload(uow, user_id)

    async def remove_education(
        self, user_id: UUID, education_id: UUID
    ) -> ProfileWithOwner:
        """Remove an education entry. Unknown ids leave the profile unchanged."""
        async with self._uow_factory() as uow:
            profile = await self._require_own(uow, user_id)
            if profile.remove_education(education_id):
                await uow.profiles.update(profile)
                await uow.commit()
            return await self._reload(uow, user_id)

    async def fetch_github_repos(self, username: str) -> List[RepoSummary]:
        """List a GitHub user's recent public repositories."""
        return await self._repo_lookup.list_repos(username)

    async def _require_own(self, uow: IUnitOfWork, user_id: UUID) -> Profile:
        profile = await uow.profiles.get_by_user(user_id)
        if not profile:
            raise NoProfileError()
        return profile

    async def _reload(self, uow: IUnitOfWork, user_id: UUID) -> ProfileWithOwner:
        found = await uow.profiles.get_with_owner(user_id)
        if not found:
            raise NoProfileError()
        return found
