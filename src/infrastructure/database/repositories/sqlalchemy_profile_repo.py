"""SQLAlchemy implementation of Profile repository."""

from datetime import date
from typing import Any
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.profile import (
    EducationEntry,
    ExperienceEntry,
    Profile,
    ProfileOwner,
    ProfileWithOwner,
    SocialLinks,
)
from infrastructure.database.models import ProfileModel, UserModel


def _date_or_none(value: str | None) -> date | None:
    return date.fromisoformat(value) if value else None


class SQLAlchemyProfileRepository:
    """SQLAlchemy implementation of IProfileRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_user(self, user_id: UUID) -> Profile | None:
        """Get the profile belonging to a user."""
        model = await self._get_model(user_id)
        return self._to_entity(model) if model else None

    async def get_with_owner(self, user_id: UUID) -> ProfileWithOwner | None:
        """Get a user's profile joined with the owner's name and avatar."""
        stmt = (
            select(ProfileModel, UserModel)
            .outerjoin(UserModel, ProfileModel.user_id == UserModel.id)
            .where(ProfileModel.user_id == user_id)
        )
        result = await self._session.execute(stmt)
        row = result.first()
        if not row:
            return None
        profile_model, user_model = row
        return self._with_owner(profile_model, user_model)

    async def list_with_owners(self) -> list[ProfileWithOwner]:
        """Get all profiles joined with their owners' names and avatars."""
        stmt = (
            select(ProfileModel, UserModel)
            .outerjoin(UserModel, ProfileModel.user_id == UserModel.id)
            .order_by(ProfileModel.created_at)
        )
        result = await self._session.execute(stmt)
        return [self._with_owner(p, u) for p, u in result.all()]

    async def create(self, profile: Profile) -> Profile:
        """Create a new profile."""
        model = ProfileModel(id=profile.id, user_id=profile.user_id, created_at=profile.created_at)
        self._apply(model, profile)
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    async def update(self, profile: Profile) -> Profile:
        """Persist every field of an existing profile."""
        model = await self._get_model(profile.user_id)

        if not model:
            raise ValueError(f"Profile for user {profile.user_id} not found")

        self._apply(model, profile)
        await self._session.flush()
        return self._to_entity(model)

    async def delete_by_user(self, user_id: UUID) -> bool:
        """Delete a user's profile."""
        stmt = delete(ProfileModel).where(ProfileModel.user_id == user_id)
        result = await self._session.execute(stmt)
        await self._session.flush()
        return bool(result.rowcount)

    async def _get_model(self, user_id: UUID) -> ProfileModel | None:
        stmt = select(ProfileModel).where(ProfileModel.user_id == user_id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    def _with_owner(
        self, profile_model: ProfileModel, user_model: UserModel | None
    ) -> ProfileWithOwner:
        owner = None
        if user_model is not None:
            owner = ProfileOwner(
                id=user_model.id,
                name=user_model.name,
                avatar=user_model.avatar,
            )
        return ProfileWithOwner(profile=self._to_entity(profile_model), owner=owner)

    def _apply(self, model: ProfileModel, entity: Profile) -> None:
        """Copy entity state onto the model.

        JSON columns are always assigned fresh objects so SQLAlchemy sees the
        change without mutation tracking.
        """
        model.status = entity.status
        model.company = entity.company
        model.website = entity.website
        model.location = entity.location
        model.bio = entity.bio
        model.githubusername = entity.githubusername
        model.skills = list(entity.skills)
        model.social = entity.social.to_dict()
        model.experience = [self._experience_to_doc(e) for e in entity.experience]
        model.education = [self._education_to_doc(e) for e in entity.education]

    def _to_entity(self, model: ProfileModel) -> Profile:
        """Convert ORM model to domain entity."""
        return Profile(
            id=model.id,
            user_id=model.user_id,
            status=model.status,
            company=model.company,
            website=model.website,
            location=model.location,
            bio=model.bio,
            githubusername=model.githubusername,
            skills=list(model.skills or []),
            social=SocialLinks(**(model.social or {})),
            experience=[self._experience_from_doc(d) for d in model.experience or []],
            education=[self._education_from_doc(d) for d in model.education or []],
            created_at=model.created_at,
        )

    @staticmethod
    def _experience_to_doc(entry: ExperienceEntry) -> dict[str, Any]:
        return {
            "id": str(entry.id),
            "title": entry.title,
            "company": entry.company,
            "location": entry.location,
            "from": entry.from_date.isoformat(),
            "to": entry.to_date.isoformat() if entry.to_date else None,
            "current": entry.current,
            "description": entry.description,
        }

    @staticmethod
    def _experience_from_doc(doc: dict[str, Any]) -> ExperienceEntry:
        return ExperienceEntry(
            id=UUID(doc["id"]),
            title=doc["title"],
            company=doc["company"],
            location=doc.get("location"),
            from_date=date.fromisoformat(doc["from"]),
            to_date=_date_or_none(doc.get("to")),
            current=bool(doc.get("current", False)),
            description=doc.get("description"),
        )

    @staticmethod
    def _education_to_doc(entry: EducationEntry) -> dict[str, Any]:
        return {
            "id": str(entry.id),
            "school": entry.school,
            "degree": entry.degree,
            "fieldofstudy": entry.field_of_study,
            "from": entry.from_date.isoformat(),
            "to": entry.to_date.isoformat() if entry.to_date else None,
            "current": entry.current,
            "description": entry.description,
        }

    @staticmethod
    def _education_from_doc(doc: dict[str, Any]) -> EducationEntry:
        return EducationEntry(
            id=UUID(doc["id"]),
            school=doc["school"],
            degree=doc["degree"],
            field_of_study=doc["fieldofstudy"],
            from_date=date.fromisoformat(doc["from"]),
            to_date=_date_or_none(doc.get("to")),
            current=bool(doc.get("current", False)),
            description=doc.get("description"),
        )
