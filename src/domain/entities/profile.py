"""Profile domain entity and its embedded entries."""

from dataclasses import dataclass, field, fields
from datetime import date, datetime
from typing import Any, Optional
from uuid import UUID, uuid4

SOCIAL_NETWORKS = ("youtube", "facebook", "twitter", "instagram", "linkedin")


def _present(value: Any) -> bool:
    """Null and blank values leave the stored field untouched."""
    if value is None:
        return False
    if isinstance(value, str) and not value.strip():
        return False
    return True


def parse_skills(raw: str | list[str]) -> list[str]:
    """Turn a comma-separated skills string into a trimmed ordered list."""
    items = raw.split(",") if isinstance(raw, str) else raw
    return [item.strip() for item in items if item and item.strip()]


@dataclass
class SocialLinks:
    """Links to the owner's social network pages."""

    youtube: Optional[str] = None
    facebook: Optional[str] = None
    twitter: Optional[str] = None
    instagram: Optional[str] = None
    linkedin: Optional[str] = None

    def merge(self, links: dict[str, Optional[str]]) -> None:
        """Overwrite only the networks that carry a value."""
        for network in SOCIAL_NETWORKS:
            value = links.get(network)
            if _present(value):
                setattr(self, network, value)

    def to_dict(self) -> dict[str, str]:
        return {f.name: getattr(self, f.name) for f in fields(self) if getattr(self, f.name)}


@dataclass
class ExperienceEntry:
    """A job held by the profile owner."""

    title: str
    company: str
    from_date: date
    id: UUID = field(default_factory=uuid4)
    location: Optional[str] = None
    to_date: Optional[date] = None
    current: bool = False
    description: Optional[str] = None


@dataclass
class EducationEntry:
    """A school attended by the profile owner."""

    school: str
    degree: str
    field_of_study: str
    from_date: date
    id: UUID = field(default_factory=uuid4)
    to_date: Optional[date] = None
    current: bool = False
    description: Optional[str] = None


@dataclass
class ProfileUpdate:
    """Validated input for a create-or-update of a profile."""

    status: str
    skills: list[str]
    company: Optional[str] = None
    website: Optional[str] = None
    location: Optional[str] = None
    bio: Optional[str] = None
    githubusername: Optional[str] = None
    social: dict[str, Optional[str]] = field(default_factory=dict)


# Optional scalar fields merged sparsely on upsert
_MERGEABLE = ("company", "website", "location", "bio", "githubusername")


@dataclass
class Profile:
    """Domain entity for a user's developer profile (one per user)."""

    user_id: UUID
    status: str
    skills: list[str] = field(default_factory=list)
    id: UUID = field(default_factory=uuid4)
    company: Optional[str] = None
    website: Optional[str] = None
    location: Optional[str] = None
    bio: Optional[str] = None
    githubusername: Optional[str] = None
    social: SocialLinks = field(default_factory=SocialLinks)
    experience: list[ExperienceEntry] = field(default_factory=list)
    education: list[EducationEntry] = field(default_factory=list)
    created_at: datetime = field(default_factory=datetime.utcnow)

    def apply(self, update: ProfileUpdate) -> None:
        """Merge an update into the profile.

        Required fields always overwrite. Optional fields and social links
        overwrite only when a value is supplied.
        """
        self.status = update.status
        self.skills = list(update.skills)
        for name in _MERGEABLE:
            value = getattr(update, name)
            if _present(value):
                setattr(self, name, value)
        self.social.merge(update.social)

    def add_experience(self, entry: ExperienceEntry) -> None:
        self.experience.insert(0, entry)

    def remove_experience(self, experience_id: UUID) -> bool:
        """Drop the entry with this id. Returns False if there was none."""
        remaining = [e for e in self.experience if e.id != experience_id]
        removed = len(remaining) != len(self.experience)
        self.experience = remaining
        return removed

    def add_education(self, entry: EducationEntry) -> None:
        self.education.insert(0, entry)

    def remove_education(self, education_id: UUID) -> bool:
        """Drop the entry with this id. Returns False if there was none."""
        remaining = [e for e in self.education if e.id != education_id]
        removed = len(remaining) != len(self.education)
        self.education = remaining
        return removed


@dataclass(frozen=True, slots=True)
class ProfileOwner:
    """Live name/avatar of the user a profile belongs to."""

    id: UUID
    name: str
    avatar: Optional[str] = None


@dataclass(frozen=True, slots=True)
class ProfileWithOwner:
    """Read-only value object: a Profile bundled with its owner."""

    profile: Profile
    owner: Optional[ProfileOwner]


@dataclass(frozen=True, slots=True)
class RepoSummary:
    """A public repository reported by the repository lookup service."""

    name: str
    full_name: str
    html_url: str
    description: Optional[str] = None
    language: Optional[str] = None
    stargazers_count: int = 0
    watchers_count: int = 0
    forks_count: int = 0
