"""Pydantic schemas for Profile API."""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from domain.entities.profile import parse_skills


class ProfileUpsert(BaseModel):
    """Schema for creating or updating the caller's profile.

    ``skills`` may be a comma-separated string or a list of strings.
    Omitted, null or blank optional fields keep their stored values.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "status": "Developer",
                "skills": "Python, FastAPI, PostgreSQL",
                "company": "Acme",
                "githubusername": "octocat",
                "twitter": "https://twitter.com/octocat",
            }
        },
    )

    status: str = Field(..., min_length=1, max_length=100)
    skills: list[str] = Field(..., min_length=1)
    company: str | None = Field(None, max_length=255)
    website: str | None = Field(None, max_length=500)
    location: str | None = Field(None, max_length=255)
    bio: str | None = None
    githubusername: str | None = Field(None, max_length=100)
    youtube: str | None = None
    facebook: str | None = None
    twitter: str | None = None
    instagram: str | None = None
    linkedin: str | None = None

    @field_validator("status")
    @classmethod
    def validate_status(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Status is required")
        return v

    @field_validator("skills", mode="before")
    @classmethod
    def split_skills(cls, v: object) -> object:
        if isinstance(v, str):
            return parse_skills(v)
        if isinstance(v, list) and all(isinstance(item, str) for item in v):
            return parse_skills(v)
        # Anything else is left for the list[str] check to reject
        return v


class _EntryBase(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    from_date: date = Field(..., alias="from")
    to_date: date | None = Field(None, alias="to")
    current: bool = False
    description: str | None = None


class ExperienceCreate(_EntryBase):
    """Schema for adding an experience entry."""

    title: str = Field(..., min_length=1, max_length=255)
    company: str = Field(..., min_length=1, max_length=255)
    location: str | None = Field(None, max_length=255)


class EducationCreate(_EntryBase):
    """Schema for adding an education entry."""

    school: str = Field(..., min_length=1, max_length=255)
    degree: str = Field(..., min_length=1, max_length=255)
    fieldofstudy: str = Field(..., min_length=1, max_length=255)


class ExperienceResponse(BaseModel):
    """Schema for an experience entry."""

    id: UUID
    title: str
    company: str
    location: str | None = None
    from_date: date = Field(serialization_alias="from")
    to_date: date | None = Field(None, serialization_alias="to")
    current: bool
    description: str | None = None


class EducationResponse(BaseModel):
    """Schema for an education entry."""

    id: UUID
    school: str
    degree: str
    fieldofstudy: str
    from_date: date = Field(serialization_alias="from")
    to_date: date | None = Field(None, serialization_alias="to")
    current: bool
    description: str | None = None


class SocialResponse(BaseModel):
    """Schema for social links (only the ones that are set)."""

    youtube: str | None = None
    facebook: str | None = None
    twitter: str | None = None
    instagram: str | None = None
    linkedin: str | None = None


class ProfileOwnerResponse(BaseModel):
    """Schema for the owner joined into a profile."""

    id: UUID
    name: str
    avatar: str | None = None


class ProfileResponse(BaseModel):
    """Schema for Profile response."""

    id: UUID
    user: ProfileOwnerResponse | None
    status: str
    company: str | None = None
    website: str | None = None
    location: str | None = None
    bio: str | None = None
    githubusername: str | None = None
    skills: list[str]
    social: SocialResponse
    experience: list[ExperienceResponse]
    education: list[EducationResponse]
    created_at: datetime = Field(serialization_alias="date")


class RepoResponse(BaseModel):
    """Schema for a public repository listed from GitHub."""

    model_config = ConfigDict(from_attributes=True)

    name: str
    full_name: str
    html_url: str
    description: str | None = None
    language: str | None = None
    stargazers_count: int = 0
    watchers_count: int = 0
    forks_count: int = 0
