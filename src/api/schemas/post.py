"""Pydantic schemas for Post API."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TextBody(BaseModel):
    """Schema for creating a post or a comment."""

    model_config = ConfigDict(
        json_schema_extra={"example": {"text": "Hello, world"}},
    )

    text: str = Field(..., min_length=1, max_length=5000)

    @field_validator("text")
    @classmethod
    def validate_text(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Text is required")
        return v


class LikeResponse(BaseModel):
    """Schema for a like."""

    id: UUID
    user: UUID


class CommentResponse(BaseModel):
    """Schema for a comment."""

    id: UUID
    user: UUID
    text: str
    name: str
    avatar: str | None = None
    created_at: datetime = Field(serialization_alias="date")


class PostResponse(BaseModel):
    """Schema for Post response."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "123e4567-e89b-12d3-a456-426614174000",
                "user": "456e4567-e89b-12d3-a456-426614174000",
                "text": "hello",
                "name": "Ann",
                "avatar": "https://www.gravatar.com/avatar/abc?s=200&r=pg&d=mm",
                "likes": [],
                "comments": [],
                "date": "2026-01-28T10:00:00",
            }
        },
    )

    id: UUID
    user: UUID
    text: str
    name: str
    avatar: str | None = None
    likes: list[LikeResponse]
    comments: list[CommentResponse]
    created_at: datetime = Field(serialization_alias="date")
