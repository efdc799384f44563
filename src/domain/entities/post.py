"""Post domain entity with its likes and comments."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4


@dataclass
class Like:
    """One user's like on a post."""

    user_id: UUID
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=datetime.utcnow)


@dataclass
class Comment:
    """A comment on a post.

    ``name`` and ``avatar`` are copied from the commenter when the comment is
    written and are not kept in sync afterwards.
    """

    user_id: UUID
    text: str
    name: str
    avatar: Optional[str] = None
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=datetime.utcnow)


@dataclass
class Post:
    """Domain entity for a feed post.

    ``name`` and ``avatar`` are snapshots of the author taken at creation.
    """

    user_id: UUID
    text: str
    name: str
    avatar: Optional[str] = None
    id: UUID = field(default_factory=uuid4)
    likes: list[Like] = field(default_factory=list)
    comments: list[Comment] = field(default_factory=list)
    created_at: datetime = field(default_factory=datetime.utcnow)

    def is_owned_by(self, user_id: UUID) -> bool:
        return self.user_id == user_id

