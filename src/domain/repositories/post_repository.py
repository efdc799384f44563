"""Post repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.post import Comment, Like, Post


class IPostRepository(Protocol):
    """Repository interface for Post entities and their likes/comments.

    Like and comment mutations are keyed single-row operations so that two
    requests touching the same post never overwrite each other's lists.
    """

    async def get(self, id: UUID) -> Post | None:
        """Get a post with its likes and comments."""
        ...

    async def list_all(self) -> list[Post]:
        """Get all posts, newest first."""
        ...

    async def create(self, post: Post) -> Post:
        """Create a new post."""
        ...

    async def delete(self, id: UUID) -> bool:
        """Delete a post and return success status."""
        ...

    async def add_like(self, post_id: UUID, like: Like) -> bool:
        """Record a like. Returns False if the user already liked the post."""
        ...

    async def remove_like(self, post_id: UUID, user_id: UUID) -> bool:
        """Remove a user's like. Returns False if there was none."""
        ...

    async def get_likes(self, post_id: UUID) -> list[Like]:
        """Get a post's likes, newest first."""
        ...

    async def add_comment(self, post_id: UUID, comment: Comment) -> Comment:
        """Attach a comment to a post."""
        ...

    async def get_comment(self, post_id: UUID, comment_id: UUID) -> Comment | None:
        """Get one comment of a post."""
        ...

    async def remove_comment(
        self, post_id: UUID, comment_id: UUID, user_id: UUID
    ) -> bool:
        """Remove a comment if it was written by user_id."""
        ...

    async def get_comments(self, post_id: UUID) -> list[Comment]:
        """Get a post's comments, newest first."""
        ...
