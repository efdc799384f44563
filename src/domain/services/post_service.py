"""Post service layer with business logic."""

from typing import Callable, List
from uuid import UUID

import structlog

from core.exceptions import (
    AuthenticationError,
    CommentNotFoundError,
    DomainValidationError,
    NotOwnerError,
    PostAlreadyLikedError,
    PostNotFoundError,
    PostNotLikedError,
)
from domain.entities.post import Comment, Like, Post
from domain.entities.user import User
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()


class PostService:
    """Service layer for the post feed, likes and comments."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def create(self, author_id: UUID, text: str) -> Post:
        """Publish a post, stamping the author's current name and avatar."""
        text = self._require_text(text)
        async with self._uow_factory() as uow:
            author = await self._require_user(uow, author_id)

            post = Post(
                user_id=author.id,
                text=text,
                name=author.name,
                avatar=author.avatar,
            )

            created = await uow.posts.create(post)
            await uow.commit()

        logger.info("post_created", post_id=str(created.id), user_id=str(author_id))
        return created

    async def list_all(self) -> List[Post]:
        """Get the whole feed, newest first."""
        async with self._uow_factory() as uow:
            return await uow.posts.list_all()

    async def get(self, post_id: UUID) -> Post:
        """Get a single post."""
        async with self._uow_factory() as uow:
            return await self._require_post(uow, post_id)

    async def delete(self, post_id: UUID, requester_id: UUID) -> None:
        """Delete a post. Only its author may do so."""
        async with self._uow_factory() as uow:
            post = await self._require_post(uow, post_id)
            if not post.is_owned_by(requester_id):
                raise NotOwnerError()

            await uow.posts.delete(post_id)
            await uow.commit()

        logger.info("post_deleted", post_id=str(post_id), user_id=str(requester_id))

    async def like(self, post_id: UUID, user_id: UUID) -> List[Like]:
        """Like a post. Liking twice is rejected rather than ignored."""
        async with self._uow_factory() as uow:
            await self._require_post(uow, post_id)

            added = await uow.posts.add_like(post_id, Like(user_id=user_id))
            if not added:
                raise PostAlreadyLikedError(str(post_id))

            await uow.commit()
            return await uow.posts.get_likes(post_id)

    async def unlike(self, post_id: UUID, user_id: UUID) -> List[Like]:
        """Withdraw a like. Fails if the user has not liked the post."""
        async with self._uow_factory() as uow:
            await self._require_post(uow, post_id)

            removed = await uow.posts.remove_like(post_id, user_id)
            if not removed:
                raise PostNotLikedError(str(post_id))

            await uow.commit()
            return await uow.posts.get_likes(post_id)

    async def add_comment(self, post_id: UUID, user_id: UUID, text: str) -> List[Comment]:
        """Comment on a post, stamping the commenter's current name and avatar."""
        text = self._require_text(text)
        async with self._uow_factory() as uow:
            await self._require_post(uow, post_id)
            commenter = await self._require_user(uow, user_id)

            comment = Comment(
                user_id=commenter.id,
                text=text,
                name=commenter.name,
                avatar=commenter.avatar,
            )
            await uow.posts.add_comment(post_id, comment)
            await uow.commit()
            return await uow.posts.get_comments(post_id)

    async def remove_comment(
        self, post_id: UUID, comment_id: UUID, requester_id: UUID
    ) -> List[Comment]:
        """Delete a comment. Only the comment's author may do so.

        The post's author has no special rights over other users' comments.
        """
        async with self._uow_factory() as uow:
            await self._require_post(uow, post_id)

            comment = await uow.posts.get_comment(post_id, comment_id)
            if not comment:
                raise CommentNotFoundError(str(comment_id))
            if comment.user_id != requester_id:
                raise NotOwnerError()

            removed = await uow.posts.remove_comment(post_id, comment_id, requester_id)
            if not removed:
                # Deleted by a concurrent request after the lookup above
                raise CommentNotFoundError(str(comment_id))

            await uow.commit()
            return await uow.posts.get_comments(post_id)

    @staticmethod
    def _require_text(text: str) -> str:
        if not text or not text.strip():
            raise DomainValidationError("Text is required", field="text")
        return text

    async def _require_post(self, uow: IUnitOfWork, post_id: UUID) -> Post:
        post = await uow.posts.get(post_id)
        if not post:
            raise PostNotFoundError(str(post_id))
        return post

    async def _require_user(self, uow: IUnitOfWork, user_id: UUID) -> User:
        user = await uow.users.get(user_id)
        if not user:
            raise AuthenticationError(message="User no longer exists")
        return user
