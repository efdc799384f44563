"""SQLAlchemy implementation of Post repository."""

from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from domain.entities.post import Comment, Like, Post
from infrastructure.database.models import PostCommentModel, PostLikeModel, PostModel


class SQLAlchemyPostRepository:
    """SQLAlchemy implementation of IPostRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: UUID) -> Post | None:
        """Get a post with its likes and comments."""
        stmt = (
            select(PostModel)
            .where(PostModel.id == id)
            .options(selectinload(PostModel.likes), selectinload(PostModel.comments))
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def list_all(self) -> list[Post]:
        """Get all posts, newest first."""
        stmt = (
            select(PostModel)
            .options(selectinload(PostModel.likes), selectinload(PostModel.comments))
            .order_by(PostModel.created_at.desc())
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def create(self, post: Post) -> Post:
        """Create a new post."""
        model = PostModel(
            id=post.id,
            user_id=post.user_id,
            text=post.text,
            name=post.name,
            avatar=post.avatar,
            created_at=post.created_at,
        )
        self._session.add(model)
        await self._session.flush()
        return Post(
            id=model.id,
            user_id=model.user_id,
            text=model.text,
            name=model.name,
            avatar=model.avatar,
            created_at=model.created_at,
        )

    async def delete(self, id: UUID) -> bool:
        """Delete a post together with its likes and comments."""
        stmt = (
            select(PostModel)
            .where(PostModel.id == id)
            .options(selectinload(PostModel.likes), selectinload(PostModel.comments))
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if not model:
            return False

        await self._session.delete(model)
        await self._session.flush()
        return True

    async def add_like(self, post_id: UUID, like: Like) -> bool:
        """Insert a like row; the (post_id, user_id) constraint rejects repeats."""
        existing = await self._session.execute(
            select(PostLikeModel.id).where(
                PostLikeModel.post_id == post_id,
                PostLikeModel.user_id == like.user_id,
            )
        )
        if existing.scalar_one_or_none():
            return False

        self._session.add(
            PostLikeModel(
                id=like.id,
                post_id=post_id,
                user_id=like.user_id,
                created_at=like.created_at,
            )
        )
        try:
            await self._session.flush()
        except IntegrityError:
            # A concurrent request inserted the same like first
            await self._session.rollback()
            return False
        return True

    async def remove_like(self, post_id: UUID, user_id: UUID) -> bool:
        """Delete a user's like on a post."""
        stmt = delete(PostLikeModel).where(
            PostLikeModel.post_id == post_id,
            PostLikeModel.user_id == user_id,
        )
        result = await self._session.execute(stmt)
        await self._session.flush()
        return bool(result.rowcount)

    async def get_likes(self, post_id: UUID) -> list[Like]:
        """Get a post's likes, newest first."""
        stmt = (
            select(PostLikeModel)
            .where(PostLikeModel.post_id == post_id)
            .order_by(PostLikeModel.created_at.desc())
        )
        result = await self._session.execute(stmt)
        return [self._like_to_entity(model) for model in result.scalars()]

    async def add_comment(self, post_id: UUID, comment: Comment) -> Comment:
        """Attach a comment to a post."""
        model = PostCommentModel(
            id=comment.id,
            post_id=post_id,
            user_id=comment.user_id,
            text=comment.text,
            name=comment.name,
            avatar=comment.avatar,
            created_at=comment.created_at,
        )
        self._session.add(model)
        await self._session.flush()
        return self._comment_to_entity(model)

    async def get_comment(self, post_id: UUID, comment_id: UUID) -> Comment | None:
        """Get one comment of a post."""
        stmt = select(PostCommentModel).where(
            PostCommentModel.post_id == post_id,
            PostCommentModel.id == comment_id,
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._comment_to_entity(model) if model else None

    async def remove_comment(
        self, post_id: UUID, comment_id: UUID, user_id: UUID
    ) -> bool:
        """Delete a comment, but only if user_id wrote it."""
        stmt = delete(PostCommentModel).where(
            PostCommentModel.post_id == post_id,
            PostCommentModel.id == comment_id,
            PostCommentModel.user_id == user_id,
        )
        result = await self._session.execute(stmt)
        await self._session.flush()
        return bool(result.rowcount)

    async def get_comments(self, post_id: UUID) -> list[Comment]:
        """Get a post's comments, newest first."""
        stmt = (
            select(PostCommentModel)
            .where(PostCommentModel.post_id == post_id)
            .order_by(PostCommentModel.created_at.desc())
        )
        result = await self._session.execute(stmt)
        return [self._comment_to_entity(model) for model in result.scalars()]

    def _to_entity(self, model: PostModel) -> Post:
        """Convert ORM model (with loaded likes/comments) to domain entity."""
        return Post(
            id=model.id,
            user_id=model.user_id,
            text=model.text,
            name=model.name,
            avatar=model.avatar,
            created_at=model.created_at,
            likes=[self._like_to_entity(like) for like in model.likes],
            comments=[self._comment_to_entity(c) for c in model.comments],
        )

    @staticmethod
    def _like_to_entity(model: PostLikeModel) -> Like:
        return Like(id=model.id, user_id=model.user_id, created_at=model.created_at)

    @staticmethod
    def _comment_to_entity(model: PostCommentModel) -> Comment:
        return Comment(
            id=model.id,
            user_id=model.user_id,
            text=model.text,
            name=model.name,
            avatar=model.avatar,
            created_at=model.created_at,
        )
