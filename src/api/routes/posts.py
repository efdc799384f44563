"""Post API routes."""

from uuid import UUID

from fastapi import APIRouter, Depends, Request

from api.dependencies.auth import CurrentUser
from api.dependencies.services import get_post_service
from api.schemas.common import MessageResponse
from api.schemas.post import CommentResponse, LikeResponse, PostResponse, TextBody
from core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from domain.entities.post import Comment, Like, Post
from domain.services.post_service import PostService

router = APIRouter(prefix="/posts", tags=["posts"])


def _like_response(like: Like) -> LikeResponse:
    return LikeResponse(id=like.id, user=like.user_id)


def _comment_response(comment: Comment) -> CommentResponse:
    return CommentResponse(
        id=comment.id,
        user=comment.user_id,
        text=comment.text,
        name=comment.name,
        avatar=comment.avatar,
        created_at=comment.created_at,
    )


def _post_response(post: Post) -> PostResponse:
    return PostResponse(
        id=post.id,
        user=post.user_id,
        text=post.text,
        name=post.name,
        avatar=post.avatar,
        likes=[_like_response(like) for like in post.likes],
        comments=[_comment_response(c) for c in post.comments],
        created_at=post.created_at,
    )


@router.post(
    "",
    response_model=PostResponse,
    summary="Create a post",
    responses={
        200: {"description": "Post created"},
        422: {"description": "Text missing"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def create_post(
    request: Request,
    body: TextBody,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> PostResponse:
    """Publish a post under the caller's current name and avatar."""
    post = await service.create(user.id, body.text)
    return _post_response(post)


@router.get(
    "",
    response_model=list[PostResponse],
    summary="List all posts",
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def list_posts(
    request: Request,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> list[PostResponse]:
    """Get the feed, newest post first."""
    return [_post_response(post) for post in await service.list_all()]


@router.get(
    "/{post_id}",
    response_model=PostResponse,
    summary="Get a post",
    responses={
        200: {"description": "The post"},
        404: {"description": "Post not found"},
    },
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_post(
    request: Request,
    post_id: UUID,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> PostResponse:
    """Get a single post with its likes and comments."""
    return _post_response(await service.get(post_id))


@router.delete(
    "/{post_id}",
    response_model=MessageResponse,
    summary="Delete a post",
    responses={
        200: {"description": "Post removed"},
        401: {"description": "Caller is not the author"},
        404: {"description": "Post not found"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def delete_post(
    request: Request,
    post_id: UUID,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> MessageResponse:
    """Delete one of the caller's own posts."""
    await service.delete(post_id, user.id)
    return MessageResponse(message="Post removed")


@router.put(
    "/like/{post_id}",
    response_model=list[LikeResponse],
    summary="Like a post",
    responses={
        200: {"description": "Updated likes, newest first"},
        400: {"description": "Post already liked"},
        404: {"description": "Post not found"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def like_post(
    request: Request,
    post_id: UUID,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> list[LikeResponse]:
    """Like a post. A second like by the same user is rejected."""
    likes = await service.like(post_id, user.id)
    return [_like_response(like) for like in likes]


@router.put(
    "/unlike/{post_id}",
    response_model=list[LikeResponse],
    summary="Unlike a post",
    responses={
        200: {"description": "Updated likes, newest first"},
        400: {"description": "Post has not yet been liked"},
        404: {"description": "Post not found"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def unlike_post(
    request: Request,
    post_id: UUID,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> list[LikeResponse]:
    """Withdraw the caller's like from a post."""
    likes = await service.unlike(post_id, user.id)
    return [_like_response(like) for like in likes]


@router.post(
    "/comments/{post_id}",
    response_model=list[CommentResponse],
    summary="Comment on a post",
    responses={
        200: {"description": "Updated comments, newest first"},
        404: {"description": "Post not found"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def add_comment(
    request: Request,
    post_id: UUID,
    body: TextBody,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> list[CommentResponse]:
    """Add a comment under the caller's current name and avatar."""
    comments = await service.add_comment(post_id, user.id, body.text)
    return [_comment_response(c) for c in comments]


@router.delete(
    "/comments/{post_id}/{comment_id}",
    response_model=list[CommentResponse],
    summary="Delete a comment",
    responses={
        200: {"description": "Updated comments, newest first"},
        401: {"description": "Caller did not write the comment"},
        404: {"description": "Post or comment not found"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def remove_comment(
    request: Request,
    post_id: UUID,
    comment_id: UUID,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> list[CommentResponse]:
    """Delete one of the caller's own comments."""
    comments = await service.remove_comment(post_id, comment_id, user.id)
    return [_comment_response(c) for c in comments]
