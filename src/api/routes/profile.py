"""Profile API routes."""

from uuid import UUID

from fastapi import APIRouter, Depends, Request

from api.dependencies.auth import CurrentUser
from api.dependencies.services import get_profile_service
from api.schemas.common import MessageResponse
from api.schemas.profile import (
    EducationCreate,
    EducationResponse,
    ExperienceCreate,
    ExperienceResponse,
    ProfileOwnerResponse,
    ProfileResponse,
    ProfileUpsert,
    RepoResponse,
    SocialResponse,
)
from core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from domain.entities.profile import (
    SOCIAL_NETWORKS,
    EducationEntry,
    ExperienceEntry,
    ProfileUpdate,
    ProfileWithOwner,
)
from domain.services.profile_service import ProfileService

router = APIRouter(prefix="/profile", tags=["profile"])


def _to_response(found: ProfileWithOwner) -> ProfileResponse:
    profile = found.profile
    owner = found.owner
    return ProfileResponse(
        id=profile.id,
        user=(
            ProfileOwnerResponse(id=owner.id, name=owner.name, avatar=owner.avatar)
            if owner
            else None
        ),
        status=profile.status,
        company=profile.company,
        website=profile.website,
        location=profile.location,
        bio=profile.bio,
        githubusername=profile.githubusername,
        skills=profile.skills,
        social=SocialResponse(**profile.social.to_dict()),
        experience=[
            ExperienceResponse(
                id=e.id,
                title=e.title,
                company=e.company,
                location=e.location,
                from_date=e.from_date,
                to_date=e.to_date,
                current=e.current,
                description=e.description,
            )
            for e in profile.experience
        ],
        education=[
            EducationResponse(
                id=e.id,
                school=e.school,
                degree=e.degree,
                fieldofstudy=e.field_of_study,
                from_date=e.from_date,
                to_date=e.to_date,
                current=e.current,
                description=e.description,
            )
            for e in profile.education
        ],
        created_at=profile.created_at,
    )


@router.get(
    "/me",
    response_model=ProfileResponse,
    summary="Get my profile",
    responses={
        200: {"description": "The caller's profile"},
        401: {"description": "Not authenticated, or no profile yet"},
    },
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_my_profile(
    request: Request,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    """Get the authenticated user's profile with their name and avatar."""
    return _to_response(await service.get_own(user.id))


@router.post(
    "",
    response_model=ProfileResponse,
    summary="Create or update my profile",
    responses={
        200: {"description": "Profile created or updated"},
        422: {"description": "Status or skills missing"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def upsert_profile(
    request: Request,
    body: ProfileUpsert,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    """
    Create the caller's profile, or update it in place.

    Fields that are omitted or blank keep their stored values; social links
    are merged one network at a time.
    """
    update = ProfileUpdate(
        status=body.status,
        skills=body.skills,
        company=body.company,
        website=body.website,
        location=body.location,
        bio=body.bio,
        githubusername=body.githubusername,
        social={network: getattr(body, network) for network in SOCIAL_NETWORKS},
    )
    return _to_response(await service.upsert(user.id, update))


@router.get(
    "",
    response_model=list[ProfileResponse],
    summary="List all profiles",
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def list_profiles(
    request: Request,
    service: ProfileService = Depends(get_profile_service),
) -> list[ProfileResponse]:
    """Get every profile with its owner's current name and avatar."""
    return [_to_response(found) for found in await service.list_all()]


@router.delete(
    "",
    response_model=MessageResponse,
    summary="Delete my profile and account",
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def delete_account(
    request: Request,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> MessageResponse:
    """Delete the caller's profile and then their account. Posts are kept."""
    await service.delete_account(user.id)
    return MessageResponse(message="User deleted")


@router.put(
    "/experience",
    response_model=ProfileResponse,
    summary="Add an experience entry",
    responses={
        200: {"description": "Entry added at the top of the list"},
        401: {"description": "Not authenticated, or no profile yet"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def add_experience(
    request: Request,
    body: ExperienceCreate,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    """Prepend a job to the caller's experience list."""
    entry = ExperienceEntry(
        title=body.title,
        company=body.company,
        location=body.location,
        from_date=body.from_date,
        to_date=body.to_date,
        current=body.current,
        description=body.description,
    )
    return _to_response(await service.add_experience(user.id, entry))


@router.delete(
    "/experience/{exp_id}",
    response_model=ProfileResponse,
    summary="Remove an experience entry",
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def remove_experience(
    request: Request,
    exp_id: UUID,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    """Remove a job from the caller's experience list. Unknown ids are ignored."""
    return _to_response(await service.remove_experience(user.id, exp_id))


@router.put(
    "/education",
    response_model=ProfileResponse,
    summary="Add an education entry",
    responses={
        200: {"description": "Entry added at the top of the list"},
        401: {"description": "Not authenticated, or no profile yet"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def add_education(
    request: Request,
    body: EducationCreate,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    """Prepend a school to the caller's education list."""
    entry = EducationEntry(
        school=body.school,
        degree=body.degree,
        field_of_study=body.fieldofstudy,
        from_date=body.from_date,
        to_date=body.to_date,
        current=body.current,
        description=body.description,
    )
    return _to_response(await service.add_education(user.id, entry))


@router.delete(
    "/education/{edu_id}",
    response_model=ProfileResponse,
    summary="Remove an education entry",
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def remove_education(
    request: Request,
    edu_id: UUID,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    """Remove a school from the caller's education list. Unknown ids are ignored."""
    return _to_response(await service.remove_education(user.id, edu_id))


@router.get(
    "/github/{username}",
    response_model=list[RepoResponse],
    summary="List a GitHub user's repositories",
    responses={
        200: {"description": "Most recent public repositories"},
        404: {"description": "No Github profile found"},
    },
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def list_github_repos(
    request: Request,
    username: str,
    service: ProfileService = Depends(get_profile_service),
) -> list[RepoResponse]:
    """Proxy the public repository listing for a GitHub username."""
    repos = await service.fetch_github_repos(username)
    return [RepoResponse.model_validate(repo) for repo in repos]


@router.get(
    "/{user_id}",
    response_model=ProfileResponse,
    summary="Get a profile by user ID",
    responses={
        200: {"description": "The user's profile"},
        404: {"description": "Profile not found"},
    },
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_profile(
    request: Request,
    user_id: UUID,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    """Get any user's profile."""
    return _to_response(await service.get_by_user_id(user_id))
