"""
Profile onboarding API endpoints.

A student creates their profile once (branch, year, name, skills, interests),
can read it back, replace it when re-onboarding, or delete it. Deleting a
profile cascades to its skills, interests and career recommendations.
"""

import logging
from typing import Annotated, Any, Dict

from fastapi import APIRouter, Depends, HTTPException, status
from postgrest.exceptions import APIError

from careerpath.auth.dependencies import AuthenticatedUser, get_authenticated_user
from careerpath.db.client import get_supabase_client
from careerpath.schemas.profile import (
    ProfileDeleteResponse,
    ProfileResponse,
    ProfileWriteRequest,
)
from careerpath.services import (
    create_user_profile,
    delete_user_profile,
    get_profile_interests,
    get_profile_skills,
    get_user_profile,
    update_user_profile,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/profile", tags=["profile"])


def _to_response(profile: Dict[str, Any]) -> ProfileResponse:
    def _opt_str(val: Any):
        return str(val) if val is not None else None

    return ProfileResponse(
        id=str(profile.get("id")),
        user_id=_opt_str(profile.get("user_id")),
        full_name=profile.get("full_name"),
        branch=str(profile.get("branch")),
        current_year=profile.get("current_year"),
        created_at=_opt_str(profile.get("created_at")),
        updated_at=_opt_str(profile.get("updated_at")),
        skills=profile.get("skills") or [],
        interests=profile.get("interests") or [],
    )


def _not_found() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail={"error": "not_found", "details": "Profile not found for this user"}
    )


@router.post(
    "",
    response_model=ProfileResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create profile (onboarding)",
    description="""
    Create the authenticated user's profile with skills and interests.

    Returns 409 if the user already has a profile; use PUT /profile to
    re-onboard.
    """
)
async def create_profile(
    request: ProfileWriteRequest,
    auth_user: Annotated[AuthenticatedUser, Depends(get_authenticated_user)]
) -> ProfileResponse:
    """Onboard the authenticated user."""
    logger.info(f"Creating profile for user {auth_user.user_id}")

    supabase_client = get_supabase_client(auth_user.access_token)

    existing = await get_user_profile(supabase_client, auth_user.user_id)
    if existing:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail={"error": "conflict", "details": "Profile already exists for this user"}
        )

    try:
        profile = await create_user_profile(
            supabase_client=supabase_client,
            user_id=auth_user.user_id,
            full_name=request.full_name,
            branch=request.branch,
            current_year=request.current_year,
            skills=[skill.model_dump() for skill in request.skills],
            interests=request.interests,
        )
    except APIError as e:
        logger.error(f"Failed to create profile for user {auth_user.user_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "create_error", "details": "Failed to create profile"}
        )

    return _to_response(profile)


@router.get(
    "",
    response_model=ProfileResponse,
    status_code=status.HTTP_200_OK,
    summary="Get profile",
    description="Return the authenticated user's profile with skills and interests."
)
async def get_profile(
    auth_user: Annotated[AuthenticatedUser, Depends(get_authenticated_user)]
) -> ProfileResponse:
    """Fetch the authenticated user's profile."""
    logger.info(f"Fetching profile for user {auth_user.user_id}")

    supabase_client = get_supabase_client(auth_user.access_token)

    try:
        profile = await get_user_profile(supabase_client, auth_user.user_id)
        if not profile:
            raise _not_found()

        profile_id = str(profile["id"])
        profile["skills"] = await get_profile_skills(supabase_client, profile_id)
        profile["interests"] = await get_profile_interests(supabase_client, profile_id)

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to fetch profile for user {auth_user.user_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "fetch_error", "details": "Failed to retrieve profile from database"}
        )

    return _to_response(profile)


@router.put(
    "",
    response_model=ProfileResponse,
    status_code=status.HTTP_200_OK,
    summary="Replace profile (re-onboarding)",
    description="""
    Update branch, year and name, and replace the skill and interest lists.

    Existing recommendations are kept until the client calls
    POST /recommendations/regenerate.
    """
)
async def replace_profile(
    request: ProfileWriteRequest,
    auth_user: Annotated[AuthenticatedUser, Depends(get_authenticated_user)]
) -> ProfileResponse:
    """Re-onboard the authenticated user."""
    supabase_client = get_supabase_client(auth_user.access_token)

    existing = await get_user_profile(supabase_client, auth_user.user_id)
    if not existing:
        raise _not_found()

    try:
        profile = await update_user_profile(
            supabase_client=supabase_client,
            profile_id=str(existing["id"]),
            full_name=request.full_name,
            branch=request.branch,
            current_year=request.current_year,
            skills=[skill.model_dump() for skill in request.skills],
            interests=request.interests,
        )
    except APIError as e:
        logger.error(f"Failed to update profile for user {auth_user.user_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "update_error", "details": "Failed to update profile"}
        )

    return _to_response(profile)


@router.delete(
    "",
    response_model=ProfileDeleteResponse,
    status_code=status.HTTP_200_OK,
    summary="Delete profile",
    description="Delete the profile; skills, interests and recommendations go with it."
)
async def delete_profile(
    auth_user: Annotated[AuthenticatedUser, Depends(get_authenticated_user)]
) -> ProfileDeleteResponse:
    """Delete the authenticated user's profile."""
    supabase_client = get_supabase_client(auth_user.access_token)

    try:
        deleted = await delete_user_profile(supabase_client, auth_user.user_id)
    except Exception as e:
        logger.error(f"Failed to delete profile for user {auth_user.user_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "delete_error", "details": "Failed to delete profile"}
        )

    if not deleted:
        raise _not_found()

    return ProfileDeleteResponse(status="DELETED", message="Profile deleted successfully")
