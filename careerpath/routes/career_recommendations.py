"""
FastAPI routes for career recommendations.

Endpoints:
- OPTIONS/POST /generate-career-recommendations: pipeline entry point. The
  client sends its profile, skills and interests; the service calls the AI
  gateway and replaces the profile's recommendation batch.
- GET /recommendations: the authenticated user's live batch, best match first
- POST /recommendations/regenerate: run the pipeline from stored onboarding data

Failures are returned as {"error": <message>} with 429 (rate limited),
402 (payment required) or 500 (everything else). The client shows the
message verbatim.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Response
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from careerpath.auth.dependencies import AuthenticatedUser, get_authenticated_user
from careerpath.db.client import get_service_role_client, get_supabase_client
from careerpath.schemas.career import (
    CareerErrorResponse,
    GenerateRecommendationsRequest,
    GenerateRecommendationsResponse,
    InterestPayload,
    ProfilePayload,
    SkillPayload,
)
from careerpath.services import (
    generate_career_recommendations,
    get_gateway_client,
    get_profile_interests,
    get_profile_recommendations,
    get_profile_skills,
    get_user_profile,
)
from careerpath.utils.constants import PIPELINE_CORS_HEADERS, PIPELINE_PATH
from careerpath.utils.errors import CareerPipelineError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["recommendations"])

_ERROR_RESPONSES = {
    402: {"model": CareerErrorResponse, "description": "AI service requires payment"},
    429: {"model": CareerErrorResponse, "description": "AI gateway rate limit"},
    500: {"model": CareerErrorResponse, "description": "Gateway, parse or configuration failure"},
}


def _error_response(message: str, status_code: int) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": message},
        headers=PIPELINE_CORS_HEADERS,
    )


def _ok_response(response: GenerateRecommendationsResponse) -> JSONResponse:
    return JSONResponse(
        status_code=200,
        content=jsonable_encoder(response),
        headers=PIPELINE_CORS_HEADERS,
    )


# ============================================================================
# PIPELINE ENTRY POINT
# ============================================================================

@router.options(PIPELINE_PATH, include_in_schema=False)
async def generate_career_recommendations_preflight() -> Response:
    """Cross-origin preflight: empty body, permissive CORS headers."""
    return Response(status_code=200, headers=PIPELINE_CORS_HEADERS)


@router.post(
    PIPELINE_PATH,
    response_model=GenerateRecommendationsResponse,
    responses=_ERROR_RESPONSES,
    summary="Generate career recommendations",
    description="""
    Generates three career recommendations for the submitted profile.

    **Flow:**
    1. Check the AI gateway credential
    2. Build the counselor prompt from branch, year, skills and interests
    3. Call the AI gateway once (no retries)
    4. Extract the JSON array from the reply
    5. Delete the profile's previous recommendations and insert the new ones

    Rows that fail to save are skipped; the response lists the rows that were saved.
    """
)
async def generate_career_recommendations_endpoint(
    request: GenerateRecommendationsRequest,
) -> JSONResponse:
    logger.info(
        f"POST /generate-career-recommendations called for profile_id={request.profile.id}"
    )

    try:
        gateway = get_gateway_client()
        supabase_client = get_service_role_client()

        saved = await generate_career_recommendations(
            supabase_client=supabase_client,
            profile=request.profile,
            skills=request.skills,
            interests=request.interests,
            gateway=gateway,
        )
    except CareerPipelineError as e:
        logger.error(f"Error in generate-career-recommendations: {type(e).__name__}: {e.message}")
        return _error_response(e.message, e.status_code)
    except Exception as e:
        logger.error(f"Error in generate-career-recommendations: {e}", exc_info=True)
        return _error_response(str(e) or "Internal server error", 500)

    return _ok_response(GenerateRecommendationsResponse(recommendations=saved))


# ============================================================================
# USER-SCOPED ENDPOINTS
# ============================================================================

@router.get(
    "/recommendations",
    response_model=GenerateRecommendationsResponse,
    responses={404: {"model": CareerErrorResponse}},
    summary="List career recommendations",
    description="Returns the authenticated user's current batch ordered by match_score (highest first)."
)
async def list_recommendations_endpoint(
    auth_user: Annotated[AuthenticatedUser, Depends(get_authenticated_user)]
) -> JSONResponse:
    supabase_client = get_supabase_client(auth_user.access_token)

    try:
        profile = await get_user_profile(supabase_client, auth_user.user_id)
        if not profile:
            return _error_response("Profile not found. Complete onboarding first.", 404)

        recommendations = await get_profile_recommendations(supabase_client, str(profile["id"]))
    except Exception as e:
        logger.error(f"Failed to list recommendations for user_id={auth_user.user_id}: {e}", exc_info=True)
        return _error_response("Failed to retrieve recommendations", 500)

    logger.info(f"Returning {len(recommendations)} recommendations for user_id={auth_user.user_id}")

    return _ok_response(GenerateRecommendationsResponse(recommendations=recommendations))


@router.post(
    "/recommendations/regenerate",
    response_model=GenerateRecommendationsResponse,
    responses={404: {"model": CareerErrorResponse}, **_ERROR_RESPONSES},
    summary="Regenerate career recommendations",
    description="""
    Runs the pipeline for the authenticated user's stored profile, skills and
    interests, replacing the current batch. Used after re-onboarding.
    """
)
async def regenerate_recommendations_endpoint(
    auth_user: Annotated[AuthenticatedUser, Depends(get_authenticated_user)]
) -> JSONResponse:
    logger.info(f"POST /recommendations/regenerate called by user_id={auth_user.user_id}")

    try:
        gateway = get_gateway_client()
        supabase_client = get_supabase_client(auth_user.access_token)

        profile_row = await get_user_profile(supabase_client, auth_user.user_id)
        if not profile_row:
            return _error_response("Profile not found. Complete onboarding first.", 404)

        profile = ProfilePayload.model_validate(profile_row)
        skills = [SkillPayload.model_validate(row) for row in await get_profile_skills(supabase_client, profile.id)]
        interests = [
            InterestPayload.model_validate(row)
            for row in await get_profile_interests(supabase_client, profile.id)
        ]

        saved = await generate_career_recommendations(
            supabase_client=supabase_client,
            profile=profile,
            skills=skills,
            interests=interests,
            gateway=gateway,
        )
    except CareerPipelineError as e:
        logger.error(f"Error regenerating recommendations: {type(e).__name__}: {e.message}")
        return _error_response(e.message, e.status_code)
    except Exception as e:
        logger.error(f"Error regenerating recommendations: {e}", exc_info=True)
        return _error_response(str(e) or "Internal server error", 500)

    return _ok_response(GenerateRecommendationsResponse(recommendations=saved))
