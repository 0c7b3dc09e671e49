"""
Career Recommendation Service - single AI gateway call

This service turns a student's profile into persisted career recommendations.

Architecture:
- Pattern: single chat completion through the AI gateway (no tools, no retries)
- Model: AI_GATEWAY_MODEL (default google/gemini-2.5-flash)
- Temperature: 0.7
- Output: JSON array parsed from free text by a pluggable extractor

Pipeline:
1. Validate configuration (gateway credential)
2. Build system + user prompts
3. Call the gateway
4. Extract the JSON array of recommendations
5. Replace the profile's recommendation batch (delete, then insert row by row)

Steps 1, 3 and 4 raise CareerPipelineError subclasses that abort the request.
Step 5 is best-effort per row: a row that fails to save is logged and skipped.
Nothing is deleted unless extraction succeeded, so a failed call keeps the
previous batch.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence, cast

import httpx
from postgrest.exceptions import APIError
from supabase import Client

from careerpath.agents.career.extraction import BracketArrayExtractor, RecommendationExtractor
from careerpath.agents.career.prompts import build_career_prompts
from careerpath.schemas.career import (
    InterestPayload,
    ProfilePayload,
    RecommendationDraft,
    SkillPayload,
)
from careerpath.services.gateway_client import ModelGatewayClient, get_gateway_client
from careerpath.utils.constants import RECOMMENDATION_FIELDS, TABLES
from careerpath.utils.errors import PersistenceRowError

logger = logging.getLogger(__name__)


# =============================================================================
# PERSISTENCE
# =============================================================================

def _build_row(profile_id: str, draft: Any) -> Dict[str, Any]:
    """Map a draft onto a career_recommendations insert. Absent fields stay absent."""
    if not isinstance(draft, dict):
        raise PersistenceRowError(f"recommendation is not an object: {type(draft).__name__}")

    row: Dict[str, Any] = {"profile_id": profile_id}
    for field in RECOMMENDATION_FIELDS:
        if field in draft:
            row[field] = draft[field]
    return row


def _insert_recommendation(supabase_client: Client, profile_id: str, draft: Any) -> Dict[str, Any]:
    row = _build_row(profile_id, draft)
    result = supabase_client.table(TABLES['RECOMMENDATIONS']).insert(row).execute()

    if not result.data or len(result.data) == 0:
        raise PersistenceRowError("insert returned no data")

    return cast(Dict[str, Any], result.data[0])


async def persist_recommendations(
    supabase_client: Client,
    profile_id: str,
    drafts: Sequence[RecommendationDraft],
) -> List[Dict[str, Any]]:
    """
    Insert each draft as its own row, skipping rows that fail.

    Args:
        supabase_client: Supabase client allowed to write career_recommendations
        profile_id: Owning profile
        drafts: Parsed recommendations in model output order

    Returns:
        The rows the store accepted, in attempt order
    """
    saved: List[Dict[str, Any]] = []

    for idx, draft in enumerate(drafts):
        try:
            saved.append(_insert_recommendation(supabase_client, profile_id, draft))
        except (APIError, PersistenceRowError, httpx.HTTPError) as e:
            logger.error(f"Error saving recommendation {idx} for profile_id={profile_id}: {e}")

    logger.info(f"Successfully saved {len(saved)} of {len(drafts)} recommendations")
    return saved


async def delete_profile_recommendations(
    supabase_client: Client,
    profile_id: str,
) -> int:
    """
    Delete every recommendation row for a profile.

    Returns:
        Number of rows deleted
    """
    result = (
        supabase_client.table(TABLES['RECOMMENDATIONS'])
        .delete()
        .eq("profile_id", profile_id)
        .execute()
    )
    deleted = len(result.data or [])
    logger.info(f"Deleted {deleted} existing recommendations for profile_id={profile_id}")
    return deleted


async def get_profile_recommendations(
    supabase_client: Client,
    profile_id: str,
) -> List[Dict[str, Any]]:
    """Fetch the live batch for a profile, best match first."""
    result = (
        supabase_client.table(TABLES['RECOMMENDATIONS'])
        .select("*")
        .eq("profile_id", profile_id)
        .order("match_score", desc=True)
        .execute()
    )
    return cast(List[Dict[str, Any]], result.data or [])


# =============================================================================
# PIPELINE
# =============================================================================

async def generate_career_recommendations(
    supabase_client: Client,
    profile: ProfilePayload,
    skills: Sequence[SkillPayload],
    interests: Sequence[InterestPayload],
    gateway: Optional[ModelGatewayClient] = None,
    extractor: Optional[RecommendationExtractor] = None,
) -> List[Dict[str, Any]]:
    """
    Run the full pipeline for one profile and return the persisted rows.

    Args:
        supabase_client: Client used for the delete-then-insert of the batch
        profile: The student's profile
        skills: The student's skills, in display order
        interests: The student's interests, in display order
        gateway: Gateway client (built from settings when omitted)
        extractor: Extraction strategy (bracket matching when omitted)

    Returns:
        Persisted recommendation rows (possibly fewer than the model produced)

    Raises:
        ConfigurationError: AI_GATEWAY_API_KEY missing
        RateLimited, PaymentRequired, GatewayError, TransportError: gateway failures
        ParseError: no well-formed JSON array in the reply
    """
    logger.info(
        f"generate_career_recommendations called for profile_id={profile.id}, "
        f"skills={len(skills)}, interests={len(interests)}"
    )

    if gateway is None:
        gateway = get_gateway_client()
    if extractor is None:
        extractor = BracketArrayExtractor()

    system_prompt, user_prompt = build_career_prompts(profile, skills, interests)

    content = await gateway.complete(system_prompt, user_prompt)

    drafts = extractor.extract(content)

    # TODO: wrap delete + insert in a store-side RPC so a crash cannot leave a partial batch
    await delete_profile_recommendations(supabase_client, profile.id)
    saved = await persist_recommendations(supabase_client, profile.id, drafts)

    logger.info(f"Returning {len(saved)} recommendations for profile_id={profile.id}")
    return saved
