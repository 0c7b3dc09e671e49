"""
Student profile service.

Handles reading and writing the onboarding data in Supabase:
- user_profiles (1:1 with auth.users)
- user_skills and user_interests (many per profile)

Deleting a profile cascades to skills, interests and career recommendations
at the database level.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence, cast

from supabase import Client

from careerpath.utils.constants import TABLES

logger = logging.getLogger(__name__)


async def get_user_profile(
    supabase_client: Client,
    user_id: str
) -> Optional[Dict[str, Any]]:
    """
    Fetch the user's profile from Supabase.

    Args:
        supabase_client: Authenticated Supabase client
        user_id: The authenticated user's ID

    Returns:
        The profile row, or None if the user has not onboarded yet
    """
    logger.debug(f"Fetching profile for user {user_id}")

    result = (
        supabase_client.table(TABLES['PROFILES'])
        .select("*")
        .eq("user_id", user_id)
        .execute()
    )

    if not result.data or len(result.data) == 0:
        logger.info(f"Profile not found for user {user_id}")
        return None

    profile: Dict[str, Any] = cast(Dict[str, Any], result.data[0])
    logger.info(f"Profile found for user {user_id}: branch={profile.get('branch')}")

    return profile


async def get_profile_skills(
    supabase_client: Client,
    profile_id: str
) -> List[Dict[str, Any]]:
    """Fetch all skill rows for a profile."""
    result = (
        supabase_client.table(TABLES['SKILLS'])
        .select("*")
        .eq("profile_id", profile_id)
        .execute()
    )
    return cast(List[Dict[str, Any]], result.data or [])


async def get_profile_interests(
    supabase_client: Client,
    profile_id: str
) -> List[Dict[str, Any]]:
    """Fetch all interest rows for a profile."""
    result = (
        supabase_client.table(TABLES['INTERESTS'])
        .select("*")
        .eq("profile_id", profile_id)
        .execute()
    )
    return cast(List[Dict[str, Any]], result.data or [])


async def _insert_skills(
    supabase_client: Client,
    profile_id: str,
    skills: Sequence[Dict[str, str]]
) -> List[Dict[str, Any]]:
    if not skills:
        return []

    rows = [
        {
            "profile_id": profile_id,
            "skill_name": skill["skill_name"],
            "skill_level": skill["skill_level"],
        }
        for skill in skills
    ]
    result = supabase_client.table(TABLES['SKILLS']).insert(rows).execute()
    return cast(List[Dict[str, Any]], result.data or [])


async def _insert_interests(
    supabase_client: Client,
    profile_id: str,
    interests: Sequence[str]
) -> List[Dict[str, Any]]:
    if not interests:
        return []

    rows = [{"profile_id": profile_id, "interest": interest} for interest in interests]
    result = supabase_client.table(TABLES['INTERESTS']).insert(rows).execute()
    return cast(List[Dict[str, Any]], result.data or [])


async def create_user_profile(
    supabase_client: Client,
    user_id: str,
    full_name: str,
    branch: str,
    current_year: int,
    skills: Sequence[Dict[str, str]],
    interests: Sequence[str],
) -> Dict[str, Any]:
    """
    Create a profile together with its skills and interests (onboarding).

    Args:
        supabase_client: Authenticated Supabase client
        user_id: The authenticated user's ID
        full_name: Display name
        branch: Engineering branch enum value
        current_year: Year of study (1-4)
        skills: Dicts with skill_name and skill_level
        interests: Interest labels, already de-duplicated

    Returns:
        The created profile row with "skills" and "interests" lists attached

    Raises:
        Exception: If the store returns no profile row
    """
    logger.info(f"Creating profile for user {user_id}: branch={branch}, year={current_year}")

    result = supabase_client.table(TABLES['PROFILES']).insert({
        "user_id": user_id,
        "full_name": full_name,
        "branch": branch,
        "current_year": current_year,
    }).execute()

    if not result.data or len(result.data) == 0:
        raise Exception("Failed to create profile: no data returned")

    profile: Dict[str, Any] = cast(Dict[str, Any], result.data[0])
    profile_id = str(profile["id"])

    profile["skills"] = await _insert_skills(supabase_client, profile_id, skills)
    profile["interests"] = await _insert_interests(supabase_client, profile_id, interests)

    logger.info(
        f"Profile {profile_id} created with {len(profile['skills'])} skills "
        f"and {len(profile['interests'])} interests"
    )

    return profile


async def update_user_profile(
    supabase_client: Client,
    profile_id: str,
    full_name: str,
    branch: str,
    current_year: int,
    skills: Sequence[Dict[str, str]],
    interests: Sequence[str],
) -> Dict[str, Any]:
    """
    Re-onboarding: update profile fields and replace skills and interests.

    Existing skill and interest rows are deleted and the new lists inserted.
    Recommendations are left alone; the client regenerates them afterwards.

    Returns:
        The updated profile row with "skills" and "interests" lists attached
    """
    logger.info(f"Updating profile {profile_id}")

    result = (
        supabase_client.table(TABLES['PROFILES'])
        .update({
            "full_name": full_name,
            "branch": branch,
            "current_year": current_year,
        })
        .eq("id", profile_id)
        .execute()
    )

    if not result.data or len(result.data) == 0:
        raise Exception("Failed to update profile: no data returned")

    profile: Dict[str, Any] = cast(Dict[str, Any], result.data[0])

    supabase_client.table(TABLES['SKILLS']).delete().eq("profile_id", profile_id).execute()
    supabase_client.table(TABLES['INTERESTS']).delete().eq("profile_id", profile_id).execute()

    profile["skills"] = await _insert_skills(supabase_client, profile_id, skills)
    profile["interests"] = await _insert_interests(supabase_client, profile_id, interests)

    logger.info(f"Profile {profile_id} updated successfully")

    return profile


async def delete_user_profile(
    supabase_client: Client,
    user_id: str
) -> bool:
    """
    Delete the user's profile. The store cascades to dependent rows.

    Returns:
        True if a profile row was deleted, False if none existed
    """
    logger.info(f"Deleting profile for user {user_id}")

    result = (
        supabase_client.table(TABLES['PROFILES'])
        .delete()
        .eq("user_id", user_id)
        .execute()
    )

    deleted = bool(result.data)
    if deleted:
        logger.info(f"Profile deleted for user {user_id}")
    else:
        logger.warning(f"No profile to delete for user {user_id}")

    return deleted
