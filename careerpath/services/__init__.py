"""
Service layer for the CareerPath backend.

Contains business logic orchestration that:
- Builds prompts and calls the AI gateway
- Extracts and persists career recommendations
- Reads and writes onboarding data in Supabase

Services act as the glue between routes (HTTP layer) and agents/database.
"""

from .gateway_client import ModelGatewayClient, get_gateway_client
from .profile_service import (
    create_user_profile,
    delete_user_profile,
    get_profile_interests,
    get_profile_skills,
    get_user_profile,
    update_user_profile,
)
from .recommendation_service import (
    delete_profile_recommendations,
    generate_career_recommendations,
    get_profile_recommendations,
    persist_recommendations,
)

__all__ = [
    "ModelGatewayClient",
    "get_gateway_client",
    "get_user_profile",
    "get_profile_skills",
    "get_profile_interests",
    "create_user_profile",
    "update_user_profile",
    "delete_user_profile",
    "generate_career_recommendations",
    "persist_recommendations",
    "delete_profile_recommendations",
    "get_profile_recommendations",
]
