"""
Database access layer for the CareerPath backend.

The Supabase project owns the schema (user_profiles, user_skills,
user_interests, career_recommendations) and its RLS policies. This package
only hands out clients; table access lives in careerpath.services.
"""

from .client import get_service_role_client, get_supabase_client

__all__ = ["get_supabase_client", "get_service_role_client"]
