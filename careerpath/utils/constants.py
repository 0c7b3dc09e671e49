"""
Table names and column lists owned by the Supabase schema.

See the generated database types in the web client for the source of truth.
"""

TABLES = {
    'PROFILES': 'user_profiles',
    'SKILLS': 'user_skills',
    'INTERESTS': 'user_interests',
    'RECOMMENDATIONS': 'career_recommendations',
}

# Columns of career_recommendations filled from a model draft.
# profile_id is set by the persister, id/created_at by the database.
RECOMMENDATION_FIELDS = (
    'career_path',
    'description',
    'required_skills',
    'skill_gaps',
    'recommended_courses',
    'roadmap',
    'match_score',
)

# Headers carried by every response of the recommendation pipeline endpoint,
# including preflight and error responses
PIPELINE_CORS_HEADERS = {
    'Access-Control-Allow-Origin': '*',
    'Access-Control-Allow-Headers': 'authorization, x-client-info, apikey, content-type',
}

# Public pipeline endpoint; exempt from the app-wide CORS policy
PIPELINE_PATH = '/generate-career-recommendations'
