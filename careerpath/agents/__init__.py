"""
AI components for the CareerPath backend.

1. Career Recommendation Agent (single-shot LLM workflow)
   - Builds a counselor prompt from the student's onboarding data
   - Extracts a JSON array of recommendations from the model's free-text reply
   - Transport and persistence live in careerpath/services/

No tools, no multi-step orchestration: one gateway call per request.
"""

from careerpath.agents.career import (
    CAREER_SYSTEM_PROMPT,
    BracketArrayExtractor,
    RecommendationExtractor,
    build_career_prompts,
    build_career_user_prompt,
    extract_recommendations,
)

__all__ = [
    "CAREER_SYSTEM_PROMPT",
    "build_career_prompts",
    "build_career_user_prompt",
    "RecommendationExtractor",
    "BracketArrayExtractor",
    "extract_recommendations",
]
