"""
Career Recommendation Agent - prompts and response extraction

Architecture:
- Pattern: single LLM call (no tools, no multi-step orchestration)
- Transport: careerpath/services/gateway_client.py
- Orchestration and persistence: careerpath/services/recommendation_service.py

Prompt templates are in:
- careerpath/agents/career/prompts.py

Extraction strategies are in:
- careerpath/agents/career/extraction.py
"""

from careerpath.agents.career.extraction import (
    BracketArrayExtractor,
    RecommendationExtractor,
    extract_recommendations,
)
from careerpath.agents.career.prompts import (
    CAREER_SYSTEM_PROMPT,
    NONE_SPECIFIED,
    build_career_prompts,
    build_career_user_prompt,
)

__all__ = [
    "CAREER_SYSTEM_PROMPT",
    "NONE_SPECIFIED",
    "build_career_prompts",
    "build_career_user_prompt",
    "RecommendationExtractor",
    "BracketArrayExtractor",
    "extract_recommendations",
]
