"""
Pydantic schemas for the career recommendation pipeline.

The request mirrors what the web client sends after onboarding: the stored
profile row plus its skill and interest rows. Store rows carry extra columns
(created_at, user_id, ...) which are accepted and ignored.

Recommendations are passed through as loosely-typed documents. The model's
output varies in shape, so fields it omits stay absent instead of being
defaulted.
"""

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

EngineeringBranch = Literal["computer", "mechanical", "civil", "electrical", "electronics"]
SkillLevel = Literal["beginner", "intermediate", "advanced", "expert"]

# A parsed model recommendation. Keys follow RECOMMENDATION_FIELDS when present.
RecommendationDraft = Dict[str, Any]


# ============================================================================
# REQUEST MODELS
# ============================================================================

class ProfilePayload(BaseModel):
    """A user_profiles row as sent by the client."""
    model_config = ConfigDict(extra="allow")

    id: str = Field(..., description="Profile UUID (user_profiles.id)")
    branch: EngineeringBranch = Field(
        ...,
        description="Engineering branch",
        examples=["computer", "civil"]
    )
    current_year: Optional[int] = Field(
        None,
        description="Current year of study",
        ge=1,
        le=4,
        examples=[2]
    )
    full_name: Optional[str] = Field(None, description="Display name")


class SkillPayload(BaseModel):
    """A user_skills row."""
    model_config = ConfigDict(extra="allow")

    skill_name: str = Field(..., description="Free-text skill name", examples=["Python"])
    skill_level: SkillLevel = Field(..., description="Self-assessed level", examples=["intermediate"])


class InterestPayload(BaseModel):
    """A user_interests row."""
    model_config = ConfigDict(extra="allow")

    interest: str = Field(..., description="Free-text interest label", examples=["AI"])


class GenerateRecommendationsRequest(BaseModel):
    """
    Request body for POST /generate-career-recommendations.

    Skills and interests keep the order the client sends them in; that order
    is reflected in the prompt.
    """
    profile: ProfilePayload
    skills: List[SkillPayload] = Field(default_factory=list)
    interests: List[InterestPayload] = Field(default_factory=list)


# ============================================================================
# RESPONSE MODELS
# ============================================================================

class GenerateRecommendationsResponse(BaseModel):
    """
    Successful pipeline response.

    Each item is a career_recommendations row exactly as the store returned it
    after insert (id, profile_id, created_at plus the model's fields).
    """
    recommendations: List[Dict[str, Any]] = Field(
        ...,
        description="Persisted recommendation rows, in insertion order"
    )


class CareerErrorResponse(BaseModel):
    """Failure body returned by the pipeline endpoints."""
    error: str = Field(
        ...,
        description="Human-readable message, shown verbatim by the client",
        examples=["Rate limit exceeded. Please try again later."]
    )
