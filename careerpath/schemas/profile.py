"""
Pydantic schemas for profile onboarding endpoints.

A profile is 1:1 with auth.users and owns the student's skills and interests.
Onboarding and re-onboarding submit all three together, the way the web
wizard collects them.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from careerpath.schemas.career import EngineeringBranch, SkillLevel


# --- Request models ---

class SkillEntry(BaseModel):
    """One skill as entered in the onboarding wizard."""
    skill_name: str = Field(..., min_length=1, max_length=100, examples=["Python"])
    skill_level: SkillLevel = Field("beginner", examples=["intermediate"])

    @field_validator("skill_name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            raise ValueError("skill_name must not be blank")
        return stripped


class ProfileWriteRequest(BaseModel):
    """
    Request to create (POST /profile) or replace (PUT /profile) a profile.

    Interests are trimmed and de-duplicated here, preserving first occurrence.
    """
    full_name: str = Field(..., min_length=1, max_length=200, examples=["Ada Lovelace"])
    branch: EngineeringBranch = Field(..., examples=["computer"])
    current_year: int = Field(..., ge=1, le=4, examples=[2])
    skills: List[SkillEntry] = Field(default_factory=list)
    interests: List[str] = Field(default_factory=list, examples=[["AI", "Robotics"]])

    @field_validator("interests")
    @classmethod
    def dedupe_interests(cls, value: List[str]) -> List[str]:
        seen: List[str] = []
        for interest in value:
            interest = interest.strip()
            if interest and interest not in seen:
                seen.append(interest)
        return seen


# --- Response models ---

class ProfileResponse(BaseModel):
    """Profile row with its skills and interests."""
    id: str = Field(..., description="Profile UUID")
    user_id: Optional[str] = Field(None, description="Owner (auth.users id)")
    full_name: Optional[str] = None
    branch: str
    current_year: Optional[int] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    skills: List[Dict[str, Any]] = Field(default_factory=list)
    interests: List[Dict[str, Any]] = Field(default_factory=list)


class ProfileDeleteResponse(BaseModel):
    """Response after deleting a profile (and, by cascade, everything it owns)."""
    status: str = Field("DELETED")
    message: str = Field(..., examples=["Profile deleted successfully"])
