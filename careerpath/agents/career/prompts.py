"""
Career Recommendation Prompt Templates

Contains the system prompt and user prompt builder for the career pipeline.

Architecture:
- Pattern: single chat-completion call through the AI gateway
- Model: configured by AI_GATEWAY_MODEL (default google/gemini-2.5-flash)
- Temperature: 0.7 (varied career suggestions)
- Output: JSON array embedded in free text, located by the response extractor

Prompt Engineering Pattern:
- System prompt defines the counselor persona only
- User prompt carries the student's profile, the task and the output shape
"""

from typing import Sequence, Tuple

from careerpath.schemas.career import InterestPayload, ProfilePayload, SkillPayload

# Rendered in place of an empty skills or interests list
NONE_SPECIFIED = "None specified"

RECOMMENDATION_COUNT = 3


# =============================================================================
# SYSTEM PROMPT
# =============================================================================

CAREER_SYSTEM_PROMPT = (
    "You are an expert career counselor specializing in engineering careers. "
    "Your role is to provide detailed, personalized career recommendations "
    "for engineering students."
)


# =============================================================================
# OUTPUT SHAPE
# =============================================================================
# Literal JSON shown to the model. Kept outside the f-string so braces need
# no escaping.

CAREER_OUTPUT_SHAPE = """[
  {
    "career_path": "Career Name",
    "description": "Description text",
    "required_skills": ["skill1", "skill2"],
    "skill_gaps": ["gap1", "gap2"],
    "recommended_courses": {
      "courses": [
        {"title": "Course Name", "platform": "Platform Name"}
      ]
    },
    "roadmap": {
      "steps": [
        {"title": "Step Title", "description": "Step description", "duration": "Time estimate"}
      ]
    },
    "match_score": 85
  }
]"""


# =============================================================================
# USER PROMPT BUILDER
# =============================================================================

def format_skills(skills: Sequence[SkillPayload]) -> str:
    """Render skills as 'name (level)', comma-joined, or the placeholder."""
    rendered = ", ".join(f"{s.skill_name} ({s.skill_level})" for s in skills)
    return rendered or NONE_SPECIFIED


def format_interests(interests: Sequence[InterestPayload]) -> str:
    """Render interest labels comma-joined, or the placeholder."""
    rendered = ", ".join(i.interest for i in interests)
    return rendered or NONE_SPECIFIED


def build_career_user_prompt(
    profile: ProfilePayload,
    skills: Sequence[SkillPayload],
    interests: Sequence[InterestPayload],
) -> str:
    """
    Build the user prompt for one student.

    The prompt embeds the branch, the year, the rendered skills and interests,
    and asks for exactly three recommendations in a strict JSON array.

    Args:
        profile: The student's profile row
        skills: Skills in the order they should appear
        interests: Interests in the order they should appear

    Returns:
        str: Formatted user prompt ready to be sent to the gateway
    """
    year = profile.current_year if profile.current_year is not None else "not specified"

    return f"""Generate {RECOMMENDATION_COUNT} career recommendations for a {profile.branch} engineering student (Year {year}) with the following profile:

Skills: {format_skills(skills)}
Interests: {format_interests(interests)}

For each career path, provide:
1. Career path name
2. Detailed description (2-3 sentences)
3. Required skills list (6-8 skills)
4. Skill gaps (skills they need to develop)
5. Recommended courses with titles and platforms
6. A 5-step roadmap from current position to career goal
7. Match score (0-100) based on their profile

Format your response as a JSON array with the following structure:
{CAREER_OUTPUT_SHAPE}"""


def build_career_prompts(
    profile: ProfilePayload,
    skills: Sequence[SkillPayload],
    interests: Sequence[InterestPayload],
) -> Tuple[str, str]:
    """Return the (system, user) prompt pair for one student."""
    return CAREER_SYSTEM_PROMPT, build_career_user_prompt(profile, skills, interests)
