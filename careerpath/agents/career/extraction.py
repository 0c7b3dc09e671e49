"""
Response extraction for the career pipeline.

The gateway returns free text that is expected to contain a JSON array of
recommendations, possibly wrapped in prose or a markdown fence. Extraction is
a strategy so a stricter contract (e.g. provider-side structured output) can
replace bracket matching without touching the rest of the pipeline.
"""

import json
import logging
import re
from typing import Any, List, Protocol

from careerpath.schemas.career import RecommendationDraft
from careerpath.utils.constants import RECOMMENDATION_FIELDS
from careerpath.utils.errors import ParseError

logger = logging.getLogger(__name__)

# First '[' through last ']' (greedy, spans newlines)
_JSON_ARRAY_PATTERN = re.compile(r"\[[\s\S]*\]")


class RecommendationExtractor(Protocol):
    """Turns raw completion text into recommendation drafts or raises ParseError."""

    def extract(self, content: str) -> List[RecommendationDraft]:
        ...


def _check_fields(drafts: List[Any]) -> None:
    """Log drafts that are missing expected fields. Drafts are never modified."""
    for idx, draft in enumerate(drafts):
        if not isinstance(draft, dict):
            logger.warning(f"Recommendation {idx} is not an object ({type(draft).__name__})")
            continue
        missing = [field for field in RECOMMENDATION_FIELDS if field not in draft]
        if missing:
            logger.warning(f"Recommendation {idx} missing fields: {missing}")


class BracketArrayExtractor:
    """
    Locate the outermost [...] substring and parse it as JSON.

    The match is greedy, so prose containing brackets after the array makes
    the candidate invalid JSON. That case surfaces as a ParseError.
    """

    def extract(self, content: str) -> List[RecommendationDraft]:
        match = _JSON_ARRAY_PATTERN.search(content or "")
        if not match:
            raise ParseError("Failed to parse AI response: no JSON array present")

        try:
            parsed = json.loads(match.group(0))
        except json.JSONDecodeError as e:
            logger.error(f"Failed to parse JSON array from AI response: {e}")
            raise ParseError(f"Failed to parse AI response: {e}") from e

        _check_fields(parsed)
        logger.info(f"Extracted {len(parsed)} recommendations from AI response")
        return parsed


_default_extractor = BracketArrayExtractor()


def extract_recommendations(content: str) -> List[RecommendationDraft]:
    """Extract drafts with the default bracket-matching strategy."""
    return _default_extractor.extract(content)
