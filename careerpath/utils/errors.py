"""
Error taxonomy for the career recommendation pipeline.

Every fatal pipeline failure is a CareerPipelineError carrying the HTTP status
and the user-facing message the route returns as {"error": message}.
PersistenceRowError is the only non-fatal kind: the persister logs it and
moves on to the next row.
"""

from typing import Optional


class CareerPipelineError(Exception):
    """Base class for failures that abort a recommendation request."""

    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ConfigurationError(CareerPipelineError):
    """The AI gateway credential is not configured."""

    default_message = "AI_GATEWAY_API_KEY is not configured"


class RateLimited(CareerPipelineError):
    """Upstream returned HTTP 429."""

    status_code = 429
    default_message = "Rate limit exceeded. Please try again later."


class PaymentRequired(CareerPipelineError):
    """Upstream returned HTTP 402."""

    status_code = 402
    default_message = "AI service requires payment. Please contact support."


class GatewayError(CareerPipelineError):
    """Upstream returned any other non-2xx status, or an unusable 2xx body."""

    def __init__(self, status: int, message: Optional[str] = None):
        self.status = status
        super().__init__(message or f"AI Gateway error: {status}")


class TransportError(CareerPipelineError):
    """The gateway could not be reached (DNS, connect, timeout, ...)."""

    default_message = "Could not reach the AI gateway. Please try again later."


class ParseError(CareerPipelineError):
    """The model reply did not contain a well-formed JSON array."""

    default_message = "Failed to parse AI response"


class PersistenceRowError(Exception):
    """A single recommendation row could not be saved. Never surfaced to callers."""
