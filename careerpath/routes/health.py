"""
Health check route for the CareerPath backend.

This endpoint is PUBLIC (no authentication required).
"""

import logging

from fastapi import APIRouter

from careerpath.schemas.health import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["system"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check endpoint",
    status_code=200,
)
async def health_check() -> HealthResponse:
    """Public liveness probe."""
    logger.debug("Health check endpoint called")

    return HealthResponse(status="ok")
