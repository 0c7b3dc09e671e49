"""
FastAPI application entry point for the CareerPath backend.

This module creates the FastAPI app instance and registers all routers.
"""

import logging
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from starlette.types import ASGIApp, Receive, Scope, Send

from careerpath.config import settings
from careerpath.routes.career_recommendations import router as career_recommendations_router
from careerpath.routes.health import router as health_router
from careerpath.routes.profile import router as profile_router
from careerpath.utils.constants import PIPELINE_CORS_HEADERS, PIPELINE_PATH

# Configure logging
logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

logger = logging.getLogger(__name__)


def _get_cors_origins() -> list[str]:
    """
    Get allowed CORS origins based on environment.

    - ENVIRONMENT=production: Uses CORS_ALLOWED_ORIGINS (empty means none)
    - anything else: allows all origins for local development

    The pipeline endpoint sets its own permissive headers regardless.
    """
    if settings.is_production():
        origins = settings.CORS_ALLOWED_ORIGINS
        if origins:
            logger.info(f"CORS configured for production with {len(origins)} allowed origins")
        else:
            logger.warning(
                "CORS_ALLOWED_ORIGINS not set in production. "
                "No web origins allowed for user-scoped endpoints."
            )
        return origins

    logger.info(f"CORS configured for {settings.ENVIRONMENT}: allowing all origins")
    return ["*"]


class AppCORSMiddleware(CORSMiddleware):
    """
    Environment-driven CORS policy for the user-scoped routers.

    Requests to exempt paths go straight to the app; the pipeline endpoint
    answers its own preflight and sets permissive headers on every response.
    """

    def __init__(self, app: ASGIApp, exempt_paths: tuple[str, ...] = (), **kwargs) -> None:
        super().__init__(app, **kwargs)
        self.exempt_paths = exempt_paths

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http" and scope["path"] in self.exempt_paths:
            await self.app(scope, receive, send)
            return
        await super().__call__(scope, receive, send)


# Create FastAPI app
app = FastAPI(
    title="CareerPath API",
    description="Career recommendations for engineering students",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc"
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Log detailed validation errors for debugging.

    Carries the pipeline CORS headers so browser clients can read the body.
    """
    logger.error(
        f"Validation error on {request.method} {request.url.path}: {exc.errors()}"
    )

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error": "validation_error",
            "details": jsonable_encoder(exc.errors()),
        },
        headers=PIPELINE_CORS_HEADERS,
    )

app.add_middleware(
    AppCORSMiddleware,
    exempt_paths=(PIPELINE_PATH,),
    allow_origins=_get_cors_origins(),
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routers
app.include_router(health_router)
app.include_router(profile_router)
app.include_router(career_recommendations_router)

logger.info("FastAPI app initialized successfully")
