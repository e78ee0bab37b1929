# src/comment_stage/main.py
"""Main entry point for the Comment Stage application."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from comment_stage.api.v1 import auth_router, comments_router, users_router
from comment_stage.core.errors import CommentStageError
from comment_stage.core.settings import settings
from comment_stage.schemas.common import ErrorResponse
from comment_stage.services.moderation import GeminiModerationClient, ModerationOracle

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="Comment Stage API",
    description="Moderated comments with community ratings",
    version=settings.app_version,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Add GZip middleware for compression
app.add_middleware(GZipMiddleware)

# Include API routers
app.include_router(auth_router)
app.include_router(comments_router, prefix="/api")
app.include_router(users_router, prefix="/api")


@app.exception_handler(CommentStageError)
async def handle_domain_error(request: Request, exc: CommentStageError) -> JSONResponse:
    if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error("%s %s failed: %r", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(error=exc.message).model_dump(),
    )


@app.exception_handler(StarletteHTTPException)
async def handle_http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(error=str(exc.detail)).model_dump(),
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.debug("Rejected request to %s: %s", request.url.path, exc.errors())
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=ErrorResponse(error="Invalid request").model_dump(),
    )


@app.exception_handler(SQLAlchemyError)
async def handle_storage_error(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error(
        "Storage failure on %s %s", request.method, request.url.path, exc_info=exc
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ErrorResponse(error="Internal server error").model_dump(),
    )


@app.on_event("startup")
async def on_startup() -> None:
    oracle: ModerationOracle = GeminiModerationClient()
    if not settings.moderation_api_key:
        logger.warning("GEMINI_API_KEY is not set; comments will be approved without moderation")
    app.state.moderation_oracle = oracle


@app.on_event("shutdown")
async def on_shutdown() -> None:
    oracle: ModerationOracle | None = getattr(app.state, "moderation_oracle", None)
    if oracle:
        await oracle.close()


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


@app.get("/")
async def root() -> dict[str, object]:
    """Root endpoint with basic information about the API."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "endpoints": {
            "health": "/health",
            "auth": {"me": "/auth/me"},
            "comments": {
                "list": "/api/comments",
                "create": "/api/comments",
                "stats": "/api/comments/stats",
                "myComments": "/api/comments/my-comments",
                "updateRating": "/api/comments/:id/rating",
                "delete": "/api/comments/:id",
            },
            "users": {
                "profile": "/api/users/:id/profile",
                "rateUser": "/api/users/:id/ratings",
                "getUserRatings": "/api/users/:id/ratings",
                "getRatingsGiven": "/api/users/:id/ratings-given",
                "getMyRating": "/api/users/:id/my-rating",
                "deleteRating": "/api/users/:id/ratings",
                "getUserComments": "/api/users/:id/comments",
            },
        },
        "docs": "/docs",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("comment_stage.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
