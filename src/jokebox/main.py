"""Main entry point for the Jokebox application."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from jokebox.api.v1 import (
    comments_router,
    moderation_router,
    posts_router,
    votes_router,
)
from jokebox.core.errors import JokeboxError
from jokebox.core.logging import configure_logging
from jokebox.core.settings import settings

configure_logging(settings)
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="Jokebox API",
    description="Posts, threaded comments, votes and reactions",
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


@app.exception_handler(JokeboxError)
async def jokebox_error_handler(request: Request, exc: JokeboxError) -> JSONResponse:
    """Render core errors as ``{"detail": message}`` with their mapped status."""
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    else:
        logger.debug("%s %s rejected: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


# Include API routers
app.include_router(posts_router, prefix="/api/v1")
app.include_router(comments_router, prefix="/api/v1")
app.include_router(votes_router, prefix="/api/v1")
app.include_router(moderation_router, prefix="/api/v1")


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "description": "Posts, threaded comments, votes and reactions",
        "docs": "/docs",
        "redoc": "/redoc",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("jokebox.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
