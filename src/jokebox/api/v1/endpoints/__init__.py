"""API endpoint modules for version 1."""

from .comments import router as comments_router
from .moderation import router as moderation_router
from .posts import router as posts_router
from .votes import router as votes_router

__all__ = [
    "comments_router",
    "moderation_router",
    "posts_router",
    "votes_router",
]
