"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .comment import CommentCreate, CommentResponse
from .common import MAX_ID, CreatedResponse
from .interaction import (
    MyVoteResponse,
    ReactionRequest,
    ReactionToggleResponse,
    SocialStats,
    ViewerState,
    VoteRequest,
)
from .moderation import ModerationLogResponse
from .post import PostCreate, PostResponse, ThreadResponse

__all__ = [
    "CommentCreate", "CommentResponse",
    "CreatedResponse", "MAX_ID",
    "ModerationLogResponse",
    "MyVoteResponse", "ReactionRequest", "ReactionToggleResponse",
    "SocialStats", "ViewerState", "VoteRequest",
    "PostCreate", "PostResponse", "ThreadResponse",
]
