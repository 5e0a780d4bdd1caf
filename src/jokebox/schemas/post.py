"""Post-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from jokebox.services.content_service import PostView

from .comment import CommentResponse
from .interaction import SocialStats


class PostCreate(BaseModel):
    """Schema for creating a new post."""

    body: str = Field(..., description="Post text; trimmed and checked before storage")


class PostResponse(BaseModel):
    """Schema for an aggregated post returned by the API."""

    id: int
    body: str
    author_id: int
    created_at: datetime
    modified_at: datetime
    comment_count: int
    social: SocialStats

    model_config = ConfigDict(from_attributes=True)

    @classmethod
    def from_view(cls, view: PostView) -> "PostResponse":
        return cls(
            id=view.id,
            body=view.body,
            author_id=view.author_id,
            created_at=view.created_at,
            modified_at=view.modified_at,
            comment_count=view.comment_count,
            social=SocialStats.from_stats(view.stats, view.viewer_id),
        )


class ThreadResponse(BaseModel):
    """A post together with its ordered comments."""

    post: PostResponse
    comments: list[CommentResponse]
