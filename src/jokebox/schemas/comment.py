"""Comment-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from jokebox.services.content_service import CommentView

from .common import MAX_ID
from .interaction import SocialStats


class CommentCreate(BaseModel):
    """Schema for replying to a post or to one of its comments."""

    body: str = Field(..., description="Comment text")
    parent_id: int | None = Field(
        None, ge=1, le=MAX_ID, description="Comment being replied to"
    )


class CommentResponse(BaseModel):
    """Schema for an aggregated comment; deleted comments have an empty body."""

    id: int
    post_id: int
    parent_id: int | None
    author_id: int
    body: str
    created_at: datetime
    modified_at: datetime
    is_deleted: bool
    is_author: bool
    social: SocialStats

    model_config = ConfigDict(from_attributes=True)

    @classmethod
    def from_view(cls, view: CommentView) -> "CommentResponse":
        return cls(
            id=view.id,
            post_id=view.post_id,
            parent_id=view.parent_id,
            author_id=view.author_id,
            body=view.body,
            created_at=view.created_at,
            modified_at=view.modified_at,
            is_deleted=view.is_deleted,
            is_author=view.is_author,
            social=SocialStats.from_stats(view.stats, view.viewer_id),
        )
