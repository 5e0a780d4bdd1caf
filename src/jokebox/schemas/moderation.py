"""Moderation log schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class ModerationLogResponse(BaseModel):
    """One recorded privileged delete."""

    id: int
    action: str
    target_type: str
    target_id: int
    performed_by: int
    details: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
