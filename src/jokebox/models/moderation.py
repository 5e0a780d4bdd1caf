"""Audit records for privileged moderation actions."""

from datetime import datetime

from sqlalchemy import BigInteger, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from jokebox.db.session import Base
from jokebox.db.time import UTCDateTime, utcnow

ACTION_DELETE_POST = "DELETE_POST"
ACTION_DELETE_COMMENT = "DELETE_COMMENT"


class ModerationLog(Base):
    """One entry per delete that succeeded only through the admin override."""

    __tablename__ = "moderation_log"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    action: Mapped[str] = mapped_column(String(32), nullable=False)
    target_type: Mapped[str] = mapped_column(String(16), nullable=False)
    target_id: Mapped[int] = mapped_column(BigInteger, nullable=False)
    performed_by: Mapped[int] = mapped_column(BigInteger, nullable=False)
    details: Mapped[str] = mapped_column(Text, nullable=False, default="")
    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime(), nullable=False, default=utcnow, index=True
    )
