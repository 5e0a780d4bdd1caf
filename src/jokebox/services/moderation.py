"""Moderation history for deletes performed through the privileged override."""
from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from jokebox.core.settings import settings
from jokebox.models import ItemKind, ModerationLog
from jokebox.models.moderation import ACTION_DELETE_COMMENT, ACTION_DELETE_POST
from jokebox.repositories.base import store_errors
from jokebox.services.listing import normalize_page, normalize_page_size

logger = logging.getLogger(__name__)

_DELETE_ACTIONS = {
    ItemKind.POST: ACTION_DELETE_POST,
    ItemKind.COMMENT: ACTION_DELETE_COMMENT,
}


class ModerationService:
    """Records and lists moderation log entries."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def record_delete(
        self, kind: ItemKind, item_id: int, *, performed_by: int, details: str = ""
    ) -> ModerationLog:
        """Stage a log row for an override delete; the caller commits."""
        entry = ModerationLog(
            action=_DELETE_ACTIONS[kind],
            target_type=kind.value,
            target_id=item_id,
            performed_by=performed_by,
            details=details,
        )
        with store_errors(self.session, "recording moderation log"):
            self.session.add(entry)
            self.session.flush()
        logger.info(
            "Moderation %s on %s %s by %s", entry.action, kind, item_id, performed_by
        )
        return entry

    def list_logs(self, page: object = None, page_size: object = None) -> list[ModerationLog]:
        """Return one page of entries, newest first."""
        size = normalize_page_size(
            page_size, settings.moderation_page_size, settings.max_page_size
        )
        page_number = normalize_page(page, size)
        stmt = (
            select(ModerationLog)
            .order_by(ModerationLog.created_at.desc(), ModerationLog.id.desc())
            .limit(size)
            .offset((page_number - 1) * size)
        )
        with store_errors(self.session, "listing moderation logs"):
            return list(self.session.scalars(stmt))
