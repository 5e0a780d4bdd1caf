"""Data access helpers for votes and reactions.

Every write here is a single statement guarded by the table's composite key,
so concurrent requests from the same user never produce duplicate rows.
"""
from __future__ import annotations

import logging

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from jokebox.db.time import utcnow
from jokebox.models import ItemRef, Reaction, ReactionKind, Vote, VoteValue

from .base import dialect_insert, store_errors

__all__ = ["InteractionRepository"]

logger = logging.getLogger(__name__)

_VOTE_KEY = ("item_kind", "item_id", "user_id")
_REACTION_KEY = ("item_kind", "item_id", "user_id", "kind")


class InteractionRepository:
    """Store for the polymorphic vote and reaction rows."""

    def __init__(self, session: Session) -> None:
        self.session = session

    # -- votes -------------------------------------------------------------

    def set_vote(self, item: ItemRef, user_id: int, value: VoteValue) -> None:
        """Insert or overwrite the user's vote on ``item`` in one statement.

        Repeating the stored value is accepted and leaves the row unchanged
        apart from ``modified_at``.
        """
        now = utcnow()
        stmt = dialect_insert(self.session, Vote).values(
            item_kind=item.kind,
            item_id=item.id,
            user_id=user_id,
            value=value,
            created_at=now,
            modified_at=now,
        )
        if hasattr(stmt, "on_conflict_do_update"):
            stmt = stmt.on_conflict_do_update(
                index_elements=list(_VOTE_KEY),
                set_={"value": value, "modified_at": now},
            )
        else:  # MySQL / MariaDB
            stmt = stmt.on_duplicate_key_update(value=value, modified_at=now)

        with store_errors(self.session, "setting vote"):
            self.session.execute(stmt)
        logger.debug("Vote %s set on %s %s by %s", value, item.kind, item.id, user_id)

    def remove_vote(self, item: ItemRef, user_id: int) -> bool:
        """Delete the user's vote if present; returns whether a row was removed."""
        with store_errors(self.session, "removing vote"):
            result = self.session.execute(
                delete(Vote).where(
                    Vote.item_kind == item.kind,
                    Vote.item_id == item.id,
                    Vote.user_id == user_id,
                )
            )
        removed = result.rowcount > 0
        if not removed:
            logger.debug("No vote on %s %s by %s to remove", item.kind, item.id, user_id)
        return removed

    def get_vote(self, item: ItemRef, user_id: int) -> VoteValue | None:
        with store_errors(self.session, "loading vote"):
            return self.session.scalar(
                select(Vote.value).where(
                    Vote.item_kind == item.kind,
                    Vote.item_id == item.id,
                    Vote.user_id == user_id,
                )
            )

    # -- reactions ---------------------------------------------------------

    def add_reaction(self, item: ItemRef, user_id: int, kind: ReactionKind) -> None:
        """Insert the reaction unless the user already holds it."""
        stmt = dialect_insert(self.session, Reaction).values(
            item_kind=item.kind,
            item_id=item.id,
            user_id=user_id,
            kind=kind,
            created_at=utcnow(),
        )
        if hasattr(stmt, "on_conflict_do_nothing"):
            stmt = stmt.on_conflict_do_nothing(index_elements=list(_REACTION_KEY))
        else:  # MySQL / MariaDB
            stmt = stmt.prefix_with("IGNORE")

        with store_errors(self.session, "adding reaction"):
            self.session.execute(stmt)
        logger.debug("Reaction %s added on %s %s by %s", kind, item.kind, item.id, user_id)

    def remove_reaction(self, item: ItemRef, user_id: int, kind: ReactionKind) -> bool:
        """Delete the reaction if present; absence is not an error."""
        with store_errors(self.session, "removing reaction"):
            result = self.session.execute(
                delete(Reaction).where(
                    Reaction.item_kind == item.kind,
                    Reaction.item_id == item.id,
                    Reaction.user_id == user_id,
                    Reaction.kind == kind,
                )
            )
        return result.rowcount > 0

    def has_reaction(self, item: ItemRef, user_id: int, kind: ReactionKind) -> bool:
        with store_errors(self.session, "checking reaction"):
            found = self.session.execute(
                select(Reaction.item_id).where(
                    Reaction.item_kind == item.kind,
                    Reaction.item_id == item.id,
                    Reaction.user_id == user_id,
                    Reaction.kind == kind,
                )
            ).first()
        return found is not None
