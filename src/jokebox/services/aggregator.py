"""Query-time aggregation of votes and reactions for batches of items."""
from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from sqlalchemy import case, func, select
from sqlalchemy.orm import Session

from jokebox.models import ItemKind, Reaction, ReactionKind, Vote, VoteValue
from jokebox.repositories.base import store_errors

logger = logging.getLogger(__name__)


@dataclass
class ItemStats:
    """Derived social numbers for one item as seen by one viewer."""

    score: int = 0
    reaction_counts: dict[ReactionKind, int] = field(default_factory=dict)
    viewer_vote: VoteValue | None = None
    viewer_reactions: list[ReactionKind] = field(default_factory=list)


class Aggregator:
    """Computes :class:`ItemStats` for a batch of items of one kind.

    Every call issues a fixed number of grouped queries regardless of how many
    items are requested: score sums, ``(item_id, kind, count)`` reaction rows,
    and, for an identified viewer, their own vote and reactions.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def aggregate(
        self,
        kind: ItemKind,
        item_ids: Iterable[int],
        viewer_id: int | None = None,
    ) -> dict[int, ItemStats]:
        ids = sorted(set(item_ids))
        stats = {item_id: ItemStats() for item_id in ids}
        if not ids:
            return stats

        with store_errors(self.session, f"aggregating {kind} interactions"):
            for item_id, score in self._scores(kind, ids):
                stats[item_id].score = int(score)

            for item_id, reaction, count in self._reaction_counts(kind, ids):
                stats[item_id].reaction_counts[ReactionKind(reaction)] = int(count)

            # Viewer id 0 is treated as anonymous.
            if viewer_id:
                for item_id, value in self._viewer_votes(kind, ids, viewer_id):
                    stats[item_id].viewer_vote = VoteValue(value)
                for item_id, reaction in self._viewer_reactions(kind, ids, viewer_id):
                    stats[item_id].viewer_reactions.append(ReactionKind(reaction))

        logger.debug("Aggregated %d %s item(s) for viewer %s", len(ids), kind, viewer_id)
        return stats

    def aggregate_one(
        self, kind: ItemKind, item_id: int, viewer_id: int | None = None
    ) -> ItemStats:
        return self.aggregate(kind, [item_id], viewer_id)[item_id]

    def _scores(self, kind: ItemKind, ids: list[int]):
        weight = case((Vote.value == VoteValue.PLUS, 1), else_=-1)
        stmt = (
            select(Vote.item_id, func.sum(weight))
            .where(Vote.item_kind == kind, Vote.item_id.in_(ids))
            .group_by(Vote.item_id)
        )
        return self.session.execute(stmt).all()

    def _reaction_counts(self, kind: ItemKind, ids: list[int]):
        stmt = (
            select(Reaction.item_id, Reaction.kind, func.count())
            .where(Reaction.item_kind == kind, Reaction.item_id.in_(ids))
            .group_by(Reaction.item_id, Reaction.kind)
            .order_by(Reaction.item_id, Reaction.kind)
        )
        return self.session.execute(stmt).all()

    def _viewer_votes(self, kind: ItemKind, ids: list[int], viewer_id: int):
        stmt = select(Vote.item_id, Vote.value).where(
            Vote.item_kind == kind,
            Vote.item_id.in_(ids),
            Vote.user_id == viewer_id,
        )
        return self.session.execute(stmt).all()

    def _viewer_reactions(self, kind: ItemKind, ids: list[int], viewer_id: int):
        stmt = (
            select(Reaction.item_id, Reaction.kind)
            .where(
                Reaction.item_kind == kind,
                Reaction.item_id.in_(ids),
                Reaction.user_id == viewer_id,
            )
            .order_by(Reaction.item_id, Reaction.created_at, Reaction.kind)
        )
        return self.session.execute(stmt).all()
