"""Vote, reaction and aggregated social-state schemas."""

from pydantic import BaseModel, Field

from jokebox.models import ItemKind, ItemRef
from jokebox.services.aggregator import ItemStats

from .common import MAX_ID


class ViewerState(BaseModel):
    """The requesting viewer's own vote and reactions on an item."""

    vote: str | None = None
    reactions: list[str] = Field(default_factory=list)


class SocialStats(BaseModel):
    """Aggregated interaction numbers for an item.

    ``viewer_state`` is omitted (null) for anonymous viewers.
    """

    score: int = 0
    reaction_counts: dict[str, int] = Field(default_factory=dict)
    viewer_state: ViewerState | None = None

    @classmethod
    def from_stats(cls, stats: ItemStats, viewer_id: int | None) -> "SocialStats":
        viewer_state = None
        if viewer_id:
            viewer_state = ViewerState(
                vote=stats.viewer_vote.value if stats.viewer_vote else None,
                reactions=[kind.value for kind in stats.viewer_reactions],
            )
        return cls(
            score=stats.score,
            reaction_counts={kind.value: count for kind, count in stats.reaction_counts.items()},
            viewer_state=viewer_state,
        )


class _ItemTarget(BaseModel):
    item_kind: ItemKind = Field(..., description="post or comment")
    item_id: int = Field(..., ge=1, le=MAX_ID)

    @property
    def item(self) -> ItemRef:
        return ItemRef(self.item_kind, self.item_id)


class VoteRequest(_ItemTarget):
    """Schema for casting a vote; an empty ``vote`` removes the caller's vote."""

    vote: str = Field("", description="plus, minus, or empty to remove")


class ReactionRequest(_ItemTarget):
    """Schema for toggling a reaction."""

    reaction: str = Field(..., description="One of the supported reaction kinds")


class MyVoteResponse(BaseModel):
    vote: str | None = None


class ReactionToggleResponse(BaseModel):
    """Result of a reaction toggle: whether the caller now holds it."""

    reaction: str
    active: bool
