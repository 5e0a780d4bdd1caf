"""Closed vocabularies shared by the content and interaction tables."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

import sqlalchemy as sa


class ItemKind(StrEnum):
    """Kind of content item an interaction row points at."""

    POST = "post"
    COMMENT = "comment"


class VoteValue(StrEnum):
    """Single-valued up/down vote."""

    PLUS = "plus"
    MINUS = "minus"

    @property
    def weight(self) -> int:
        return 1 if self is VoteValue.PLUS else -1


class ReactionKind(StrEnum):
    """Emoji-style reactions; validated case-sensitively against this set."""

    LAUGH = "laugh"
    HEART = "heart"
    NEUTRAL = "neutral"
    SURPRISED = "surprised"
    FIRE = "fire"
    POOP = "poop"
    THUMBS_UP = "thumbs_up"
    THUMBS_DOWN = "thumbs_down"
    ANGRY = "angry"
    MONKEY = "monkey"


@dataclass(frozen=True)
class ItemRef:
    """Reference to a post or a comment, the target of votes and reactions."""

    kind: ItemKind
    id: int

    @classmethod
    def post(cls, post_id: int) -> ItemRef:
        return cls(ItemKind.POST, post_id)

    @classmethod
    def comment(cls, comment_id: int) -> ItemRef:
        return cls(ItemKind.COMMENT, comment_id)


def enum_column_type(enum_cls: type[StrEnum]) -> sa.Enum:
    """Store a StrEnum by value in a VARCHAR guarded by a CHECK constraint."""
    return sa.Enum(
        enum_cls,
        native_enum=False,
        create_constraint=True,
        length=max(len(member.value) for member in enum_cls),
        values_callable=lambda members: [member.value for member in members],
        validate_strings=True,
    )
