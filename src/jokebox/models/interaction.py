"""Models capturing votes and reactions on posts and comments."""

from datetime import datetime

from sqlalchemy import BigInteger, Index, Integer
from sqlalchemy.orm import Mapped, mapped_column

from jokebox.db.session import Base
from jokebox.db.time import UTCDateTime, utcnow

from .kinds import ItemKind, ReactionKind, VoteValue, enum_column_type


class Vote(Base):
    """Per-user vote on a post or comment.

    Interaction rows are polymorphic over ``item_kind`` and therefore carry no
    foreign key; the post store removes them when their item is hard-deleted.
    """

    __tablename__ = "vote"
    __table_args__ = (Index("ix_vote_item", "item_kind", "item_id"),)

    # Composite primary key prevents duplicate votes from the same user.
    item_kind: Mapped[ItemKind] = mapped_column(enum_column_type(ItemKind), primary_key=True)
    item_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(BigInteger, primary_key=True)

    value: Mapped[VoteValue] = mapped_column(enum_column_type(VoteValue), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime(), nullable=False, default=utcnow
    )
    modified_at: Mapped[datetime] = mapped_column(
        UTCDateTime(), nullable=False, default=utcnow
    )


class Reaction(Base):
    """A single reaction kind held by a user on an item; existence is the state."""

    __tablename__ = "reaction"
    __table_args__ = (Index("ix_reaction_item", "item_kind", "item_id"),)

    item_kind: Mapped[ItemKind] = mapped_column(enum_column_type(ItemKind), primary_key=True)
    item_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(BigInteger, primary_key=True)
    kind: Mapped[ReactionKind] = mapped_column(enum_column_type(ReactionKind), primary_key=True)

    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime(), nullable=False, default=utcnow
    )
