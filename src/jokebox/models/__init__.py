# src/jokebox/models/__init__.py
"""SQLAlchemy models for the Jokebox application."""

from .comment import Comment
from .interaction import Reaction, Vote
from .kinds import ItemKind, ItemRef, ReactionKind, VoteValue
from .moderation import ModerationLog
from .post import Post

__all__ = [
    "Comment",
    "ItemKind", "ItemRef", "ReactionKind", "VoteValue",
    "ModerationLog",
    "Post",
    "Reaction", "Vote",
]
