"""Stores backing the content and interaction engine."""

from .comment_repo import CommentRepository
from .interaction_repo import InteractionRepository
from .post_repo import PostRepository

__all__ = ["CommentRepository", "InteractionRepository", "PostRepository"]
