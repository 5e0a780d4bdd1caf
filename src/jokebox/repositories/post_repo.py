"""Data access helpers for working with posts."""
from __future__ import annotations

import logging
from collections.abc import Iterable

from sqlalchemy import ColumnElement, case, delete, func, select
from sqlalchemy.orm import Session

from jokebox.models import Comment, ItemKind, Post, Reaction, Vote, VoteValue
from jokebox.services.listing import ListingParams, SortField, SortOrder

from .base import store_errors

__all__ = ["PostRepository"]

logger = logging.getLogger(__name__)


def _score_expr() -> ColumnElement[int]:
    return (
        select(
            func.coalesce(
                func.sum(case((Vote.value == VoteValue.PLUS, 1), else_=-1)),
                0,
            )
        )
        .where(Vote.item_kind == ItemKind.POST, Vote.item_id == Post.id)
        .scalar_subquery()
    )


def _reaction_count_expr() -> ColumnElement[int]:
    return (
        select(func.count())
        .select_from(Reaction)
        .where(Reaction.item_kind == ItemKind.POST, Reaction.item_id == Post.id)
        .scalar_subquery()
    )


def _comment_count_expr() -> ColumnElement[int]:
    return (
        select(func.count(Comment.id))
        .where(Comment.post_id == Post.id)
        .scalar_subquery()
    )


def _sort_key(field: SortField) -> ColumnElement:
    if field is SortField.MODIFIED_AT:
        return Post.modified_at
    if field is SortField.ID:
        return Post.id
    if field is SortField.SCORE:
        return _score_expr()
    if field is SortField.REACTION_COUNT:
        return _reaction_count_expr()
    if field is SortField.COMMENT_COUNT:
        return _comment_count_expr()
    return Post.created_at


class PostRepository:
    """Thin wrapper around database access for post entities."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def create(self, *, body: str, author_id: int) -> Post:
        """Insert a new post and return the persisted ORM instance."""
        post = Post(body=body, author_id=author_id)
        with store_errors(self.session, "inserting post"):
            self.session.add(post)
            self.session.flush()
        logger.debug("Inserted post %s for author %s", post.id, author_id)
        return post

    def get_by_id(self, post_id: int) -> Post | None:
        """Return a post by identifier."""
        with store_errors(self.session, "loading post"):
            return self.session.get(Post, post_id)

    def exists(self, post_id: int) -> bool:
        with store_errors(self.session, "checking post"):
            found = self.session.execute(
                select(Post.id).where(Post.id == post_id)
            ).first()
        return found is not None

    def list_page(self, params: ListingParams) -> list[Post]:
        """Return one page of posts in the requested order.

        Rows tied on the sort key are ordered by ascending id so pages are stable.
        """
        key = _sort_key(params.sort_field)
        primary = key.asc() if params.sort_order is SortOrder.ASC else key.desc()
        stmt = (
            select(Post)
            .order_by(primary, Post.id.asc())
            .limit(params.page_size)
            .offset(params.offset)
        )
        with store_errors(self.session, "listing posts"):
            return list(self.session.scalars(stmt))

    def comment_counts(self, post_ids: Iterable[int]) -> dict[int, int]:
        """Return ``post_id -> number of comment rows`` for a batch of posts."""
        ids = list(post_ids)
        if not ids:
            return {}
        stmt = (
            select(Comment.post_id, func.count(Comment.id))
            .where(Comment.post_id.in_(ids))
            .group_by(Comment.post_id)
        )
        with store_errors(self.session, "counting comments"):
            rows = self.session.execute(stmt).all()
        return {post_id: count for post_id, count in rows}

    def delete(self, post_id: int) -> None:
        """Hard-delete a post, its comments and every interaction row on them.

        Deleting an id that does not exist is a no-op.
        """
        comment_ids = select(Comment.id).where(Comment.post_id == post_id)
        with store_errors(self.session, "deleting post"):
            for model in (Vote, Reaction):
                self.session.execute(
                    delete(model).where(
                        model.item_kind == ItemKind.COMMENT,
                        model.item_id.in_(comment_ids),
                    )
                )
                self.session.execute(
                    delete(model).where(
                        model.item_kind == ItemKind.POST,
                        model.item_id == post_id,
                    )
                )
            # Children first so the self-referencing parent key never blocks.
            self.session.execute(
                delete(Comment)
                .where(Comment.post_id == post_id, Comment.parent_id.is_not(None))
            )
            self.session.execute(delete(Comment).where(Comment.post_id == post_id))
            self.session.execute(delete(Post).where(Post.id == post_id))
            self.session.flush()
        logger.debug("Deleted post %s", post_id)
