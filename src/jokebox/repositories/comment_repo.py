"""Data access helpers for working with comments."""
from __future__ import annotations

import logging

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from jokebox.core.errors import NotFoundError
from jokebox.models import Comment, Post

from .base import store_errors

__all__ = ["CommentRepository"]

logger = logging.getLogger(__name__)


class CommentRepository:
    """Thin wrapper around database access for comment entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def create(
        self,
        *,
        post_id: int,
        author_id: int,
        body: str,
        parent_id: int | None = None,
    ) -> Comment:
        """Insert a comment after checking its post and parent references.

        Raises:
            NotFoundError: If the post does not exist, or ``parent_id`` is given
                and does not name a comment on the same post.
        """
        with store_errors(self.session, "inserting comment"):
            post_found = self.session.execute(
                select(Post.id).where(Post.id == post_id)
            ).first()
            if post_found is None:
                logger.info("Post %s not found for new comment", post_id)
                raise NotFoundError("post", post_id)

            if parent_id is not None:
                parent_found = self.session.execute(
                    select(Comment.id).where(
                        Comment.id == parent_id,
                        Comment.post_id == post_id,
                    )
                ).first()
                if parent_found is None:
                    logger.info("Parent comment %s not found on post %s", parent_id, post_id)
                    raise NotFoundError("parent comment", parent_id)

            comment = Comment(
                post_id=post_id,
                parent_id=parent_id,
                author_id=author_id,
                body=body,
            )
            self.session.add(comment)
            self.session.flush()
        logger.debug("Inserted comment %s on post %s", comment.id, post_id)
        return comment

    def get_by_id(self, comment_id: int) -> Comment:
        """Return a comment or raise :class:`NotFoundError`."""
        with store_errors(self.session, "loading comment"):
            comment = self.session.get(Comment, comment_id)
        if comment is None:
            raise NotFoundError("comment", comment_id)
        return comment

    def exists(self, comment_id: int) -> bool:
        with store_errors(self.session, "checking comment"):
            found = self.session.execute(
                select(Comment.id).where(Comment.id == comment_id)
            ).first()
        return found is not None

    def list_for_post(self, post_id: int) -> list[Comment]:
        """Return every comment row of a post, soft-deleted ones included."""
        stmt = select(Comment).where(Comment.post_id == post_id).order_by(Comment.id)
        with store_errors(self.session, "listing comments"):
            return list(self.session.scalars(stmt))

    def soft_delete(self, comment_id: int) -> None:
        """Flag a comment as deleted, keeping its row as a thread anchor.

        Raises:
            NotFoundError: If no comment has this id.
        """
        with store_errors(self.session, "deleting comment"):
            result = self.session.execute(
                update(Comment)
                .where(Comment.id == comment_id)
                .values(is_deleted=True)
                .execution_options(synchronize_session="fetch")
            )
        if result.rowcount == 0:
            logger.info("Comment %s not found for deletion", comment_id)
            raise NotFoundError("comment", comment_id)
        logger.debug("Soft-deleted comment %s", comment_id)
