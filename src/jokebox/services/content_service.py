"""Posts and comments: creation, aggregated reads, and authorized deletes."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy.orm import Session

from jokebox.core.errors import NotFoundError
from jokebox.core.security import Caller
from jokebox.core.settings import settings
from jokebox.models import Comment, ItemKind, Post
from jokebox.repositories import CommentRepository, PostRepository
from jokebox.repositories.base import store_errors
from jokebox.services.aggregator import Aggregator, ItemStats
from jokebox.services.authorization import ensure_can_delete, require_authenticated
from jokebox.services.content_safety import clean_body
from jokebox.services.listing import normalize_listing
from jokebox.services.moderation import ModerationService
from jokebox.services.threads import assemble_thread

logger = logging.getLogger(__name__)


@dataclass
class PostView:
    """A post joined with its social numbers for one viewer."""

    id: int
    body: str
    author_id: int
    created_at: datetime
    modified_at: datetime
    comment_count: int
    stats: ItemStats
    viewer_id: int | None = None


@dataclass
class CommentView:
    """A comment joined with its social numbers; deleted bodies are blank."""

    id: int
    post_id: int
    parent_id: int | None
    author_id: int
    body: str
    created_at: datetime
    modified_at: datetime
    is_deleted: bool
    is_author: bool
    stats: ItemStats
    viewer_id: int | None = None


class ContentService:
    """Application service over the post and comment stores.

    Mutations commit the session once the store calls succeed; authorization is
    checked before any store write runs.
    """

    def __init__(self, session: Session) -> None:
        self.session = session
        self.posts = PostRepository(session)
        self.comments = CommentRepository(session)
        self.aggregator = Aggregator(session)
        self.moderation = ModerationService(session)

    # -- posts -------------------------------------------------------------

    def create_post(self, caller: Caller, body: str | None) -> int:
        author_id = require_authenticated(caller)
        text = clean_body(
            body,
            min_length=settings.min_post_length,
            max_length=settings.max_body_length,
        )
        post_id = self.posts.create(body=text, author_id=author_id).id
        self._commit("creating post")
        logger.info("Post %s created by %s", post_id, author_id)
        return post_id

    def get_post(self, post_id: int, viewer_id: int | None = None) -> PostView:
        post = self.posts.get_by_id(post_id)
        if post is None:
            raise NotFoundError("post", post_id)
        return self._post_views([post], viewer_id)[0]

    def list_posts(
        self,
        page: object = None,
        page_size: object = None,
        sort_field: object = None,
        sort_order: object = None,
        viewer_id: int | None = None,
    ) -> list[PostView]:
        params = normalize_listing(
            page,
            page_size,
            sort_field,
            sort_order,
            default_page_size=settings.default_page_size,
            max_page_size=settings.max_page_size,
        )
        logger.debug("Listing posts with %s", params)
        return self._post_views(self.posts.list_page(params), viewer_id)

    def delete_post(self, caller: Caller, post_id: int) -> None:
        """Hard-delete a post with its comments and interaction rows.

        Raises:
            UnauthenticatedError: If the caller is anonymous.
            NotFoundError: If the post does not exist.
            ForbiddenError: If the caller is neither author nor privileged.
        """
        require_authenticated(caller)
        post = self.posts.get_by_id(post_id)
        if post is None:
            raise NotFoundError("post", post_id)
        author_id = post.author_id
        override = ensure_can_delete(caller, author_id, entity="post")

        self.posts.delete(post_id)
        if override:
            self.moderation.record_delete(
                ItemKind.POST,
                post_id,
                performed_by=caller.user_id,
                details=f"Deleted post by user {author_id}",
            )
        self._commit("deleting post")
        if override:
            logger.info(
                "Post %s of user %s deleted by privileged user %s",
                post_id, author_id, caller.user_id,
            )
        else:
            logger.info("Post %s deleted by its author %s", post_id, caller.user_id)

    # -- comments ----------------------------------------------------------

    def create_comment(
        self,
        caller: Caller,
        post_id: int,
        body: str | None,
        parent_id: int | None = None,
    ) -> int:
        author_id = require_authenticated(caller)
        text = clean_body(
            body,
            min_length=settings.min_comment_length,
            max_length=settings.max_body_length,
        )
        comment_id = self.comments.create(
            post_id=post_id, author_id=author_id, body=text, parent_id=parent_id
        ).id
        self._commit("creating comment")
        logger.info("Comment %s created on post %s by %s", comment_id, post_id, author_id)
        return comment_id

    def get_comment(self, comment_id: int) -> Comment:
        return self.comments.get_by_id(comment_id)

    def get_comments_for_post(
        self, post_id: int, viewer_id: int | None = None
    ) -> list[CommentView]:
        """Return the post's comments in thread order, aggregated for the viewer.

        Raises:
            NotFoundError: If the post does not exist.
        """
        if not self.posts.exists(post_id):
            raise NotFoundError("post", post_id)
        ordered = assemble_thread(self.comments.list_for_post(post_id))
        stats = self.aggregator.aggregate(
            ItemKind.COMMENT, [comment.id for comment in ordered], viewer_id
        )
        return [
            CommentView(
                id=comment.id,
                post_id=comment.post_id,
                parent_id=comment.parent_id,
                author_id=comment.author_id,
                body="" if comment.is_deleted else comment.body,
                created_at=comment.created_at,
                modified_at=comment.modified_at,
                is_deleted=comment.is_deleted,
                is_author=bool(viewer_id) and comment.author_id == viewer_id,
                stats=stats[comment.id],
                viewer_id=viewer_id or None,
            )
            for comment in ordered
        ]

    def delete_comment(self, caller: Caller, comment_id: int) -> None:
        """Soft-delete a comment; its row stays as a thread anchor.

        Raises:
            UnauthenticatedError: If the caller is anonymous.
            NotFoundError: If the comment does not exist.
            ForbiddenError: If the caller is neither author nor privileged.
        """
        require_authenticated(caller)
        comment = self.comments.get_by_id(comment_id)
        author_id = comment.author_id
        override = ensure_can_delete(caller, author_id, entity="comment")

        self.comments.soft_delete(comment_id)
        if override:
            self.moderation.record_delete(
                ItemKind.COMMENT,
                comment_id,
                performed_by=caller.user_id,
                details=f"Deleted comment by user {author_id}",
            )
        self._commit("deleting comment")
        logger.info("Comment %s deleted by %s", comment_id, caller.user_id)

    # -- helpers -----------------------------------------------------------

    def _post_views(self, posts: list[Post], viewer_id: int | None) -> list[PostView]:
        ids = [post.id for post in posts]
        stats = self.aggregator.aggregate(ItemKind.POST, ids, viewer_id)
        counts = self.posts.comment_counts(ids)
        return [
            PostView(
                id=post.id,
                body=post.body,
                author_id=post.author_id,
                created_at=post.created_at,
                modified_at=post.modified_at,
                comment_count=counts.get(post.id, 0),
                stats=stats[post.id],
                viewer_id=viewer_id or None,
            )
            for post in posts
        ]

    def _commit(self, action: str) -> None:
        with store_errors(self.session, action):
            self.session.commit()
