"""Tests for the content service: posts, comments and deletes."""

from datetime import UTC, datetime, timedelta

import pytest
from sqlalchemy import select

from jokebox.core.errors import (
    ForbiddenError,
    NotFoundError,
    UnauthenticatedError,
    ValidationError,
)
from jokebox.core.security import ANONYMOUS
from jokebox.models import Comment, ModerationLog, Post

T0 = datetime(2024, 1, 1, tzinfo=UTC)


class TestPosts:
    def test_create_and_get(self, content_service, author):
        post_id = content_service.create_post(author, "  A pun walks into a bar  ")
        view = content_service.get_post(post_id)

        assert view.body == "A pun walks into a bar"
        assert view.author_id == author.user_id
        assert view.comment_count == 0
        assert view.stats.score == 0

    def test_create_requires_identity(self, content_service):
        with pytest.raises(UnauthenticatedError):
            content_service.create_post(ANONYMOUS, "A perfectly fine joke")

    def test_create_rejects_unsafe_body(self, content_service, author):
        with pytest.raises(ValidationError):
            content_service.create_post(author, "<script>alert('boo')</script>")

    def test_create_rejects_short_body(self, content_service, author):
        with pytest.raises(ValidationError):
            content_service.create_post(author, "ha")

    def test_get_missing(self, content_service):
        with pytest.raises(NotFoundError, match="Post not found"):
            content_service.get_post(404)

    def test_list_with_garbage_params_matches_defaults(self, content_service, author):
        for i in range(12):
            content_service.create_post(author, f"joke number {i}")

        garbage = content_service.list_posts(-1, 9999, "dropColumn", "sideways", viewer_id=2)
        default = content_service.list_posts(1, 10, "created_at", "desc", viewer_id=2)

        assert len(default) == 10
        assert [v.id for v in garbage] == [v.id for v in default]

    def test_list_sorted_by_comment_count(self, content_service, author, other_user):
        quiet = content_service.create_post(author, "quiet joke")
        busy = content_service.create_post(author, "busy joke")
        content_service.create_comment(other_user, busy, "lol")

        views = content_service.list_posts(sort_field="comment_count", sort_order="desc")

        assert [v.id for v in views] == [busy, quiet]
        assert views[0].comment_count == 1


class TestDeletePost:
    def test_author_deletes(self, db_session, content_service, author):
        post_id = content_service.create_post(author, "short-lived joke")
        content_service.delete_post(author, post_id)

        assert db_session.get(Post, post_id) is None
        assert db_session.scalars(select(ModerationLog)).all() == []

    def test_stranger_is_forbidden_and_post_survives(
        self, content_service, author, other_user
    ):
        post_id = content_service.create_post(author, "resilient joke")

        with pytest.raises(ForbiddenError):
            content_service.delete_post(other_user, post_id)

        assert content_service.get_post(post_id).body == "resilient joke"

    def test_admin_override_is_logged(self, db_session, content_service, author, admin):
        post_id = content_service.create_post(author, "contentious joke")
        content_service.delete_post(admin, post_id)

        assert db_session.get(Post, post_id) is None
        (entry,) = db_session.scalars(select(ModerationLog)).all()
        assert entry.action == "DELETE_POST"
        assert entry.target_type == "post"
        assert entry.target_id == post_id
        assert entry.performed_by == admin.user_id

    def test_missing_post(self, content_service, author):
        with pytest.raises(NotFoundError):
            content_service.delete_post(author, 999)

    def test_anonymous(self, content_service, test_post):
        with pytest.raises(UnauthenticatedError):
            content_service.delete_post(ANONYMOUS, test_post.id)


class TestComments:
    def test_soft_delete_preserves_thread_shape(
        self, content_service, test_post, author, other_user
    ):
        a = content_service.create_comment(author, test_post.id, "root A")
        b = content_service.create_comment(other_user, test_post.id, "reply B", parent_id=a)
        c = content_service.create_comment(author, test_post.id, "root C")

        content_service.delete_comment(other_user, b)
        views = content_service.get_comments_for_post(test_post.id)

        assert [v.id for v in views] == [a, b, c]
        assert views[1].body == ""
        assert views[1].is_deleted is True
        assert views[0].body == "root A"

    def test_groups_by_root_id_not_creation_order(
        self, db_session, content_service, test_post
    ):
        db_session.add_all(
            [
                Comment(id=5, post_id=test_post.id, author_id=1, body="five", created_at=T0),
                Comment(
                    id=2,
                    post_id=test_post.id,
                    author_id=1,
                    body="two",
                    created_at=T0 + timedelta(minutes=1),
                ),
            ]
        )
        db_session.flush()
        db_session.add(
            Comment(
                id=9,
                post_id=test_post.id,
                parent_id=5,
                author_id=2,
                body="reply to five",
                created_at=T0 + timedelta(minutes=2),
            )
        )
        db_session.commit()

        views = content_service.get_comments_for_post(test_post.id)
        assert [v.id for v in views] == [2, 5, 9]

    def test_is_author_flag(self, content_service, test_post, author, other_user):
        content_service.create_comment(author, test_post.id, "mine")
        content_service.create_comment(other_user, test_post.id, "theirs")

        views = content_service.get_comments_for_post(test_post.id, viewer_id=author.user_id)
        assert [v.is_author for v in views] == [True, False]

        anonymous = content_service.get_comments_for_post(test_post.id)
        assert not any(v.is_author for v in anonymous)

    def test_comments_on_missing_post(self, content_service, author):
        with pytest.raises(NotFoundError):
            content_service.create_comment(author, 999, "hello")
        with pytest.raises(NotFoundError):
            content_service.get_comments_for_post(999)

    def test_unknown_parent(self, content_service, test_post, author):
        with pytest.raises(NotFoundError, match="Parent comment"):
            content_service.create_comment(author, test_post.id, "hi", parent_id=12345)

    def test_stranger_cannot_delete(self, content_service, test_post, author, other_user):
        comment_id = content_service.create_comment(author, test_post.id, "keep me")
        with pytest.raises(ForbiddenError):
            content_service.delete_comment(other_user, comment_id)
        assert content_service.get_comment(comment_id).is_deleted is False

    def test_admin_delete_is_logged(
        self, db_session, content_service, test_post, author, admin
    ):
        comment_id = content_service.create_comment(author, test_post.id, "rude remark")
        content_service.delete_comment(admin, comment_id)

        (entry,) = db_session.scalars(select(ModerationLog)).all()
        assert entry.action == "DELETE_COMMENT"
        assert entry.target_id == comment_id

    def test_delete_missing_comment(self, content_service, author):
        with pytest.raises(NotFoundError):
            content_service.delete_comment(author, 999)
