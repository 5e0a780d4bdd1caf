"""Tests for the SQLAlchemy-backed stores."""

import pytest
from sqlalchemy import func, select

from jokebox.core.errors import NotFoundError
from jokebox.models import Comment, ItemRef, Post, Reaction, ReactionKind, Vote, VoteValue
from jokebox.repositories import CommentRepository, InteractionRepository, PostRepository
from jokebox.services.listing import normalize_listing


@pytest.fixture()
def interactions(db_session):
    return InteractionRepository(db_session)


def _vote_rows(db_session, item):
    return db_session.scalars(
        select(Vote).where(Vote.item_kind == item.kind, Vote.item_id == item.id)
    ).all()


class TestVotes:
    def test_set_vote_twice_keeps_one_row(self, db_session, interactions, test_post):
        item = ItemRef.post(test_post.id)
        interactions.set_vote(item, 2, VoteValue.PLUS)
        interactions.set_vote(item, 2, VoteValue.PLUS)

        rows = _vote_rows(db_session, item)
        assert len(rows) == 1
        assert rows[0].value is VoteValue.PLUS

    def test_switching_overwrites_value(self, db_session, interactions, test_post):
        item = ItemRef.post(test_post.id)
        interactions.set_vote(item, 2, VoteValue.PLUS)
        interactions.set_vote(item, 2, VoteValue.MINUS)

        assert len(_vote_rows(db_session, item)) == 1
        assert interactions.get_vote(item, 2) is VoteValue.MINUS

    def test_remove_vote(self, interactions, test_post):
        item = ItemRef.post(test_post.id)
        interactions.set_vote(item, 2, VoteValue.PLUS)

        assert interactions.remove_vote(item, 2) is True
        assert interactions.get_vote(item, 2) is None

    def test_remove_absent_vote_is_not_an_error(self, interactions, test_post):
        assert interactions.remove_vote(ItemRef.post(test_post.id), 2) is False

    def test_votes_are_scoped_by_item_kind(self, interactions, test_post):
        interactions.set_vote(ItemRef.post(test_post.id), 2, VoteValue.PLUS)
        assert interactions.get_vote(ItemRef.comment(test_post.id), 2) is None


class TestReactions:
    def test_add_is_idempotent(self, db_session, interactions, test_post):
        item = ItemRef.post(test_post.id)
        interactions.add_reaction(item, 2, ReactionKind.LAUGH)
        interactions.add_reaction(item, 2, ReactionKind.LAUGH)

        count = db_session.scalar(select(func.count()).select_from(Reaction))
        assert count == 1
        assert interactions.has_reaction(item, 2, ReactionKind.LAUGH)

    def test_user_may_hold_several_kinds(self, interactions, test_post):
        item = ItemRef.post(test_post.id)
        interactions.add_reaction(item, 2, ReactionKind.LAUGH)
        interactions.add_reaction(item, 2, ReactionKind.FIRE)

        assert interactions.has_reaction(item, 2, ReactionKind.LAUGH)
        assert interactions.has_reaction(item, 2, ReactionKind.FIRE)
        assert not interactions.has_reaction(item, 2, ReactionKind.POOP)

    def test_remove_absent_is_a_no_op(self, interactions, test_post):
        item = ItemRef.post(test_post.id)
        assert interactions.remove_reaction(item, 2, ReactionKind.HEART) is False

    def test_remove_present(self, interactions, test_post):
        item = ItemRef.post(test_post.id)
        interactions.add_reaction(item, 2, ReactionKind.HEART)

        assert interactions.remove_reaction(item, 2, ReactionKind.HEART) is True
        assert not interactions.has_reaction(item, 2, ReactionKind.HEART)


class TestComments:
    def test_create_on_missing_post(self, db_session):
        with pytest.raises(NotFoundError) as excinfo:
            CommentRepository(db_session).create(post_id=999, author_id=1, body="hi")
        assert excinfo.value.entity == "post"

    def test_parent_must_belong_to_same_post(self, db_session, test_post, make_comment):
        other_post = Post(body="Another one", author_id=1)
        db_session.add(other_post)
        db_session.commit()
        foreign_parent = make_comment(other_post)

        with pytest.raises(NotFoundError) as excinfo:
            CommentRepository(db_session).create(
                post_id=test_post.id, author_id=1, body="hi", parent_id=foreign_parent.id
            )
        assert excinfo.value.entity == "parent comment"

    def test_soft_delete_keeps_row(self, db_session, test_post, make_comment):
        comment = make_comment(test_post)
        repo = CommentRepository(db_session)

        repo.soft_delete(comment.id)
        db_session.commit()

        stored = repo.get_by_id(comment.id)
        assert stored.is_deleted is True
        assert stored.body == "To get to the other side."

    def test_soft_delete_missing(self, db_session):
        with pytest.raises(NotFoundError):
            CommentRepository(db_session).soft_delete(12345)


class TestPosts:
    def test_delete_removes_comments_and_interactions(
        self, db_session, interactions, test_post, make_comment
    ):
        root = make_comment(test_post)
        make_comment(test_post, "reply", parent=root)
        interactions.set_vote(ItemRef.post(test_post.id), 2, VoteValue.PLUS)
        interactions.set_vote(ItemRef.comment(root.id), 3, VoteValue.MINUS)
        interactions.add_reaction(ItemRef.comment(root.id), 3, ReactionKind.FIRE)

        PostRepository(db_session).delete(test_post.id)
        db_session.commit()

        assert db_session.scalar(select(func.count()).select_from(Post)) == 0
        assert db_session.scalar(select(func.count()).select_from(Comment)) == 0
        assert db_session.scalar(select(func.count()).select_from(Vote)) == 0
        assert db_session.scalar(select(func.count()).select_from(Reaction)) == 0

    def test_delete_missing_is_a_no_op(self, db_session, test_post):
        PostRepository(db_session).delete(test_post.id + 100)
        db_session.commit()
        assert PostRepository(db_session).exists(test_post.id)

    def test_list_page_sorts_by_score_with_id_tie_break(self, db_session, interactions):
        posts = [Post(body=f"joke {i}", author_id=1) for i in range(4)]
        db_session.add_all(posts)
        db_session.commit()
        interactions.set_vote(ItemRef.post(posts[2].id), 5, VoteValue.PLUS)
        interactions.set_vote(ItemRef.post(posts[3].id), 5, VoteValue.MINUS)

        page = PostRepository(db_session).list_page(
            normalize_listing(sort_field="score", sort_order="desc")
        )
        assert [p.id for p in page] == [posts[2].id, posts[0].id, posts[1].id, posts[3].id]

    def test_list_page_offsets(self, db_session):
        posts = [Post(body=f"joke {i}", author_id=1) for i in range(5)]
        db_session.add_all(posts)
        db_session.commit()

        page = PostRepository(db_session).list_page(
            normalize_listing(page=2, page_size=2, sort_field="id", sort_order="asc")
        )
        assert [p.id for p in page] == [posts[2].id, posts[3].id]

    def test_comment_counts_include_deleted(self, db_session, test_post, make_comment):
        make_comment(test_post)
        make_comment(test_post, is_deleted=True)

        counts = PostRepository(db_session).comment_counts([test_post.id, 999])
        assert counts == {test_post.id: 2}
