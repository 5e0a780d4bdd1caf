"""Votes and reactions on posts and comments."""
from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from jokebox.core.errors import NotFoundError, ValidationError
from jokebox.core.security import Caller
from jokebox.models import ItemKind, ItemRef, ReactionKind, VoteValue
from jokebox.repositories import CommentRepository, InteractionRepository, PostRepository
from jokebox.repositories.base import store_errors
from jokebox.services.authorization import require_authenticated

logger = logging.getLogger(__name__)


def parse_vote(value: str | None) -> VoteValue | None:
    """Map the wire vote to a :class:`VoteValue`; empty means "no vote".

    Raises:
        ValidationError: For anything outside ``plus``, ``minus`` or empty.
    """
    if value is None or value == "":
        return None
    try:
        return VoteValue(value)
    except ValueError as err:
        raise ValidationError(f"Invalid vote type: {value}") from err


def parse_reaction(value: str | None) -> ReactionKind:
    """Validate a reaction against the closed, case-sensitive vocabulary."""
    try:
        return ReactionKind(value)
    except ValueError as err:
        raise ValidationError(f"Invalid reaction type: {value}") from err


class InteractionService:
    """Application service over the interaction store."""

    def __init__(self, session: Session) -> None:
        self.session = session
        self.interactions = InteractionRepository(session)
        self.posts = PostRepository(session)
        self.comments = CommentRepository(session)

    def cast_vote(self, caller: Caller, item: ItemRef, vote: str | None) -> VoteValue | None:
        """Set the caller's vote, or remove it when ``vote`` is empty.

        Returns:
            The vote now stored, ``None`` after a removal.
        """
        user_id = require_authenticated(caller)
        value = parse_vote(vote)
        self._ensure_item(item)

        if value is None:
            self.interactions.remove_vote(item, user_id)
        else:
            self.interactions.set_vote(item, user_id, value)
        self._commit("voting")
        logger.info("User %s voted %s on %s %s", user_id, value or "none", item.kind, item.id)
        return value

    def get_my_vote(self, caller: Caller, item: ItemRef) -> VoteValue | None:
        user_id = require_authenticated(caller)
        self._ensure_item(item)
        return self.interactions.get_vote(item, user_id)

    def toggle_reaction(self, caller: Caller, item: ItemRef, reaction: str | None) -> bool:
        """Flip the caller's reaction and return whether it is now held.

        The read-then-write is not atomic. Two concurrent identical requests
        may both add or both remove; both operations are idempotent, so the
        row ends in one of its two valid states.
        """
        user_id = require_authenticated(caller)
        kind = parse_reaction(reaction)
        self._ensure_item(item)

        if self.interactions.has_reaction(item, user_id, kind):
            self.interactions.remove_reaction(item, user_id, kind)
            active = False
        else:
            self.interactions.add_reaction(item, user_id, kind)
            active = True
        self._commit("reacting")
        logger.info(
            "User %s %s reaction %s on %s %s",
            user_id, "added" if active else "removed", kind, item.kind, item.id,
        )
        return active

    def _ensure_item(self, item: ItemRef) -> None:
        if item.kind is ItemKind.POST:
            found = self.posts.exists(item.id)
        else:
            found = self.comments.exists(item.id)
        if not found:
            raise NotFoundError(item.kind.value, item.id)

    def _commit(self, action: str) -> None:
        with store_errors(self.session, action):
            self.session.commit()
