"""Ordering of a post's comments into a renderable two-level thread.

Comments are grouped under their root ancestor. Groups appear in ascending root
id; inside a group the root comes first and replies follow in creation order.
Deeper reply chains are resolved to their top-most ancestor, so a reply to a
reply still trails the root it ultimately hangs from.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import datetime
from typing import Protocol, TypeVar


class ThreadNode(Protocol):
    id: int
    parent_id: int | None
    created_at: datetime


NodeT = TypeVar("NodeT", bound=ThreadNode)


def root_of(comment_id: int, parents: Mapping[int, int | None]) -> int:
    """Walk the parent chain of ``comment_id`` up to its top-most ancestor.

    A parent id missing from ``parents`` is returned as the root, and a cycle
    ends the walk at the node where it was detected.
    """
    current = comment_id
    seen = {current}
    while True:
        parent = parents.get(current)
        if parent is None or parent in seen:
            return current
        if parent not in parents:
            return parent
        seen.add(parent)
        current = parent


def assemble_thread(comments: Sequence[NodeT]) -> list[NodeT]:
    """Return ``comments`` in thread order without mutating the input."""
    parents = {comment.id: comment.parent_id for comment in comments}
    roots = {comment.id: root_of(comment.id, parents) for comment in comments}

    def sort_key(comment: NodeT) -> tuple[int, int, datetime, int]:
        root = roots[comment.id]
        is_reply = 0 if comment.id == root else 1
        return (root, is_reply, comment.created_at, comment.id)

    return sorted(comments, key=sort_key)
