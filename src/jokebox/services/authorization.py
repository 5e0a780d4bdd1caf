"""Authorization rules for mutating content."""

from __future__ import annotations

import logging

from jokebox.core.errors import ForbiddenError, UnauthenticatedError
from jokebox.core.security import Caller

logger = logging.getLogger(__name__)


def require_authenticated(caller: Caller) -> int:
    """Return the caller's user id, rejecting anonymous callers.

    Raises:
        UnauthenticatedError: If the caller carries no identity.
    """
    if caller.user_id is None:
        raise UnauthenticatedError()
    return caller.user_id


def can_delete(caller: Caller, author_id: int) -> bool:
    """Authors may delete their own content; privileged callers may delete any."""
    if caller.user_id is None:
        return False
    return caller.user_id == author_id or caller.is_privileged


def ensure_can_delete(caller: Caller, author_id: int, *, entity: str) -> bool:
    """Enforce :func:`can_delete`.

    Returns:
        True when the delete is allowed only through the privileged override,
        i.e. the caller is not the author.

    Raises:
        UnauthenticatedError: If the caller is anonymous.
        ForbiddenError: If the caller is neither the author nor privileged.
    """
    user_id = require_authenticated(caller)
    if not can_delete(caller, author_id):
        logger.warning(
            "User %s denied deleting %s owned by %s", user_id, entity, author_id
        )
        raise ForbiddenError(f"You can only delete your own {entity}s")
    return user_id != author_id
