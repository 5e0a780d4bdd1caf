"""Bearer token helpers for the identity context."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any

from jose import JWTError, jwt

from jokebox.core.settings import settings


@dataclass(frozen=True)
class Caller:
    """Identity of the party issuing a request.

    ``user_id`` is ``None`` for anonymous callers.
    """

    user_id: int | None = None
    is_privileged: bool = False

    @property
    def is_anonymous(self) -> bool:
        return self.user_id is None


ANONYMOUS = Caller()


class InvalidTokenError(ValueError):
    """Raised when a bearer token cannot be decoded into a caller."""


def create_access_token(user_id: int, *, is_admin: bool = False) -> str:
    """Return a signed token carrying the claims the request layer reads.

    Token issuance belongs to the external auth service; this helper exists for
    local tooling and tests.
    """
    expires = datetime.now(UTC) + timedelta(minutes=settings.access_token_expire_minutes)
    claims: dict[str, Any] = {"user_id": user_id, "is_admin": is_admin, "exp": expires}
    return jwt.encode(claims, settings.secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> Caller:
    """Decode a bearer token into a :class:`Caller`.

    Raises:
        InvalidTokenError: If the signature, expiry or claims are invalid.
    """
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError as err:
        raise InvalidTokenError("Could not validate credentials") from err

    user_id = payload.get("user_id")
    # bool is an int subclass; reject it explicitly.
    if not isinstance(user_id, int) or isinstance(user_id, bool) or user_id <= 0:
        raise InvalidTokenError("Invalid user ID in token")

    return Caller(user_id=user_id, is_privileged=payload.get("is_admin") is True)
