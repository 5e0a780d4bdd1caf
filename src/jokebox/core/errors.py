"""Error taxonomy shared by the stores, services and request layer."""

from __future__ import annotations

from fastapi import status


class JokeboxError(Exception):
    """Base class for all errors surfaced by the content core."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(JokeboxError):
    """Malformed or unsafe input: empty body, value outside a closed vocabulary."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid input"


class NotFoundError(JokeboxError):
    """A referenced post, comment or interaction does not exist."""

    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, entity: str, entity_id: int | None = None) -> None:
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity.capitalize()} not found")


class UnauthenticatedError(JokeboxError):
    """A mutating call arrived without a caller identity."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Authentication required"


class ForbiddenError(JokeboxError):
    """The caller is authenticated but neither the owner nor privileged."""

    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Forbidden"


class ConflictError(JokeboxError):
    """A store constraint was violated in a way not otherwise classified."""

    status_code = status.HTTP_409_CONFLICT
    default_message = "Conflicting write"


class StoreUnavailableError(JokeboxError):
    """The underlying database could not be reached or failed mid-statement."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_message = "Storage temporarily unavailable"


__all__ = [
    "ConflictError",
    "ForbiddenError",
    "JokeboxError",
    "NotFoundError",
    "StoreUnavailableError",
    "UnauthenticatedError",
    "ValidationError",
]
