"""Shared API dependencies for authentication and common functionality."""

from typing import Annotated

from fastapi import Depends, HTTPException, Path, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from jokebox.core.security import ANONYMOUS, Caller, InvalidTokenError, decode_access_token
from jokebox.db.session import get_db
from jokebox.schemas import MAX_ID
from jokebox.services.content_service import ContentService
from jokebox.services.interaction_service import InteractionService
from jokebox.services.moderation import ModerationService

# Missing credentials mean an anonymous caller rather than an error.
bearer_scheme = HTTPBearer(auto_error=False)

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


def get_caller(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> Caller:
    """Resolve the request's caller from an optional bearer token.

    Args:
        credentials: HTTP Bearer token credentials, if any were sent

    Returns:
        The authenticated caller, or the anonymous caller without a token

    Raises:
        HTTPException: If a token was sent but cannot be validated
    """
    if credentials is None:
        return ANONYMOUS
    try:
        return decode_access_token(credentials.credentials)
    except InvalidTokenError as err:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(err),
            headers={"WWW-Authenticate": "Bearer"},
        ) from err


def get_content_service(db: SessionDep) -> ContentService:
    return ContentService(db)


def get_interaction_service(db: SessionDep) -> InteractionService:
    return InteractionService(db)


def get_moderation_service(db: SessionDep) -> ModerationService:
    return ModerationService(db)


IdPath = Annotated[int, Path(ge=1, le=MAX_ID)]

CallerDep = Annotated[Caller, Depends(get_caller)]
ContentServiceDep = Annotated[ContentService, Depends(get_content_service)]
InteractionServiceDep = Annotated[InteractionService, Depends(get_interaction_service)]
ModerationServiceDep = Annotated[ModerationService, Depends(get_moderation_service)]
