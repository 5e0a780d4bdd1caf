"""Moderation endpoints for the Jokebox API."""

from fastapi import APIRouter, Query

from jokebox.core.errors import ForbiddenError
from jokebox.schemas import ModerationLogResponse
from jokebox.services.authorization import require_authenticated

from ..dependencies import CallerDep, ModerationServiceDep

router = APIRouter(prefix="/moderation", tags=["moderation"])


@router.get("/logs", response_model=list[ModerationLogResponse])
def list_moderation_logs(
    service: ModerationServiceDep,
    caller: CallerDep,
    page: str | None = Query(None, description="1-based page number"),
    page_size: str | None = Query(None, description="Entries per page, 1-100"),
) -> list[ModerationLogResponse]:
    """Return moderation history, newest first. Privileged callers only."""
    require_authenticated(caller)
    if not caller.is_privileged:
        raise ForbiddenError("Moderation history is restricted to administrators")
    entries = service.list_logs(page, page_size)
    return [ModerationLogResponse.model_validate(entry) for entry in entries]
