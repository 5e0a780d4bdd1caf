"""Comment endpoints that are not scoped under a post."""

from fastapi import APIRouter, Response, status

from ..dependencies import CallerDep, ContentServiceDep, IdPath

router = APIRouter(prefix="/comments", tags=["comments"])


@router.delete("/{comment_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_comment(comment_id: IdPath, service: ContentServiceDep, caller: CallerDep) -> Response:
    """Soft-delete a comment; it stays in its thread with an empty body."""
    service.delete_comment(caller, comment_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
