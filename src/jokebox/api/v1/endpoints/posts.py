"""Post-related endpoints for the Jokebox API."""

from fastapi import APIRouter, Query, Response, status

from jokebox.schemas import (
    CommentCreate,
    CommentResponse,
    CreatedResponse,
    PostCreate,
    PostResponse,
    ThreadResponse,
)

from ..dependencies import CallerDep, ContentServiceDep, IdPath

router = APIRouter(prefix="/posts", tags=["posts"])


@router.get("/", response_model=list[PostResponse])
def list_posts(
    service: ContentServiceDep,
    caller: CallerDep,
    page: str | None = Query(None, description="1-based page number"),
    page_size: str | None = Query(None, description="Posts per page, 1-100"),
    sort_field: str | None = Query(None, description="created_at, modified_at, id, score, "
                                   "reaction_count or comment_count"),
    order: str | None = Query(None, description="asc or desc"),
) -> list[PostResponse]:
    """List posts.

    Paging and sorting parameters are lenient: unparseable or out-of-range
    values fall back to their defaults instead of failing the request.
    """
    views = service.list_posts(page, page_size, sort_field, order, viewer_id=caller.user_id)
    return [PostResponse.from_view(view) for view in views]


@router.post("/", response_model=CreatedResponse, status_code=status.HTTP_201_CREATED)
def create_post(
    post_data: PostCreate,
    service: ContentServiceDep,
    caller: CallerDep,
) -> CreatedResponse:
    """Create a new post authored by the caller."""
    return CreatedResponse(id=service.create_post(caller, post_data.body))


@router.get("/{post_id}", response_model=PostResponse)
def get_post(post_id: IdPath, service: ContentServiceDep, caller: CallerDep) -> PostResponse:
    """Return a single post with its aggregated social state."""
    return PostResponse.from_view(service.get_post(post_id, viewer_id=caller.user_id))


@router.get("/{post_id}/thread", response_model=ThreadResponse)
def get_thread(post_id: IdPath, service: ContentServiceDep, caller: CallerDep) -> ThreadResponse:
    """Return a post together with its comments in thread order."""
    post = service.get_post(post_id, viewer_id=caller.user_id)
    comments = service.get_comments_for_post(post_id, viewer_id=caller.user_id)
    return ThreadResponse(
        post=PostResponse.from_view(post),
        comments=[CommentResponse.from_view(comment) for comment in comments],
    )


@router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_post(post_id: IdPath, service: ContentServiceDep, caller: CallerDep) -> Response:
    """Delete a post. Only its author or a privileged caller may do so."""
    service.delete_post(caller, post_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{post_id}/comments", response_model=list[CommentResponse])
def list_comments(
    post_id: IdPath, service: ContentServiceDep, caller: CallerDep
) -> list[CommentResponse]:
    """Return the post's comments, roots first with their replies in time order."""
    views = service.get_comments_for_post(post_id, viewer_id=caller.user_id)
    return [CommentResponse.from_view(view) for view in views]


@router.post(
    "/{post_id}/comments",
    response_model=CreatedResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_comment(
    post_id: IdPath,
    comment_data: CommentCreate,
    service: ContentServiceDep,
    caller: CallerDep,
) -> CreatedResponse:
    """Reply to a post, or to one of its comments via ``parent_id``."""
    comment_id = service.create_comment(
        caller, post_id, comment_data.body, parent_id=comment_data.parent_id
    )
    return CreatedResponse(id=comment_id)
