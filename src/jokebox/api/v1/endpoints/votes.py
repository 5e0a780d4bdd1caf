"""Vote and reaction endpoints for the Jokebox API."""

from fastapi import APIRouter, Response, status

from jokebox.models import ItemKind, ItemRef
from jokebox.schemas import (
    MyVoteResponse,
    ReactionRequest,
    ReactionToggleResponse,
    VoteRequest,
)

from ..dependencies import CallerDep, IdPath, InteractionServiceDep

router = APIRouter(tags=["votes"])


@router.post("/votes", status_code=status.HTTP_204_NO_CONTENT)
def cast_vote(
    vote_data: VoteRequest,
    service: InteractionServiceDep,
    caller: CallerDep,
) -> Response:
    """Set the caller's vote on a post or comment.

    Sending an empty ``vote`` removes the caller's existing vote.
    """
    service.cast_vote(caller, vote_data.item, vote_data.vote)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/votes/{item_kind}/{item_id}/mine", response_model=MyVoteResponse)
def get_my_vote(
    item_kind: ItemKind,
    item_id: IdPath,
    service: InteractionServiceDep,
    caller: CallerDep,
) -> MyVoteResponse:
    """Return the caller's current vote on an item, if any."""
    vote = service.get_my_vote(caller, ItemRef(item_kind, item_id))
    return MyVoteResponse(vote=vote.value if vote else None)


@router.post("/reactions", response_model=ReactionToggleResponse)
def toggle_reaction(
    reaction_data: ReactionRequest,
    service: InteractionServiceDep,
    caller: CallerDep,
) -> ReactionToggleResponse:
    """Toggle one of the caller's reactions on a post or comment."""
    active = service.toggle_reaction(caller, reaction_data.item, reaction_data.reaction)
    return ReactionToggleResponse(reaction=reaction_data.reaction, active=active)
