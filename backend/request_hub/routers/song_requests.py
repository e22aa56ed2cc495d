"""Song request API routes — organizer status workflow."""
from fastapi import APIRouter, Depends

from request_hub.context import SessionContext
from request_hub.dependencies import get_context
from request_hub.schemas.song_request import SongRequestOut, TransitionRequest
from request_hub.services import request_service

router = APIRouter()


@router.post("/{request_id}/transition", response_model=SongRequestOut)
def transition_request(
    request_id: str,
    payload: TransitionRequest,
    ctx: SessionContext = Depends(get_context),
):
    """Move a request to its next status (organizer of the event only).

    pending -> playing | rejected, playing -> completed.
    """
    return request_service.transition(ctx, request_id, payload.status)
