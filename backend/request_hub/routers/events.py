"""Event API routes — the directory plus each event's request queue."""
from typing import Optional
from fastapi import APIRouter, Depends, Query, status

from request_hub.context import SessionContext
from request_hub.dependencies import get_context
from request_hub.schemas.event import EventCreate, EventDetailOut, EventOut
from request_hub.schemas.song_request import RequestStatsOut, SongRequestCreate, SongRequestOut
from request_hub.services import event_service, request_service
from request_hub.services.stats_service import compute_stats

router = APIRouter()


@router.post("/", response_model=EventOut, status_code=status.HTTP_201_CREATED)
def create_event(payload: EventCreate, ctx: SessionContext = Depends(get_context)):
    """Create an event owned by the logged-in organizer."""
    return event_service.create_event(
        ctx,
        name=payload.name,
        date=payload.date,
        description=payload.description,
    )


@router.get("/", response_model=list[EventOut])
def list_events(
    scope: str = Query("all", description="'all' for the public view, 'mine' for the organizer's events"),
    ctx: SessionContext = Depends(get_context),
):
    """List events ordered by date."""
    return event_service.list_events(ctx, scope)


@router.get("/{event_id}", response_model=EventDetailOut)
def get_event(event_id: str, ctx: SessionContext = Depends(get_context)):
    """Fetch a single event with its request count."""
    event = event_service.get_event(ctx, event_id)
    detail = EventDetailOut.model_validate(event)
    detail.request_count = len(request_service.list_requests(ctx, event_id))
    return detail


@router.post(
    "/{event_id}/requests",
    response_model=SongRequestOut,
    status_code=status.HTTP_201_CREATED,
)
def submit_request(event_id: str, payload: SongRequestCreate, ctx: SessionContext = Depends(get_context)):
    """Submit a song request; no login required."""
    return request_service.submit_request(
        ctx,
        event_id=event_id,
        song_name=payload.song_name,
        artist=payload.artist,
        special_request=payload.special_request,
        tip_amount=payload.tip_amount,
    )


@router.get("/{event_id}/requests", response_model=list[SongRequestOut])
def list_requests(
    event_id: str,
    status_filter: Optional[str] = Query(None, alias="status"),
    ctx: SessionContext = Depends(get_context),
):
    """List an event's requests, newest first."""
    return request_service.list_requests(ctx, event_id, status_filter)


@router.get("/{event_id}/stats", response_model=RequestStatsOut)
def event_stats(event_id: str, ctx: SessionContext = Depends(get_context)):
    """Request counts and tip total for one event."""
    return compute_stats(request_service.list_requests(ctx, event_id))
