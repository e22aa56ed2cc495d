"""Dashboard route — one payload for the organizer and attendee views."""
from typing import Optional
from fastapi import APIRouter, Depends, Query

from request_hub.context import SessionContext
from request_hub.dependencies import get_context
from request_hub.schemas.dashboard import DashboardOut
from request_hub.services.dashboard_service import build_dashboard

router = APIRouter()


@router.get("/", response_model=DashboardOut)
def dashboard(
    scope: str = Query("all"),
    event_id: Optional[str] = Query(None),
    ctx: SessionContext = Depends(get_context),
):
    """Events in scope, the active event, its requests and their stats."""
    return build_dashboard(ctx, scope=scope, event_id=event_id)
