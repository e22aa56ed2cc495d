"""Pydantic schema for the combined dashboard payload."""
from typing import Optional
from pydantic import BaseModel

from request_hub.schemas.event import EventOut
from request_hub.schemas.song_request import RequestStatsOut, SongRequestOut


class DashboardOut(BaseModel):
    scope: str
    events: list[EventOut]
    active_event: Optional[EventOut] = None
    requests: list[SongRequestOut]
    stats: RequestStatsOut
