"""Dashboard composition: directory -> active event -> queue -> stats."""
import logging
from typing import Any, Optional

from request_hub.context import SessionContext
from request_hub.services import event_service, request_service
from request_hub.services.stats_service import compute_stats

logger = logging.getLogger(__name__)


def build_dashboard(
    ctx: SessionContext,
    scope: str = event_service.EventScope.all,
    event_id: Optional[str] = None,
) -> dict[str, Any]:
    """Load the scoped events, select the active one and summarise its queue."""
    events = event_service.list_events(ctx, scope)
    if event_id:
        active = event_service.select_active_event(ctx, event_id=event_id, scope=scope)
    else:
        active = events[0] if events else None
        ctx.active_event = active

    requests = request_service.list_requests(ctx, active.id) if active else []
    logger.debug(
        "Dashboard for %s: %d events, active=%s, %d requests",
        ctx.identity.user_id if ctx.identity else "anonymous",
        len(events), active.id if active else None, len(requests),
    )
    return {
        "scope": event_service.EventScope(scope).value,
        "events": events,
        "active_event": active,
        "requests": requests,
        "stats": compute_stats(requests),
    }
