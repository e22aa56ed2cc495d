"""Event directory — create, list, fetch and select the active event.

Responsibilities:
- Authorization hook: only a logged-in organizer may create events
- Date parsing: ISO-8601 strings and datetimes, naive values localised
  with the configured timezone, everything stored in UTC
- Scoped listings ordered by event date
- Active-event selection kept on the caller's ``SessionContext``
"""
import enum
import logging
from datetime import datetime, timezone
from typing import Optional, Union

import pytz

from request_hub.config import settings
from request_hub.context import SessionContext
from request_hub.database import backend_call
from request_hub.errors import NotFoundError, ValidationError
from request_hub.models.event import NAME_MAX_LENGTH, Event

logger = logging.getLogger(__name__)


class EventScope(str, enum.Enum):
    all = "all"
    mine = "mine"


def as_utc(value: datetime) -> datetime:
    """Attach UTC to naive values read back from databases that drop tzinfo."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def parse_event_date(value: Union[str, datetime, None]) -> datetime:
    """Parse an event timestamp into an aware UTC datetime.

    Accepts ``datetime`` objects and ISO-8601 strings, including the
    ``YYYY-MM-DDTHH:MM`` form browsers send from ``datetime-local``
    inputs.  Naive values are read in ``settings.DEFAULT_TIMEZONE``.
    """
    if not isinstance(value, datetime) and not (isinstance(value, str) and value.strip()):
        raise ValidationError("Event date is required")

    try:
        if isinstance(value, datetime):
            parsed = value
        else:
            parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        if parsed.tzinfo is None:
            parsed = pytz.timezone(settings.DEFAULT_TIMEZONE).localize(parsed)
        return parsed.astimezone(timezone.utc)
    except (ValueError, OverflowError):
        raise ValidationError(f"Event date is not a valid timestamp: {value!r}")


def is_accepting_requests(event: Event, now: Optional[datetime] = None) -> bool:
    """True until the event's start time has passed."""
    now = now or datetime.now(timezone.utc)
    return as_utc(event.date) >= now


def _parse_scope(scope: Union[str, EventScope]) -> EventScope:
    try:
        return EventScope(scope)
    except ValueError:
        raise ValidationError(f"Unknown event scope: {scope!r}")


def create_event(
    ctx: SessionContext,
    name: Optional[str],
    date: Union[str, datetime, None],
    description: Optional[str] = None,
) -> Event:
    """Create an event owned by the caller."""
    identity = ctx.require_identity()

    name = (name or "").strip()
    if not name:
        raise ValidationError("Event name is required")
    if len(name) > NAME_MAX_LENGTH:
        raise ValidationError(f"Event name must be at most {NAME_MAX_LENGTH} characters")
    event_date = parse_event_date(date)
    description = (description or "").strip() or None

    event = Event(
        name=name,
        date=event_date,
        description=description,
        organizer_id=identity.user_id,
    )
    with backend_call(ctx.db, "creating event"):
        ctx.db.add(event)
        ctx.db.commit()
        ctx.db.refresh(event)

    # Appended, not re-sorted: the next full listing orders by date
    if ctx.events is not None:
        ctx.events.append(event)

    logger.info("Created event '%s' (%s) by organizer %s", name, event.id, identity.user_id)
    return event


def list_events(ctx: SessionContext, scope: Union[str, EventScope] = EventScope.all) -> list[Event]:
    """List events by date ascending: every event, or only the caller's."""
    scope = _parse_scope(scope)
    query = ctx.db.query(Event)
    if scope == EventScope.mine:
        identity = ctx.require_identity()
        query = query.filter(Event.organizer_id == identity.user_id)

    with backend_call(ctx.db, "listing events"):
        events = query.order_by(Event.date.asc()).all()

    ctx.events = events
    return events


def get_event(ctx: SessionContext, event_id: str) -> Event:
    with backend_call(ctx.db, "fetching event"):
        event = ctx.db.query(Event).filter(Event.id == event_id).first()
    if not event:
        raise NotFoundError("Event not found")
    return event


def select_active_event(
    ctx: SessionContext,
    event_id: Optional[str] = None,
    scope: Union[str, EventScope] = EventScope.all,
) -> Optional[Event]:
    """Set the context's active event.

    With an id, that event is selected (it must belong to the caller in
    the ``mine`` scope).  Without one, the first event of the scoped
    listing is selected; None when the listing is empty.
    """
    scope = _parse_scope(scope)
    if event_id:
        event = get_event(ctx, event_id)
        if scope == EventScope.mine:
            ctx.require_organizer(event)
    else:
        events = list_events(ctx, scope)
        event = events[0] if events else None

    ctx.active_event = event
    return event
