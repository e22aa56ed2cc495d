"""Request queue and status workflow.

State machine per request::

    pending -> playing -> completed
    pending -> rejected

``completed`` and ``rejected`` are terminal.  Anyone may submit a
request; only the organizer of the owning event may move it.
"""
import logging
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Optional, Union

from request_hub.context import SessionContext
from request_hub.database import backend_call
from request_hub.errors import AuthError, InvalidTransitionError, NotFoundError, ValidationError
from request_hub.models.event import Event
from request_hub.models.song_request import TEXT_MAX_LENGTH, RequestStatus, SongRequest

logger = logging.getLogger(__name__)

ALLOWED_TRANSITIONS: dict[RequestStatus, frozenset[RequestStatus]] = {
    RequestStatus.pending: frozenset({RequestStatus.playing, RequestStatus.rejected}),
    RequestStatus.playing: frozenset({RequestStatus.completed}),
    RequestStatus.completed: frozenset(),
    RequestStatus.rejected: frozenset(),
}

ZERO = Decimal("0.00")
CENT = Decimal("0.01")
MAX_TIP_AMOUNT = Decimal("99999999.99")  # Numeric(10, 2)


def can_transition(current: RequestStatus, target: RequestStatus) -> bool:
    return target in ALLOWED_TRANSITIONS[current]


def parse_status(value: Union[str, RequestStatus, None]) -> RequestStatus:
    try:
        return RequestStatus(value)
    except ValueError:
        raise ValidationError(f"Unknown request status: {value!r}")


def parse_tip_amount(value: Any) -> Decimal:
    """Coerce a tip to a two-place Decimal.

    Missing, blank, unparsable and non-finite values become 0.  Negative
    or oversized amounts are rejected.
    """
    if value is None or isinstance(value, bool):
        return ZERO
    try:
        amount = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return ZERO
    if not amount.is_finite():
        return ZERO
    if amount < 0:
        raise ValidationError("Tip amount cannot be negative")
    if amount > MAX_TIP_AMOUNT:
        raise ValidationError("Tip amount is too large")
    # "-0" passes the sign check; store it as plain zero
    return abs(amount).quantize(CENT, rounding=ROUND_HALF_UP)


def _require_text(value: Optional[str], label: str) -> str:
    value = (value or "").strip()
    if not value:
        raise ValidationError(f"{label} is required")
    if len(value) > TEXT_MAX_LENGTH:
        raise ValidationError(f"{label} must be at most {TEXT_MAX_LENGTH} characters")
    return value


def submit_request(
    ctx: SessionContext,
    event_id: Optional[str],
    song_name: Optional[str],
    artist: Optional[str],
    special_request: Optional[str] = None,
    tip_amount: Any = None,
) -> SongRequest:
    """Queue a song request for an event; no login required."""
    song_name = _require_text(song_name, "Song name")
    artist = _require_text(artist, "Artist")
    tip = parse_tip_amount(tip_amount)
    special_request = (special_request or "").strip() or None

    with backend_call(ctx.db, "submitting request"):
        event = ctx.db.query(Event).filter(Event.id == event_id).first() if event_id else None
    if not event:
        raise ValidationError("Requests must reference an existing event")

    song_request = SongRequest(
        event_id=event.id,
        song_name=song_name,
        artist=artist,
        special_request=special_request,
        tip_amount=tip,
        status=RequestStatus.pending,
        created_at=datetime.now(timezone.utc),
    )
    with backend_call(ctx.db, "submitting request"):
        ctx.db.add(song_request)
        ctx.db.commit()
        ctx.db.refresh(song_request)

    logger.info(
        "Request %s for '%s' by %s queued on event %s (tip %s)",
        song_request.id, song_name, artist, event.id, tip,
    )
    return song_request


def list_requests(
    ctx: SessionContext,
    event_id: str,
    status: Union[str, RequestStatus, None] = None,
) -> list[SongRequest]:
    """Requests of one event, newest first, optionally for one status."""
    status_filter = parse_status(status) if status else None

    with backend_call(ctx.db, "listing requests"):
        if not ctx.db.query(Event.id).filter(Event.id == event_id).first():
            raise NotFoundError("Event not found")
        query = ctx.db.query(SongRequest).filter(SongRequest.event_id == event_id)
        if status_filter:
            query = query.filter(SongRequest.status == status_filter)
        return query.order_by(SongRequest.created_at.desc()).all()


def transition(
    ctx: SessionContext,
    request_id: str,
    target_status: Union[str, RequestStatus, None],
) -> SongRequest:
    """Move a request along the workflow on behalf of the event's organizer."""
    ctx.require_identity()
    target = parse_status(target_status)

    with backend_call(ctx.db, "loading request"):
        song_request = ctx.db.query(SongRequest).filter(SongRequest.id == request_id).first()
    if not song_request:
        raise NotFoundError("Request not found")

    try:
        ctx.require_organizer(song_request.event)
    except AuthError:
        logger.warning(
            "User %s denied status change on request %s", ctx.identity.user_id, request_id,
        )
        raise

    current = song_request.status
    if not can_transition(current, target):
        logger.warning("Rejected transition %s -> %s on request %s", current.value, target.value, request_id)
        raise InvalidTransitionError(f"Cannot move a {current.value} request to {target.value}")

    song_request.status = target
    with backend_call(ctx.db, "updating request status"):
        ctx.db.commit()
        ctx.db.refresh(song_request)

    logger.info("Request %s moved %s -> %s", request_id, current.value, target.value)
    return song_request
