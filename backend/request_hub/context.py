"""Explicit per-call session context.

Services never read identity or the active event from module globals;
every operation receives a ``SessionContext`` built for the current
HTTP request (or by hand in scripts and tests).
"""
from dataclasses import dataclass, field
from typing import Optional

from fastapi import status
from sqlalchemy.orm import Session

from request_hub.errors import AuthError
from request_hub.models.event import Event


@dataclass(frozen=True)
class Identity:
    """An authenticated organizer."""

    user_id: str
    email: str


@dataclass
class SessionContext:
    db: Session
    identity: Optional[Identity] = None
    token: Optional[str] = None
    active_event: Optional[Event] = None
    # Last listing loaded through the event directory, in load order
    events: Optional[list[Event]] = field(default=None)

    def require_identity(self) -> Identity:
        if self.identity is None:
            raise AuthError("You must be logged in to do this")
        return self.identity

    def require_organizer(self, event: Event) -> Identity:
        """Return the identity if it owns ``event``, else raise 403."""
        identity = self.require_identity()
        if event.organizer_id != identity.user_id:
            raise AuthError(
                "Only the organizer of this event may do this",
                status_code=status.HTTP_403_FORBIDDEN,
            )
        return identity
