"""Event ORM model."""
import uuid
from sqlalchemy import Column, String, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from request_hub.database import Base
from request_hub.models.user import _utcnow

NAME_MAX_LENGTH = 255


class Event(Base):
    __tablename__ = "events"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(NAME_MAX_LENGTH), nullable=False)
    date = Column(DateTime(timezone=True), nullable=False, index=True)
    description = Column(Text, nullable=True)
    # Set once at creation; nothing in the service layer writes it again
    organizer_id = Column(String(36), ForeignKey("users.user_id"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)

    organizer = relationship("User", back_populates="events")
    requests = relationship("SongRequest", back_populates="event")
