"""SongRequest ORM model (table ``requests``)."""
import uuid
import enum
from sqlalchemy import CheckConstraint, Column, String, Text, DateTime, Numeric, ForeignKey, Enum as SAEnum
from sqlalchemy.orm import relationship
from request_hub.database import Base
from request_hub.models.user import _utcnow

TEXT_MAX_LENGTH = 255


class RequestStatus(str, enum.Enum):
    pending = "pending"
    playing = "playing"
    completed = "completed"
    rejected = "rejected"


class SongRequest(Base):
    __tablename__ = "requests"
    __table_args__ = (CheckConstraint("tip_amount >= 0", name="ck_requests_tip_non_negative"),)

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    event_id = Column(String(36), ForeignKey("events.id"), nullable=False, index=True)
    song_name = Column(String(TEXT_MAX_LENGTH), nullable=False)
    artist = Column(String(TEXT_MAX_LENGTH), nullable=False)
    special_request = Column(Text, nullable=True)
    tip_amount = Column(Numeric(10, 2), nullable=False, default=0)
    status = Column(
        SAEnum(RequestStatus, native_enum=False, length=20),
        nullable=False,
        default=RequestStatus.pending,
    )
    # Set client-side: second-resolution server clocks would tie rapid submissions
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, index=True)

    event = relationship("Event", back_populates="requests")
