"""RevokedToken ORM model — bearer tokens invalidated by logout."""
from sqlalchemy import Column, String, DateTime
from request_hub.database import Base
from request_hub.models.user import _utcnow


class RevokedToken(Base):
    __tablename__ = "revoked_tokens"

    jti = Column(String(36), primary_key=True)
    revoked_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
