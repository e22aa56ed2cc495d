"""Pydantic schemas for song requests and their statistics."""
import enum
from datetime import datetime, timezone
from typing import Any, Optional
from pydantic import AliasChoices, BaseModel, Field, field_validator

from request_hub.models.song_request import RequestStatus


class RequestFormField(str, enum.Enum):
    """Front-end form element ids."""

    SONG_NAME = "songName"
    ARTIST = "artist"
    SPECIAL_REQUEST = "specialRequest"
    TIP_AMOUNT = "tipAmount"


# Request attribute -> form element that fills it
REQUEST_FORM_FIELDS: dict[str, RequestFormField] = {
    "song_name": RequestFormField.SONG_NAME,
    "artist": RequestFormField.ARTIST,
    "special_request": RequestFormField.SPECIAL_REQUEST,
    "tip_amount": RequestFormField.TIP_AMOUNT,
}


def _form_alias(attribute: str) -> AliasChoices:
    return AliasChoices(attribute, REQUEST_FORM_FIELDS[attribute].value)


class SongRequestCreate(BaseModel):
    song_name: Optional[str] = Field(default=None, validation_alias=_form_alias("song_name"))
    artist: Optional[str] = Field(default=None, validation_alias=_form_alias("artist"))
    special_request: Optional[str] = Field(
        default=None, validation_alias=_form_alias("special_request"),
    )
    # Any: unparsable tips are coerced to 0 by the service, not rejected here
    tip_amount: Any = Field(default=None, validation_alias=_form_alias("tip_amount"))


class SongRequestOut(BaseModel):
    id: str
    event_id: str
    song_name: str
    artist: str
    special_request: Optional[str] = None
    tip_amount: float
    status: RequestStatus
    created_at: datetime

    model_config = {"from_attributes": True}

    @field_validator("created_at")
    @classmethod
    def _ensure_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)


class TransitionRequest(BaseModel):
    status: Optional[str] = Field(default=None, validation_alias=AliasChoices("status", "target_status"))


class RequestStatsOut(BaseModel):
    total: int
    pending: int
    completed: int
    total_tips: float
