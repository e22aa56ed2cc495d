"""Pydantic schemas for Events."""
import enum
from datetime import datetime, timezone
from typing import Optional
from pydantic import AliasChoices, BaseModel, Field, computed_field, field_validator


class EventFormField(str, enum.Enum):
    """Front-end form element ids."""

    NAME = "eventName"
    DATE = "eventDate"
    DESCRIPTION = "eventDescription"


# Event attribute -> form element that fills it
EVENT_FORM_FIELDS: dict[str, EventFormField] = {
    "name": EventFormField.NAME,
    "date": EventFormField.DATE,
    "description": EventFormField.DESCRIPTION,
}


def _form_alias(attribute: str) -> AliasChoices:
    return AliasChoices(attribute, EVENT_FORM_FIELDS[attribute].value)


class EventCreate(BaseModel):
    # Left optional so the service reports missing values with its own messages
    name: Optional[str] = Field(default=None, validation_alias=_form_alias("name"))
    date: Optional[str] = Field(default=None, validation_alias=_form_alias("date"))
    description: Optional[str] = Field(
        default=None, validation_alias=_form_alias("description"),
    )


class EventOut(BaseModel):
    id: str
    name: str
    date: datetime
    description: Optional[str] = None
    organizer_id: str
    created_at: datetime

    model_config = {"from_attributes": True}

    @field_validator("date", "created_at")
    @classmethod
    def _ensure_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    @computed_field
    @property
    def accepting_requests(self) -> bool:
        return self.date >= datetime.now(timezone.utc)


class EventDetailOut(EventOut):
    request_count: int = 0
