"""
Event and booking Pydantic schemas
"""

from datetime import datetime, timezone
from typing import Literal, Optional
from pydantic import BaseModel, Field, field_serializer, field_validator, model_validator

from event_api.models.user_event import BookingStatus

SortField = Literal["id", "name", "description", "date", "location"]

def to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Timestamps are stored as naive UTC"""
    if value is not None and value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value

def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Attach UTC to stored naive timestamps so they serialize with a Z"""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)

class EventCreate(BaseModel):
    """Schema for creating an event"""
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    date: datetime
    location: Optional[str] = None

    @field_validator("date")
    @classmethod
    def normalize_date(cls, value: datetime) -> datetime:
        return to_naive_utc(value)

class EventUpdate(BaseModel):
    """Schema for updating an event; at least one field is required"""
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = Field(None, min_length=1)
    date: Optional[datetime] = None
    location: Optional[str] = Field(None, min_length=1)

    @field_validator("name", "date")
    @classmethod
    def reject_null(cls, value):
        # name and date are required columns; only description and location may be cleared
        if value is None:
            raise ValueError("may not be null")
        return value

    @field_validator("date")
    @classmethod
    def normalize_date(cls, value: Optional[datetime]) -> Optional[datetime]:
        return to_naive_utc(value)

    @model_validator(mode="after")
    def check_not_empty(self):
        if not self.model_fields_set:
            raise ValueError("At least one of name, description, date or location is required")
        return self

class EventResponse(BaseModel):
    """Basic event response"""
    id: int
    name: str
    description: Optional[str] = None
    date: datetime
    location: Optional[str] = None

    @field_serializer("date")
    def serialize_date(self, value: datetime) -> datetime:
        return as_utc(value)

    class Config:
        from_attributes = True
        populate_by_name = True

class EventWithBooking(EventResponse):
    """Event annotated with whether the requesting user booked it"""
    is_booked: bool = Field(alias="isBooked")

class BookingResponse(BaseModel):
    """Booking response"""
    id: int
    user_id: int = Field(alias="userId")
    event_id: int = Field(alias="eventId")
    status: BookingStatus
    created_at: Optional[datetime] = Field(None, alias="createdAt")

    @field_serializer("created_at")
    def serialize_created_at(self, value: Optional[datetime]) -> Optional[datetime]:
        return as_utc(value)

    class Config:
        from_attributes = True
        populate_by_name = True
