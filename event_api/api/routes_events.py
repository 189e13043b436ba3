"""
Event API routes - bearer token required
"""

from datetime import datetime
from typing import List, Literal, Optional
from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import Response
from sqlalchemy.orm import Session

from event_api.core.config import settings
from event_api.core.db import get_db
from event_api.models import User
from event_api.schemas.event import (
    BookingResponse,
    EventCreate,
    EventResponse,
    EventUpdate,
    EventWithBooking,
    SortField,
    to_naive_utc,
)
from event_api.services.event_service import EventService
from event_api.utils.security import get_current_user, require_rights

router = APIRouter()

@router.post("", response_model=EventResponse, status_code=status.HTTP_201_CREATED)
async def create_event(
    event_data: EventCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_rights("manageEvents"))
):
    """Create an event (admins only)"""
    return EventService.create_event(
        db,
        name=event_data.name,
        description=event_data.description,
        date=event_data.date,
        location=event_data.location
    )

@router.get("", response_model=List[EventWithBooking])
async def list_events(
    name: Optional[str] = Query(None, min_length=1),
    date: Optional[datetime] = Query(None),
    location: Optional[str] = Query(None, min_length=1),
    sort_by: Optional[SortField] = Query(None, alias="sortBy"),
    sort_type: Literal["asc", "desc"] = Query("desc", alias="sortType"),
    limit: int = Query(settings.DEFAULT_PAGE_LIMIT, ge=1),
    page: int = Query(1, ge=1),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """List events, flagging the ones the caller has booked"""
    return EventService.get_events(
        db,
        user_id=current_user.id,
        filters={"name": name, "date": to_naive_utc(date), "location": location},
        page=page,
        limit=limit,
        sort_by=sort_by,
        sort_type=sort_type
    )

@router.get("/{event_id}", response_model=EventResponse)
async def get_event(
    event_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_rights("getEvents"))
):
    """Get a single event"""
    return EventService.get_event_by_id(db, event_id)

@router.patch("/{event_id}", response_model=EventResponse)
async def update_event(
    event_id: int,
    event_data: EventUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_rights("manageEvents"))
):
    """Update any subset of name, description, date and location (admins only)"""
    return EventService.update_event(db, event_id, event_data.dict(exclude_unset=True))

@router.delete("/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_event(
    event_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_rights("manageEvents"))
):
    """Delete an event (admins only)"""
    EventService.delete_event(db, event_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.post("/{event_id}/book", response_model=BookingResponse)
async def book_event(
    event_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Book an event for the caller"""
    return EventService.book_event(db, user_id=current_user.id, event_id=event_id)
