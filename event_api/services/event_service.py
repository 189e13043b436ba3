"""
Event store access: CRUD, filtered listing with per-user booking flags,
and booking.
"""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from event_api.core.errors import (
    CreateFailed,
    InternalError,
    NotFoundError,
    UpdateFailed,
    ValidationError,
)
from event_api.models import BookingStatus, Event, UserEvent
from event_api.schemas.event import EventResponse, EventWithBooking
from event_api.services.repositories import BookingRepo, EventRepo

logger = logging.getLogger(__name__)

FILTERABLE_FIELDS = ("name", "date", "location")
UPDATABLE_FIELDS = ("name", "description", "date", "location")

class EventService:
    """Service for event and booking operations"""

    @staticmethod
    def create_event(
        db: Session,
        name: str,
        date: datetime,
        description: Optional[str] = None,
        location: Optional[str] = None
    ) -> Event:
        """Create an event; any store rejection is reported as ``CreateFailed``"""
        event = Event(name=name, description=description, date=date, location=location)
        try:
            db.add(event)
            db.commit()
        except SQLAlchemyError as exc:
            db.rollback()
            logger.warning("Event creation rejected by the store", exc_info=exc)
            raise CreateFailed("Error creating event") from exc
        db.refresh(event)
        logger.info(f"Created event {event.id} ({event.name})")
        return event

    @staticmethod
    def get_events(
        db: Session,
        user_id: int,
        filters: Optional[Dict[str, Any]] = None,
        page: int = 1,
        limit: int = 10,
        sort_by: Optional[str] = None,
        sort_type: str = "desc"
    ) -> List[EventWithBooking]:
        """Return one page of events, each flagged with whether ``user_id`` booked it.

        ``filters`` is matched by equality on name, date and location; empty
        or ``None`` values are ignored. Rows are ordered by ``sort_by`` only
        when it is given. Page and limit are 1-based and are expected to have
        been validated by the caller.
        """
        where = {
            key: value
            for key, value in (filters or {}).items()
            if key in FILTERABLE_FIELDS and value is not None
        }

        order_by = None
        if sort_by:
            column = Event.__table__.columns.get(sort_by)
            if column is None:
                raise ValidationError(f"Cannot sort by '{sort_by}'")
            order_by = column.asc() if sort_type == "asc" else column.desc()

        events = EventRepo.find(
            db,
            filters=where,
            offset=(page - 1) * limit,
            limit=limit,
            order_by=order_by
        )
        booked = BookingRepo.booked_event_ids(db, user_id, (event.id for event in events))

        return [
            EventWithBooking(
                id=event.id,
                name=event.name,
                description=event.description,
                date=event.date,
                location=event.location,
                is_booked=event.id in booked
            )
            for event in events
        ]

    @staticmethod
    def get_event_by_id(db: Session, event_id: int) -> Event:
        try:
            event = EventRepo.get_by_id(db, event_id)
        except SQLAlchemyError as exc:
            logger.error(f"Failed to load event {event_id}", exc_info=exc)
            raise InternalError("Error retrieving event") from exc
        if not event:
            raise NotFoundError("Event not found")
        return event

    @staticmethod
    def update_event(db: Session, event_id: int, fields: Dict[str, Any]) -> Event:
        """Apply the given fields to an event, leaving the others unchanged"""
        try:
            event = EventRepo.get_by_id(db, event_id)
            if not event:
                raise NotFoundError("Event not found")
            for key, value in fields.items():
                if key in UPDATABLE_FIELDS:
                    setattr(event, key, value)
            db.commit()
        except SQLAlchemyError as exc:
            db.rollback()
            logger.warning(f"Update of event {event_id} rejected by the store", exc_info=exc)
            raise UpdateFailed("Error updating event") from exc
        db.refresh(event)
        logger.info(f"Updated event {event_id}: {', '.join(sorted(fields))}")
        return event

    @staticmethod
    def delete_event(db: Session, event_id: int) -> EventResponse:
        """Delete an event and its bookings; returns the deleted record"""
        try:
            event = EventRepo.get_by_id(db, event_id)
            if not event:
                raise NotFoundError("Event not found")
            deleted = EventResponse.model_validate(event)
            db.delete(event)
            db.commit()
        except SQLAlchemyError as exc:
            db.rollback()
            logger.error(f"Failed to delete event {event_id}", exc_info=exc)
            raise InternalError("Error deleting event") from exc
        logger.info(f"Deleted event {event_id}")
        return deleted

    @staticmethod
    def book_event(db: Session, user_id: int, event_id: int) -> UserEvent:
        """Record a booking of ``event_id`` by ``user_id``.

        There are no capacity or duplicate checks: the same user may book the
        same event repeatedly. The existence check and the insert share one
        transaction, and the foreign key on ``user_events.event_id`` rejects
        the insert if the event was deleted in between.
        """
        try:
            if not EventRepo.get_by_id(db, event_id):
                raise NotFoundError("Event not found")
            booking = UserEvent(user_id=user_id, event_id=event_id, status=BookingStatus.BOOKED)
            db.add(booking)
            db.commit()
        except IntegrityError as exc:
            db.rollback()
            if not EventRepo.get_by_id(db, event_id):
                raise NotFoundError("Event not found") from exc
            logger.warning(f"Booking of event {event_id} by user {user_id} rejected", exc_info=exc)
            raise CreateFailed("Error booking event") from exc
        except SQLAlchemyError as exc:
            db.rollback()
            logger.error(f"Failed to book event {event_id} for user {user_id}", exc_info=exc)
            raise CreateFailed("Error booking event") from exc
        db.refresh(booking)
        logger.info(f"User {user_id} booked event {event_id} (booking {booking.id})")
        return booking
