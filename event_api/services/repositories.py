"""
Repository layer: thin query helpers over the SQLAlchemy session.

Repositories neither commit nor translate errors; the services own
transaction boundaries and error kinds.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional, Set

from sqlalchemy.orm import Session

from event_api.models import Event, User, UserEvent


# -------- Event repository --------

class EventRepo:
    @staticmethod
    def get_by_id(db: Session, event_id: int) -> Optional[Event]:
        return db.query(Event).filter(Event.id == event_id).first()

    @staticmethod
    def find(
        db: Session,
        filters: Dict[str, Any],
        offset: int,
        limit: int,
        order_by: Optional[Any] = None
    ) -> List[Event]:
        query = db.query(Event).filter_by(**filters)
        if order_by is not None:
            query = query.order_by(order_by)
        return query.offset(offset).limit(limit).all()


# -------- Booking repository --------

class BookingRepo:
    @staticmethod
    def booked_event_ids(db: Session, user_id: int, event_ids: Iterable[int]) -> Set[int]:
        """Ids among ``event_ids`` that ``user_id`` holds at least one booking for"""
        event_ids = list(event_ids)
        if not event_ids:
            return set()
        rows = db.query(UserEvent.event_id).filter(
            UserEvent.user_id == user_id,
            UserEvent.event_id.in_(event_ids)
        ).distinct().all()
        return {row.event_id for row in rows}


# -------- User repository --------

class UserRepo:
    @staticmethod
    def get_by_id(db: Session, user_id: int) -> Optional[User]:
        return db.query(User).filter(User.id == user_id).first()

    @staticmethod
    def get_by_email(db: Session, email: str) -> Optional[User]:
        return db.query(User).filter(User.email == email).first()
