"""
Database models package
"""

from .event import Event
from .user import Role, User
from .user_event import BookingStatus, UserEvent

__all__ = ["Event", "User", "Role", "UserEvent", "BookingStatus"]
