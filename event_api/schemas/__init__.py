"""
Pydantic schemas package
"""

from .common import *
from .event import *
from .user import *

__all__ = [
    "ErrorResponse",
    "EventCreate",
    "EventUpdate",
    "EventResponse",
    "EventWithBooking",
    "BookingResponse",
    "LoginRequest",
    "TokenResponse",
    "SortField",
]
