from eventhub.schemas.user import (
    UserCreate, UserLogin, UserUpdate, ProfileUpdate, AdminFlagUpdate, UserResponse, SessionResponse,
)
from eventhub.schemas.category import CategoryCreate, CategoryResponse
from eventhub.schemas.event import EventCreate, EventUpdate, EventResponse
from eventhub.schemas.booking import BookingCreate, BookingResponse, MAX_TICKETS_PER_BOOKING

__all__ = [
    "UserCreate", "UserLogin", "UserUpdate", "ProfileUpdate", "AdminFlagUpdate",
    "UserResponse", "SessionResponse",
    "CategoryCreate", "CategoryResponse",
    "EventCreate", "EventUpdate", "EventResponse",
    "BookingCreate", "BookingResponse", "MAX_TICKETS_PER_BOOKING",
]
