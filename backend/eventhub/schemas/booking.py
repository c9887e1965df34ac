"""
Pydantic schemas for booking-related request/response validation.
"""

from datetime import datetime
from pydantic import Field

from eventhub.schemas.base import CamelModel

MAX_TICKETS_PER_BOOKING = 10


class BookingCreate(CamelModel):
    # user_id is never read from the body; the caller's id is used
    event_id: int = Field(..., strict=True)
    quantity: int = Field(..., gt=0, le=MAX_TICKETS_PER_BOOKING, strict=True)
    total_price: int = Field(..., ge=0, strict=True)


class BookingResponse(CamelModel):
    id: int
    user_id: int
    event_id: int
    quantity: int
    total_price: int
    booking_date: datetime
