"""
Booking entity representing a user's tickets for an event.

Key design decisions:
- `total_price` is fixed at creation (event.price * quantity at that moment)
- `booking_date` is assigned by the server and never changes
- no update path: a booking is either kept or cancelled (deleted)
"""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Booking:
    id: int
    user_id: int
    event_id: int
    quantity: int
    total_price: int
    booking_date: datetime

    def __repr__(self) -> str:
        return f"<Booking(id={self.id}, user={self.user_id}, event={self.event_id}, qty={self.quantity})>"
