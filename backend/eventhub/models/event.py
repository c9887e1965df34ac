"""
Event entity.

Key design decisions:
- `price` is an integer amount in minor currency units (cents), never a float
- `capacity` is the total ticket count; availability is derived from bookings
  rather than denormalized, so there is nothing to drift out of sync
- `category_id` is an advisory reference, not enforced by the store
- organizer name/image are cached copies taken when the event is created
"""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Event:
    id: int
    title: str
    description: str
    image_url: str
    date: datetime
    location: str
    price: int
    capacity: int
    organizer_id: int
    organizer_name: str
    organizer_image: str
    category_id: int
    is_featured: bool = False

    def __repr__(self) -> str:
        return f"<Event(id={self.id}, title={self.title}, capacity={self.capacity})>"
