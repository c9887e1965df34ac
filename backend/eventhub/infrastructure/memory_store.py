"""
In-memory entity store for users, categories, events and bookings.

STORAGE MODEL
=============

Each entity kind lives in its own `Collection`: a dict keyed by integer id
plus a monotonic counter. Ids start at 1, are assigned at insert time and are
never reused, even after a delete. Iteration follows insertion order, which
is the order the query layer exposes.

The public methods are coroutines so the store honours the same contract a
database-backed implementation would (every call is a potential suspension
point). Id assignment itself never awaits, so counters stay consistent on a
single event loop.

Updates take an explicit patch model (`EventUpdate`, `UserUpdate`) and merge
field by field: unset fields keep their stored value.

The store does not enforce referential integrity: an event's `category_id`
is advisory, and deleting an event leaves its bookings in place.
"""

from dataclasses import replace
from datetime import datetime, timezone
from typing import Callable, Generic, Iterator, Optional, TypeVar

from eventhub.models import Booking, Category, Event, User
from eventhub.schemas.booking import BookingCreate
from eventhub.schemas.category import CategoryCreate
from eventhub.schemas.event import EventCreate, EventUpdate
from eventhub.schemas.user import UserCreate, UserUpdate

T = TypeVar("T")

DEFAULT_CATEGORIES = [
    CategoryCreate(name="Music", icon="music", color="primary"),
    CategoryCreate(name="Movies", icon="film", color="secondary"),
    CategoryCreate(name="Food & Drink", icon="utensils", color="accent"),
    CategoryCreate(name="Sports", icon="zap", color="green"),
    CategoryCreate(name="Education", icon="book-open", color="yellow"),
    CategoryCreate(name="Business", icon="briefcase", color="red"),
]


class Collection(Generic[T]):
    """Id-indexed rows with a per-collection monotonic id counter."""

    def __init__(self) -> None:
        self._rows: dict[int, T] = {}
        self._next_id = 1

    def insert(self, build: Callable[[int], T]) -> T:
        entity_id = self._next_id
        self._next_id += 1
        entity = build(entity_id)
        self._rows[entity_id] = entity
        return entity

    def get(self, entity_id: int) -> Optional[T]:
        return self._rows.get(entity_id)

    def put(self, entity_id: int, entity: T) -> None:
        self._rows[entity_id] = entity

    def remove(self, entity_id: int) -> bool:
        return self._rows.pop(entity_id, None) is not None

    def values(self) -> Iterator[T]:
        # Snapshot so callers may mutate the collection while iterating
        return iter(list(self._rows.values()))

    def __len__(self) -> int:
        return len(self._rows)


class MemoryStore:
    def __init__(self, seed_categories: bool = True) -> None:
        self.users: Collection[User] = Collection()
        self.categories: Collection[Category] = Collection()
        self.events: Collection[Event] = Collection()
        self.bookings: Collection[Booking] = Collection()

        if seed_categories:
            for category in DEFAULT_CATEGORIES:
                self._insert_category(category)

    # Users

    async def get_user(self, user_id: int) -> Optional[User]:
        return self.users.get(user_id)

    async def get_user_by_username(self, username: str) -> Optional[User]:
        return next((u for u in self.users.values() if u.username == username), None)

    async def get_user_by_email(self, email: str) -> Optional[User]:
        return next((u for u in self.users.values() if u.email == email), None)

    async def create_user(self, payload: UserCreate) -> User:
        """Insert a user. `payload.password` must already be hashed."""
        return self.users.insert(lambda user_id: User(
            id=user_id,
            username=payload.username,
            password=payload.password,
            email=payload.email,
            name=payload.name,
            is_admin=False,
        ))

    async def update_user(self, user_id: int, patch: UserUpdate) -> Optional[User]:
        user = self.users.get(user_id)
        if user is None:
            return None
        updated = replace(user, **patch.changes())
        self.users.put(user_id, updated)
        return updated

    # Categories

    def _insert_category(self, payload: CategoryCreate) -> Category:
        return self.categories.insert(lambda category_id: Category(id=category_id, **payload.model_dump()))

    async def get_category(self, category_id: int) -> Optional[Category]:
        return self.categories.get(category_id)

    async def list_categories(self) -> list[Category]:
        return list(self.categories.values())

    async def create_category(self, payload: CategoryCreate) -> Category:
        return self._insert_category(payload)

    # Events

    async def get_event(self, event_id: int) -> Optional[Event]:
        return self.events.get(event_id)

    async def iter_events(self) -> list[Event]:
        """All events in insertion order."""
        return list(self.events.values())

    async def create_event(self, payload: EventCreate) -> Event:
        """Insert an event. Organizer fields must be resolved by the caller."""
        return self.events.insert(lambda event_id: Event(id=event_id, **payload.model_dump()))

    async def update_event(self, event_id: int, patch: EventUpdate) -> Optional[Event]:
        event = self.events.get(event_id)
        if event is None:
            return None
        updated = replace(event, **patch.changes())
        self.events.put(event_id, updated)
        return updated

    async def delete_event(self, event_id: int) -> bool:
        return self.events.remove(event_id)

    # Bookings

    async def get_booking(self, booking_id: int) -> Optional[Booking]:
        return self.bookings.get(booking_id)

    async def get_bookings_by_user(self, user_id: int) -> list[Booking]:
        return [b for b in self.bookings.values() if b.user_id == user_id]

    async def get_bookings_by_event(self, event_id: int) -> list[Booking]:
        return [b for b in self.bookings.values() if b.event_id == event_id]

    async def create_booking(self, payload: BookingCreate, user_id: int) -> Booking:
        return self.bookings.insert(lambda booking_id: Booking(
            id=booking_id,
            user_id=user_id,
            event_id=payload.event_id,
            quantity=payload.quantity,
            total_price=payload.total_price,
            booking_date=datetime.now(timezone.utc),
        ))

    async def delete_booking(self, booking_id: int) -> bool:
        return self.bookings.remove(booking_id)
