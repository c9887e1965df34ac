"""
Event service: catalog writes and the read-side query layer.

Reads never fail; the worst case is an empty list. Writes go through the
authorization gate before touching the store. Updates hold the same
per-event lock as booking admission, so a price or capacity change never
lands between an admission's checks and its insert.
"""

from typing import Optional

from eventhub.core.exceptions import InternalError, NotFoundError
from eventhub.core.logging import get_logger
from eventhub.infrastructure import KeyedLock, MemoryStore
from eventhub.models import Category, Event, User
from eventhub.schemas.event import DEFAULT_ORGANIZER_IMAGE, EventCreate, EventUpdate
from eventhub.services.authorization import require_event_creator, require_event_owner

logger = get_logger(__name__)

DEFAULT_PAGE_SIZE = 100
DEFAULT_FEATURED_LIMIT = 6


# Query layer

async def list_events(
    store: MemoryStore,
    limit: int = DEFAULT_PAGE_SIZE,
    offset: int = 0,
) -> list[Event]:
    """Contiguous slice in insertion order. An offset past the end yields []."""
    events = await store.iter_events()
    return events[offset:offset + limit]


async def list_featured(store: MemoryStore, limit: int = DEFAULT_FEATURED_LIMIT) -> list[Event]:
    events = await store.iter_events()
    return [e for e in events if e.is_featured][:limit]


async def list_by_category(store: MemoryStore, category_id: int) -> list[Event]:
    events = await store.iter_events()
    return [e for e in events if e.category_id == category_id]


async def search_events(store: MemoryStore, query: str) -> list[Event]:
    """
    Case-insensitive substring match on title, description or location.
    An empty query matches every event.
    """
    needle = query.lower()
    events = await store.iter_events()
    return [
        e for e in events
        if needle in e.title.lower()
        or needle in e.description.lower()
        or needle in e.location.lower()
    ]


async def get_event(store: MemoryStore, event_id: int) -> Event:
    event = await store.get_event(event_id)
    if event is None:
        raise NotFoundError("Event not found")
    return event


async def list_categories(store: MemoryStore) -> list[Category]:
    return await store.list_categories()


async def get_category(store: MemoryStore, category_id: int) -> Category:
    category = await store.get_category(category_id)
    if category is None:
        raise NotFoundError("Category not found")
    return category


# Writes

async def create_event(store: MemoryStore, payload: EventCreate, user: User) -> Event:
    require_event_creator(user)

    resolved = payload.model_copy(update={
        "organizer_id": payload.organizer_id if payload.organizer_id is not None else user.id,
        "organizer_name": payload.organizer_name or user.name,
        "organizer_image": payload.organizer_image or DEFAULT_ORGANIZER_IMAGE,
    })
    if await store.get_category(resolved.category_id) is None:
        logger.warning("event_unknown_category", category_id=resolved.category_id)

    event = await store.create_event(resolved)
    logger.info("event_created", event_id=event.id, title=event.title, capacity=event.capacity, user_id=user.id)
    return event


async def update_event(
    store: MemoryStore,
    locks: KeyedLock,
    event_id: int,
    patch: EventUpdate,
    user: User,
) -> Event:
    async with locks.hold(event_id):
        event = await get_event(store, event_id)
        require_event_owner(user, event)

        updated = await store.update_event(event_id, patch)
        if updated is None:
            # Deleted between the lookup and the write
            raise NotFoundError("Event not found")

        if "capacity" in patch.model_fields_set and updated.capacity < event.capacity:
            booked = sum(b.quantity for b in await store.get_bookings_by_event(event_id))
            if booked > updated.capacity:
                # Existing bookings are not revalidated against a lowered capacity
                logger.warning(
                    "event_capacity_below_booked", event_id=event_id, capacity=updated.capacity, booked=booked
                )

    logger.info("event_updated", event_id=event_id, fields=sorted(patch.model_fields_set), user_id=user.id)
    return updated


async def delete_event(store: MemoryStore, event_id: int, user: User) -> None:
    event = await get_event(store, event_id)
    require_event_owner(user, event)

    if not await store.delete_event(event_id):
        raise InternalError("Failed to delete event")

    # Bookings are kept; they stay retrievable by id after the event is gone
    orphaned = len(await store.get_bookings_by_event(event_id))
    if orphaned:
        logger.warning("event_deleted_with_bookings", event_id=event_id, bookings=orphaned)
    logger.info("event_deleted", event_id=event_id, user_id=user.id)


def resolve_listing(
    search: Optional[str],
    category: Optional[str],
) -> str:
    """Which listing a GET /events query selects: search, then category, then pagination."""
    if search is not None:
        return "search"
    if category:
        return "category"
    return "page"


def parse_query_int(raw: Optional[str]) -> Optional[int]:
    """Integer value of a query parameter, or None when absent or not an integer."""
    if raw is None:
        return None
    try:
        return int(raw.strip())
    except ValueError:
        return None


def parse_count(raw: Optional[str], default: int) -> int:
    """A limit or offset from the query string. Junk and negatives fall back to the default."""
    value = parse_query_int(raw)
    if value is None or value < 0:
        return default
    return value
