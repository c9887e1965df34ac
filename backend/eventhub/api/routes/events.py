"""
Event endpoints: public catalog reads, admin/organizer writes.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status

from eventhub.api.deps import get_booking_locks, get_store
from eventhub.core.security import get_current_user
from eventhub.infrastructure import KeyedLock, MemoryStore
from eventhub.models import User
from eventhub.schemas.event import EventCreate, EventResponse, EventUpdate
from eventhub.services import event_service

router = APIRouter(prefix="/events", tags=["Events"])


@router.get("", response_model=list[EventResponse])
async def list_events_endpoint(
    limit: Optional[str] = Query(None),
    offset: Optional[str] = Query(None),
    category: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
    store: MemoryStore = Depends(get_store),
):
    """
    List events. `search` takes precedence over `category`, which takes
    precedence over `limit`/`offset` pagination. Malformed values never
    fail the read: a non-integer category matches nothing, and a bad
    limit or offset falls back to its default.
    """
    listing = event_service.resolve_listing(search, category)
    if listing == "search":
        return await event_service.search_events(store, search)
    if listing == "category":
        category_id = event_service.parse_query_int(category)
        if category_id is None:
            return []
        return await event_service.list_by_category(store, category_id)
    return await event_service.list_events(
        store,
        event_service.parse_count(limit, event_service.DEFAULT_PAGE_SIZE),
        event_service.parse_count(offset, 0),
    )


@router.get("/featured", response_model=list[EventResponse])
async def list_featured_endpoint(
    limit: Optional[str] = Query(None),
    store: MemoryStore = Depends(get_store),
):
    return await event_service.list_featured(
        store, event_service.parse_count(limit, event_service.DEFAULT_FEATURED_LIMIT)
    )


@router.get("/{event_id}", response_model=EventResponse)
async def get_event_endpoint(event_id: int, store: MemoryStore = Depends(get_store)):
    return await event_service.get_event(store, event_id)


@router.post("", response_model=EventResponse, status_code=status.HTTP_201_CREATED)
async def create_event_endpoint(
    event_data: EventCreate,
    user: User = Depends(get_current_user),
    store: MemoryStore = Depends(get_store),
):
    """Create a new event. Admin only."""
    return await event_service.create_event(store, event_data, user)


@router.put("/{event_id}", response_model=EventResponse)
async def update_event_endpoint(
    event_id: int,
    patch: EventUpdate,
    user: User = Depends(get_current_user),
    store: MemoryStore = Depends(get_store),
    locks: KeyedLock = Depends(get_booking_locks),
):
    """Partially update an event. Admin or the event's organizer."""
    return await event_service.update_event(store, locks, event_id, patch, user)


@router.delete("/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_event_endpoint(
    event_id: int,
    user: User = Depends(get_current_user),
    store: MemoryStore = Depends(get_store),
):
    """Delete an event. Its bookings are kept."""
    await event_service.delete_event(store, event_id, user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
