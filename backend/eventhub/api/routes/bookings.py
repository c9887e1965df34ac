"""
Booking endpoints with per-event serialized admission.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status

from eventhub.api.deps import get_booking_locks, get_store
from eventhub.core.security import get_current_user
from eventhub.infrastructure import KeyedLock, MemoryStore
from eventhub.models import User
from eventhub.schemas.booking import BookingCreate, BookingResponse
from eventhub.services import booking_service

router = APIRouter(prefix="/bookings", tags=["Bookings"])


@router.get("", response_model=list[BookingResponse])
async def list_bookings_endpoint(
    event: Optional[int] = Query(None),
    user: User = Depends(get_current_user),
    store: MemoryStore = Depends(get_store),
):
    """
    The caller's own bookings. Admins may pass `event` to see every booking
    for that event; the filter is ignored for everyone else.
    """
    return await booking_service.list_bookings(store, user, event)


@router.get("/{booking_id}", response_model=BookingResponse)
async def get_booking_endpoint(
    booking_id: int,
    user: User = Depends(get_current_user),
    store: MemoryStore = Depends(get_store),
):
    return await booking_service.get_booking(store, booking_id, user)


@router.post("", response_model=BookingResponse, status_code=status.HTTP_201_CREATED)
async def create_booking_endpoint(
    booking_data: BookingCreate,
    user: User = Depends(get_current_user),
    store: MemoryStore = Depends(get_store),
    locks: KeyedLock = Depends(get_booking_locks),
):
    """
    Book tickets for an event.

    The submitted totalPrice must equal price * quantity, and the event must
    have enough remaining capacity. A capacity rejection reports how many
    tickets are still `available`.
    """
    return await booking_service.book_tickets(store, locks, user, booking_data)


@router.delete("/{booking_id}", status_code=status.HTTP_204_NO_CONTENT)
async def cancel_booking_endpoint(
    booking_id: int,
    user: User = Depends(get_current_user),
    store: MemoryStore = Depends(get_store),
):
    """Cancel a booking. Owner or admin."""
    await booking_service.cancel_booking(store, booking_id, user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
