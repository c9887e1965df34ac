"""
Booking service: admission of new bookings and cancellation.

CONCURRENCY STRATEGY: Per-event serialization
=============================================

Problem:
  Admission is check-then-act. Two requests for the last tickets both read
  the existing bookings, both see room, both insert. Result: overselling.
  Every store call is an await, so on an event loop the two requests can
  interleave between the capacity read and the insert.

Solution:
  The whole admission sequence for one event runs while holding that event's
  asyncio.Lock (`KeyedLock.hold(event_id)`):

  1. Resolve the event                      -> 404 Event not found
  2. Verify total_price == price * quantity -> 400 Invalid price calculation
  3. Sum quantity over the event's bookings
  4. Reject if booked + quantity > capacity -> 400 Not enough tickets available
  5. Insert with a server-assigned booking_date

  Bookings for different events never contend. Cancellation only frees
  capacity, so it does not take the lock.

Alternative considered:
  - Conditional insert against a running per-event counter: avoids the scan in
    step 3, but the counter must be kept in step with deletes of both bookings
    and events. The scan keeps bookings the single source of truth.
"""

import time

from eventhub.core.exceptions import BusinessRuleViolation, InternalError, NotFoundError
from eventhub.core.logging import get_logger
from eventhub.core.metrics import (
    booking_cancellations,
    booking_latency,
    booking_lock_wait,
    record_booking_attempt,
)
from eventhub.infrastructure import KeyedLock, MemoryStore
from eventhub.models import Booking, User
from eventhub.schemas.booking import BookingCreate
from eventhub.services.authorization import booking_list_scope, require_booking_owner

logger = get_logger(__name__)


async def book_tickets(
    store: MemoryStore,
    locks: KeyedLock,
    user: User,
    payload: BookingCreate,
) -> Booking:
    """Admit and persist a booking for `user`, or raise on the first failed check."""
    started = time.perf_counter()

    async with locks.hold(payload.event_id):
        booking_lock_wait.observe(time.perf_counter() - started)

        event = await store.get_event(payload.event_id)
        if event is None:
            record_booking_attempt("event_not_found")
            raise NotFoundError("Event not found")

        expected_total = event.price * payload.quantity
        if payload.total_price != expected_total:
            record_booking_attempt("price_mismatch")
            logger.warning(
                "booking_rejected",
                reason="price_mismatch",
                event_id=event.id,
                expected=expected_total,
                received=payload.total_price,
            )
            raise BusinessRuleViolation("Invalid price calculation")

        existing = await store.get_bookings_by_event(event.id)
        booked = sum(b.quantity for b in existing)

        if booked + payload.quantity > event.capacity:
            available = event.capacity - booked
            record_booking_attempt("sold_out")
            logger.warning(
                "booking_rejected",
                reason="capacity",
                event_id=event.id,
                requested=payload.quantity,
                available=available,
            )
            raise BusinessRuleViolation("Not enough tickets available", available=available)

        booking = await store.create_booking(payload, user_id=user.id)

    booking_latency.observe(time.perf_counter() - started)
    record_booking_attempt("created")
    logger.info(
        "booking_created",
        booking_id=booking.id,
        user_id=user.id,
        event_id=booking.event_id,
        quantity=booking.quantity,
        total_price=booking.total_price,
    )
    return booking


async def get_booking(store: MemoryStore, booking_id: int, user: User) -> Booking:
    booking = await store.get_booking(booking_id)
    if booking is None:
        raise NotFoundError("Booking not found")
    require_booking_owner(user, booking)
    return booking


async def list_bookings(store: MemoryStore, user: User, event_filter: int | None = None) -> list[Booking]:
    scope = booking_list_scope(user, event_filter)
    if scope.event_id is not None:
        return await store.get_bookings_by_event(scope.event_id)
    return await store.get_bookings_by_user(scope.user_id)


async def cancel_booking(store: MemoryStore, booking_id: int, user: User) -> None:
    booking = await get_booking(store, booking_id, user)

    if not await store.delete_booking(booking.id):
        raise InternalError("Failed to cancel booking")

    booking_cancellations.inc()
    logger.info(
        "booking_cancelled",
        booking_id=booking.id,
        user_id=user.id,
        owner_id=booking.user_id,
        event_id=booking.event_id,
        quantity=booking.quantity,
    )
