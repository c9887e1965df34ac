"""
Concurrency tests for booking admission.

`YieldingStore` suspends at every store call, the way a database-backed store
would, so concurrent requests interleave between the capacity read and the
insert unless admission is serialized.
"""

import asyncio

import pytest

from conftest import headers_for, make_event, make_user
from eventhub.core.exceptions import BusinessRuleViolation
from eventhub.infrastructure import KeyedLock, MemoryStore
from eventhub.schemas.booking import BookingCreate
from eventhub.schemas.event import EventUpdate
from eventhub.services import booking_service, event_service


class YieldingStore(MemoryStore):
    async def get_event(self, event_id):
        await asyncio.sleep(0)
        return await super().get_event(event_id)

    async def get_bookings_by_event(self, event_id):
        await asyncio.sleep(0)
        return await super().get_bookings_by_event(event_id)

    async def create_booking(self, payload, user_id):
        await asyncio.sleep(0)
        return await super().create_booking(payload, user_id)


async def _attempt(store, locks, user, event, quantity):
    payload = BookingCreate(event_id=event.id, quantity=quantity, total_price=event.price * quantity)
    try:
        return await booking_service.book_tickets(store, locks, user, payload)
    except BusinessRuleViolation:
        return None


@pytest.mark.asyncio
async def test_concurrent_bookings_never_exceed_capacity():
    store = YieldingStore()
    locks = KeyedLock()
    organizer = await make_user(store, "organizer", is_admin=True)
    buyers = [await make_user(store, f"buyer{i}") for i in range(20)]
    event = await make_event(store, organizer, capacity=7, price=500)

    results = await asyncio.gather(*(_attempt(store, locks, buyer, event, 2) for buyer in buyers))

    admitted = [b for b in results if b is not None]
    booked = sum(b.quantity for b in await store.get_bookings_by_event(event.id))
    assert booked <= event.capacity
    assert len(admitted) == 3  # 3 * 2 = 6, a fourth pair would overflow 7
    assert all(b.total_price == 1000 for b in admitted)


@pytest.mark.asyncio
async def test_unserialized_check_then_act_oversells():
    """The same sequence without the per-event lock admits too many bookings."""
    store = YieldingStore()
    organizer = await make_user(store, "organizer", is_admin=True)
    event = await make_event(store, organizer, capacity=2, price=500)

    async def naive(user_id):
        await store.get_event(event.id)
        booked = sum(b.quantity for b in await store.get_bookings_by_event(event.id))
        if booked + 1 > event.capacity:
            return None
        return await store.create_booking(BookingCreate(event_id=event.id, quantity=1, total_price=500), user_id=user_id)

    await asyncio.gather(*(naive(i) for i in range(10)))
    assert sum(b.quantity for b in await store.get_bookings_by_event(event.id)) > event.capacity


@pytest.mark.asyncio
async def test_different_events_do_not_block_each_other():
    locks = KeyedLock()
    async with locks.hold(1):
        assert locks.locked(1)
        assert not locks.locked(2)
        async with locks.hold(2):
            assert locks.locked(2)
    assert not locks.locked(1)


@pytest.mark.asyncio
async def test_concurrent_http_bookings(client, app, store, admin_user):
    event = await make_event(store, admin_user, capacity=3, price=1000)
    buyers = [await make_user(store, f"fan{i}") for i in range(6)]

    responses = await asyncio.gather(*(
        client.post(
            "/api/bookings",
            json={"eventId": event.id, "quantity": 1, "totalPrice": 1000},
            headers=headers_for(app, buyer),
        )
        for buyer in buyers
    ))

    statuses = sorted(r.status_code for r in responses)
    assert statuses == [201, 201, 201, 400, 400, 400]
    assert sum(b.quantity for b in await store.get_bookings_by_event(event.id)) == 3


@pytest.mark.asyncio
async def test_event_update_waits_for_in_flight_admission(app, store, admin_user):
    """A price change cannot land while a booking for the same event holds the lock."""
    locks = app.state.booking_locks
    event = await make_event(store, admin_user, price=500)

    async with locks.hold(event.id):
        update = asyncio.create_task(
            event_service.update_event(store, locks, event.id, EventUpdate(price=900), admin_user)
        )
        for _ in range(5):
            await asyncio.sleep(0)
        assert not update.done()
        assert (await store.get_event(event.id)).price == 500

    updated = await update
    assert updated.price == 900
