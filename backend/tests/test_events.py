"""
Tests for event endpoints: catalog reads and admin/organizer writes.
"""

import pytest
from httpx import AsyncClient

from conftest import event_payload, headers_for, make_event


@pytest.mark.asyncio
async def test_list_categories(client: AsyncClient):
    response = await client.get("/api/categories")
    assert response.status_code == 200
    data = response.json()
    assert [c["name"] for c in data] == ["Music", "Movies", "Food & Drink", "Sports", "Education", "Business"]
    assert data[0] == {"id": 1, "name": "Music", "icon": "music", "color": "primary"}


@pytest.mark.asyncio
async def test_get_unknown_category(client: AsyncClient):
    response = await client.get("/api/categories/99")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_create_event_as_admin(client: AsyncClient, admin_headers, admin_user):
    """Admin can create an event; organizer defaults to the caller."""
    response = await client.post("/api/events", json=event_payload(), headers=admin_headers)
    assert response.status_code == 201
    data = response.json()
    assert data["id"] == 1
    assert data["title"] == "Jazz Night"
    assert data["price"] == 1500
    assert data["organizerId"] == admin_user.id
    assert data["organizerName"] == admin_user.name
    assert data["organizerImage"]


@pytest.mark.asyncio
async def test_create_event_unauthenticated(client: AsyncClient):
    """Unauthenticated request returns 401."""
    response = await client.post("/api/events", json=event_payload())
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_create_event_non_admin(client: AsyncClient, auth_headers, store):
    """Only admins create events."""
    response = await client.post("/api/events", json=event_payload(), headers=auth_headers)
    assert response.status_code == 403
    assert await store.iter_events() == []


@pytest.mark.asyncio
async def test_create_event_invalid_capacity(client: AsyncClient, admin_headers):
    """Zero capacity is a validation error."""
    response = await client.post("/api/events", json=event_payload(capacity=0), headers=admin_headers)
    assert response.status_code == 400
    assert any(issue["field"] == "capacity" for issue in response.json()["errors"])


@pytest.mark.asyncio
async def test_create_event_rejects_float_price(client: AsyncClient, admin_headers):
    """Prices are integer cents; 15.0 is not accepted."""
    response = await client.post("/api/events", json=event_payload(price=15.0), headers=admin_headers)
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_create_event_missing_fields(client: AsyncClient, admin_headers):
    response = await client.post("/api/events", json={"title": "Incomplete"}, headers=admin_headers)
    assert response.status_code == 400
    fields = {issue["field"] for issue in response.json()["errors"]}
    assert {"description", "price", "capacity"} <= fields


@pytest.mark.asyncio
async def test_get_event(client: AsyncClient, test_event):
    response = await client.get(f"/api/events/{test_event.id}")
    assert response.status_code == 200
    data = response.json()
    assert data["imageUrl"] == test_event.image_url
    assert data["isFeatured"] is False


@pytest.mark.asyncio
async def test_get_unknown_event(client: AsyncClient):
    response = await client.get("/api/events/999")
    assert response.status_code == 404
    assert response.json()["message"] == "Event not found"


@pytest.mark.asyncio
async def test_update_event_as_admin(client: AsyncClient, admin_headers, test_event):
    response = await client.put(
        f"/api/events/{test_event.id}",
        json={"isFeatured": True, "price": 2000},
        headers=admin_headers,
    )
    assert response.status_code == 200
    data = response.json()
    assert data["isFeatured"] is True
    assert data["price"] == 2000
    assert data["title"] == test_event.title  # Untouched fields are kept


@pytest.mark.asyncio
async def test_update_event_as_organizer(client: AsyncClient, app, store, test_user):
    """A non-admin organizer may edit their own event."""
    event = await make_event(store, test_user)
    response = await client.put(
        f"/api/events/{event.id}",
        json={"title": "Renamed"},
        headers=headers_for(app, test_user),
    )
    assert response.status_code == 200
    assert response.json()["title"] == "Renamed"


@pytest.mark.asyncio
async def test_update_event_not_organizer(client: AsyncClient, auth_headers, store, test_event):
    """Non-admin editing someone else's event gets 403 and nothing changes."""
    response = await client.put(
        f"/api/events/{test_event.id}",
        json={"title": "Hijacked", "price": 1},
        headers=auth_headers,
    )
    assert response.status_code == 403
    assert response.json()["message"] == "Permission denied"

    stored = await store.get_event(test_event.id)
    assert stored.title == "Jazz Night"
    assert stored.price == 1500


@pytest.mark.asyncio
async def test_update_event_unauthenticated(client: AsyncClient, test_event):
    response = await client.put(f"/api/events/{test_event.id}", json={"title": "x"})
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_update_unknown_event(client: AsyncClient, admin_headers):
    response = await client.put("/api/events/999", json={"title": "x"}, headers=admin_headers)
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_update_event_rejects_null_field(client: AsyncClient, admin_headers, test_event):
    response = await client.put(f"/api/events/{test_event.id}", json={"title": None}, headers=admin_headers)
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_delete_event(client: AsyncClient, admin_headers, test_event):
    response = await client.delete(f"/api/events/{test_event.id}", headers=admin_headers)
    assert response.status_code == 204

    response = await client.get(f"/api/events/{test_event.id}")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_delete_event_not_organizer(client: AsyncClient, auth_headers, store, test_event):
    response = await client.delete(f"/api/events/{test_event.id}", headers=auth_headers)
    assert response.status_code == 403
    assert await store.get_event(test_event.id) is not None


@pytest.mark.asyncio
async def test_delete_unknown_event(client: AsyncClient, admin_headers):
    response = await client.delete("/api/events/999", headers=admin_headers)
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_list_events_paginated(client: AsyncClient, store, admin_user):
    for i in range(5):
        await make_event(store, admin_user, title=f"Event {i}")

    response = await client.get("/api/events", params={"limit": 2, "offset": 1})
    assert response.status_code == 200
    assert [e["title"] for e in response.json()] == ["Event 1", "Event 2"]

    response = await client.get("/api/events", params={"offset": 50})
    assert response.json() == []


@pytest.mark.asyncio
async def test_list_events_by_category(client: AsyncClient, store, admin_user):
    await make_event(store, admin_user, title="Gig", category_id=1)
    await make_event(store, admin_user, title="Match", category_id=4)

    response = await client.get("/api/events", params={"category": 4})
    assert [e["title"] for e in response.json()] == ["Match"]

    response = await client.get("/api/events", params={"category": 42})
    assert response.json() == []


@pytest.mark.asyncio
async def test_search_takes_precedence_over_category(client: AsyncClient, store, admin_user):
    await make_event(store, admin_user, title="Rock Gig", category_id=1)
    await make_event(store, admin_user, title="Football", category_id=4)

    response = await client.get("/api/events", params={"search": "ROCK", "category": 4})
    assert [e["title"] for e in response.json()] == ["Rock Gig"]


@pytest.mark.asyncio
async def test_list_featured(client: AsyncClient, store, admin_user):
    await make_event(store, admin_user, title="Plain")
    for i in range(8):
        await make_event(store, admin_user, title=f"Star {i}", is_featured=True)

    response = await client.get("/api/events/featured")
    assert response.status_code == 200
    titles = [e["title"] for e in response.json()]
    assert titles == [f"Star {i}" for i in range(6)]

    response = await client.get("/api/events/featured", params={"limit": 2})
    assert len(response.json()) == 2


@pytest.mark.asyncio
async def test_malformed_list_parameters_never_fail(client: AsyncClient, store, admin_user):
    """Catalog reads are total: junk query values degrade to defaults or an empty list."""
    for i in range(3):
        await make_event(store, admin_user, title=f"Event {i}", is_featured=True)

    response = await client.get("/api/events", params={"category": "abc"})
    assert response.status_code == 200
    assert response.json() == []

    for params in ({"limit": "abc"}, {"offset": -1}, {"limit": -5, "offset": "x"}):
        response = await client.get("/api/events", params=params)
        assert response.status_code == 200
        assert [e["title"] for e in response.json()] == ["Event 0", "Event 1", "Event 2"]

    response = await client.get("/api/events/featured", params={"limit": "x"})
    assert response.status_code == 200
    assert len(response.json()) == 3


@pytest.mark.asyncio
async def test_create_event_requires_timezone(client: AsyncClient, admin_headers):
    response = await client.post(
        "/api/events", json=event_payload(date="2030-01-01T10:00:00"), headers=admin_headers
    )
    assert response.status_code == 400
    assert any(issue["field"] == "date" for issue in response.json()["errors"])


@pytest.mark.asyncio
async def test_update_event_requires_timezone(client: AsyncClient, admin_headers, test_event):
    response = await client.put(
        f"/api/events/{test_event.id}", json={"date": "2030-01-01T10:00:00"}, headers=admin_headers
    )
    assert response.status_code == 400

    response = await client.put(
        f"/api/events/{test_event.id}", json={"date": "2030-01-01T10:00:00Z"}, headers=admin_headers
    )
    assert response.status_code == 200
