"""
Pytest fixtures for the app, its in-memory store, HTTP client and users.

Every test gets a fresh app with its own store, so no state leaks between
tests. Users are inserted straight into the store and given a session token,
which keeps bcrypt work (low rounds) out of most tests.
"""

from datetime import datetime, timezone, timedelta
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from eventhub.core.config import Settings
from eventhub.core.security import hash_password
from eventhub.infrastructure import MemoryStore
from eventhub.main import create_app
from eventhub.models import Event, User
from eventhub.schemas.event import EventCreate
from eventhub.schemas.user import UserCreate, UserUpdate

TEST_ROUNDS = 4


@pytest.fixture
def settings() -> Settings:
    return Settings(ENVIRONMENT="test", BCRYPT_ROUNDS=TEST_ROUNDS, _env_file=None)


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def app(settings: Settings, store: MemoryStore):
    return create_app(settings=settings, store=store)


@pytest_asyncio.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


async def make_user(store: MemoryStore, username: str, is_admin: bool = False, password: str = "testpassword123") -> User:
    user = await store.create_user(UserCreate(
        username=username,
        password=hash_password(password, TEST_ROUNDS),
        email=f"{username}@example.com",
        name=username.title(),
    ))
    if is_admin:
        user = await store.update_user(user.id, UserUpdate(is_admin=True))
    return user


def headers_for(app, user: User) -> dict:
    token = app.state.sessions.create(user.id)
    return {"Authorization": f"Bearer {token}"}


def event_payload(**overrides) -> dict:
    """Request body for POST /api/events, camelCase as the client sends it."""
    payload = {
        "title": "Jazz Night",
        "description": "An evening of live music downtown",
        "imageUrl": "https://example.com/jazz.jpg",
        "date": (datetime.now(timezone.utc) + timedelta(days=30)).isoformat(),
        "location": "Blue Note, New York",
        "price": 1500,
        "capacity": 100,
        "categoryId": 1,
        "isFeatured": False,
    }
    payload.update(overrides)
    return payload


async def make_event(store: MemoryStore, organizer: User, **overrides) -> Event:
    fields = {
        "title": "Jazz Night",
        "description": "An evening of live music downtown",
        "image_url": "https://example.com/jazz.jpg",
        "date": datetime.now(timezone.utc) + timedelta(days=30),
        "location": "Blue Note, New York",
        "price": 1500,
        "capacity": 100,
        "category_id": 1,
        "is_featured": False,
        "organizer_id": organizer.id,
        "organizer_name": organizer.name,
        "organizer_image": "https://example.com/organizer.jpg",
    }
    fields.update(overrides)
    return await store.create_event(EventCreate(**fields))


@pytest_asyncio.fixture
async def test_user(store: MemoryStore) -> User:
    return await make_user(store, "testuser")


@pytest_asyncio.fixture
async def other_user(store: MemoryStore) -> User:
    return await make_user(store, "otheruser")


@pytest_asyncio.fixture
async def admin_user(store: MemoryStore) -> User:
    return await make_user(store, "adminuser", is_admin=True)


@pytest.fixture
def auth_headers(app, test_user: User) -> dict:
    return headers_for(app, test_user)


@pytest.fixture
def other_headers(app, other_user: User) -> dict:
    return headers_for(app, other_user)


@pytest.fixture
def admin_headers(app, admin_user: User) -> dict:
    return headers_for(app, admin_user)


@pytest_asyncio.fixture
async def test_event(store: MemoryStore, admin_user: User) -> Event:
    """An admin-organized event priced at $15.00 with 100 tickets."""
    return await make_event(store, admin_user)


@pytest_asyncio.fixture
async def small_event(store: MemoryStore, admin_user: User) -> Event:
    """An event priced at $15.00 with only 2 tickets."""
    return await make_event(store, admin_user, title="Intimate Set", capacity=2)
