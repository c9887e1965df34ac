"""
Request-scoped accessors for the objects `create_app` attaches to app.state.
"""

from fastapi import Request

from eventhub.core.config import Settings
from eventhub.infrastructure import KeyedLock, MemoryStore, SessionStore


def get_store(request: Request) -> MemoryStore:
    return request.app.state.store


def get_sessions(request: Request) -> SessionStore:
    return request.app.state.sessions


def get_booking_locks(request: Request) -> KeyedLock:
    return request.app.state.booking_locks


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings
