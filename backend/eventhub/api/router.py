"""
Central API router that aggregates all route modules.
"""

from fastapi import APIRouter
from eventhub.api.routes import auth, bookings, categories, events

api_router = APIRouter(prefix="/api")
api_router.include_router(auth.router)
api_router.include_router(categories.router)
api_router.include_router(events.router)
api_router.include_router(bookings.router)
