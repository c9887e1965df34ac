"""
Category endpoints (read-only).
"""

from fastapi import APIRouter, Depends

from eventhub.api.deps import get_store
from eventhub.infrastructure import MemoryStore
from eventhub.schemas.category import CategoryResponse
from eventhub.services import event_service

router = APIRouter(prefix="/categories", tags=["Categories"])


@router.get("", response_model=list[CategoryResponse])
async def list_categories_endpoint(store: MemoryStore = Depends(get_store)):
    return await event_service.list_categories(store)


@router.get("/{category_id}", response_model=CategoryResponse)
async def get_category_endpoint(category_id: int, store: MemoryStore = Depends(get_store)):
    return await event_service.get_category(store, category_id)
