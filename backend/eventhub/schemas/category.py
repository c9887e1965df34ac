"""
Pydantic schemas for categories.
"""

from pydantic import Field

from eventhub.schemas.base import CamelModel


class CategoryCreate(CamelModel):
    name: str = Field(..., min_length=1)
    icon: str = Field(..., min_length=1)
    color: str = "primary"


class CategoryResponse(CamelModel):
    id: int
    name: str
    icon: str
    color: str
