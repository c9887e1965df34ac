"""
Pydantic schemas for event-related request/response validation.

Money and counts are strict integers: a float price (15.0) or a boolean is
rejected rather than coerced. Event dates must carry a UTC offset.
"""

from datetime import datetime
from typing import Optional
from pydantic import AwareDatetime, Field

from eventhub.schemas.base import CamelModel, PatchModel

DEFAULT_ORGANIZER_IMAGE = "https://randomuser.me/api/portraits/lego/1.jpg"


class EventCreate(CamelModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    image_url: str = Field(..., min_length=1)
    date: AwareDatetime
    location: str = Field(..., min_length=1, max_length=255)
    price: int = Field(..., ge=0, strict=True)
    capacity: int = Field(..., gt=0, strict=True)
    category_id: int = Field(..., strict=True)
    is_featured: bool = False
    # Filled in from the caller when omitted
    organizer_id: Optional[int] = Field(None, strict=True)
    organizer_name: Optional[str] = None
    organizer_image: Optional[str] = None


class EventUpdate(PatchModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, min_length=1)
    image_url: Optional[str] = Field(None, min_length=1)
    date: Optional[AwareDatetime] = None
    location: Optional[str] = Field(None, min_length=1, max_length=255)
    price: Optional[int] = Field(None, ge=0, strict=True)
    capacity: Optional[int] = Field(None, gt=0, strict=True)
    category_id: Optional[int] = Field(None, strict=True)
    is_featured: Optional[bool] = None
    organizer_id: Optional[int] = Field(None, strict=True)
    organizer_name: Optional[str] = None
    organizer_image: Optional[str] = None


class EventResponse(CamelModel):
    id: int
    title: str
    description: str
    image_url: str
    date: datetime
    location: str
    price: int
    capacity: int
    organizer_id: int
    organizer_name: str
    organizer_image: str
    category_id: int
    is_featured: bool
