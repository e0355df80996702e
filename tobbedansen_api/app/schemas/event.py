"""
Pydantic models for event data.

``EventCreate`` is used by the admin tooling to open a new festival
edition; ``EventRead`` is what ``GET /api/event/current`` returns.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class EventBase(BaseModel):
    year: int = Field(..., examples=[2024])
    registration_start_date: Optional[datetime] = Field(
        None, examples=["2024-03-01T10:00:00Z"]
    )


class EventCreate(EventBase):
    """Schema for creating an event.  ``id`` is generated when omitted."""

    id: Optional[str] = None


class EventRead(EventBase):
    """Schema for reading an event from the API."""

    id: str

    model_config = {
        "from_attributes": True,
    }
