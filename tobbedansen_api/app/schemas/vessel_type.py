"""Pydantic models for the vessel-type catalogue."""

from typing import Optional

from pydantic import BaseModel, Field


class VesselTypeCreate(BaseModel):
    name: str = Field(..., min_length=1, examples=["Kano"])
    id: Optional[str] = None


class VesselTypeRead(BaseModel):
    id: str
    name: str

    model_config = {
        "from_attributes": True,
    }
