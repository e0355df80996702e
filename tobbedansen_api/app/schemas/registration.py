"""
Pydantic models for registrations.

A registration is submitted as one nested document: the registrant
(the team's contact person), the other participants, the vessel they
race with and the event they enter.  ``RegistrationCreate`` validates
that document; ``RegistrationRead`` is returned once it is stored.

Dates of birth are lenient on input.  Besides ``YYYY-MM-DD`` they
accept dates without zero padding, full ISO datetimes (the time part
is dropped) and JavaScript style millisecond timestamps, because the
registration form may send any of these.
"""

from datetime import date, datetime, timezone
from typing import Any, List, Optional

from pydantic import BaseModel, Field, field_validator


def coerce_date(value: Any) -> Any:
    """Turn date-like input into a ``date``.

    Strings may be ISO dates or datetimes, or dates without zero
    padding such as ``1990-1-1``.  Numbers are millisecond timestamps;
    ones outside the platform's time range (including ``Infinity`` and
    ``NaN``) are rejected.  Values of any other type are returned
    unchanged so pydantic reports them with its usual error.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc).date()
        except (OverflowError, OSError, ValueError):
            raise ValueError("Invalid date")
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
        except ValueError:
            pass
        try:
            return datetime.strptime(value, "%Y-%m-%d").date()
        except ValueError:
            raise ValueError("Invalid date")
    return value


class RegistrantCreate(BaseModel):
    first_name: str = Field(..., examples=["Jan"])
    last_name: str = Field(..., examples=["Peeters"])
    email: str = Field(..., examples=["jan@example.com"])
    date_of_birth: date = Field(..., examples=["1990-01-01"])
    place_of_birth: str = Field(..., examples=["Gent"])

    @field_validator("date_of_birth", mode="before")
    @classmethod
    def parse_date_of_birth(cls, value: Any) -> Any:
        return coerce_date(value)


class ParticipantCreate(BaseModel):
    first_name: str
    last_name: str
    date_of_birth: date

    @field_validator("date_of_birth", mode="before")
    @classmethod
    def parse_date_of_birth(cls, value: Any) -> Any:
        return coerce_date(value)


class VesselCreate(BaseModel):
    name: str = Field(..., examples=["De Spetter"])
    # Display label of the chosen type as shown in the form.  Only
    # ``vessel_type_id`` is stored.
    type: str = Field(..., examples=["Kano"])
    vessel_type_id: str


class RegistrationCreate(BaseModel):
    """Schema for submitting a registration."""

    music_request: Optional[str] = None
    association: Optional[str] = None
    registrant: RegistrantCreate
    participants: List[ParticipantCreate]
    vessel: VesselCreate
    event: str = Field(..., description="Identifier of the event to register for")


class RegistrantRead(BaseModel):
    id: str
    first_name: str
    last_name: str
    email: str
    date_of_birth: date
    place_of_birth: str


class ParticipantRead(BaseModel):
    id: str
    first_name: str
    last_name: str
    date_of_birth: date


class VesselRead(BaseModel):
    id: str
    name: str
    vessel_type_id: str


class RegistrationRead(BaseModel):
    id: str
    event_id: str
    music_request: Optional[str] = None
    association: Optional[str] = None
    created_at: datetime
    registrant: RegistrantRead
    participants: List[ParticipantRead]
    vessel: VesselRead
