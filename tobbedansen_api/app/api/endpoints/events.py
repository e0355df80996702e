"""
Event endpoints.

Only the lookup the public site needs is exposed: the event of the
current year.  Events themselves are created with ``manage.py``.
"""

from typing import Optional

from fastapi import APIRouter

from tobbedansen_api.app.schemas.event import EventRead
from tobbedansen_api.app.services.event_service import EventService


router = APIRouter()


@router.get("/current", response_model=Optional[EventRead])
async def get_current_event() -> Optional[EventRead]:
    """Return this year's event, or ``null`` when none is configured."""
    return await EventService.get_current_event()
