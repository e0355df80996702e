"""
Top-level API router.

This router aggregates the domain-specific routers.  The public site
calls the routes below ``/api`` directly, so they are not versioned.
When new endpoints are added, update this file to include their
routers.
"""

from fastapi import APIRouter

from .endpoints import events, registrations, vessel_types

router = APIRouter()

router.include_router(events.router, prefix="/event", tags=["events"])
router.include_router(registrations.router, prefix="/registration", tags=["registrations"])
router.include_router(vessel_types.router, prefix="/vessel-types", tags=["vessel types"])
