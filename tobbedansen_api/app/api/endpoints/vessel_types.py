"""Vessel-type catalogue endpoint used to fill the registration form."""

from typing import List

from fastapi import APIRouter

from tobbedansen_api.app.schemas.vessel_type import VesselTypeRead
from tobbedansen_api.app.services.vessel_type_service import VesselTypeService


router = APIRouter()


@router.get("", response_model=List[VesselTypeRead])
async def list_vessel_types() -> List[VesselTypeRead]:
    return await VesselTypeService.list_vessel_types()
