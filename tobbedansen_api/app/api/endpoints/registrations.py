"""
Registration endpoints.

``POST /api/registration`` is the intake used by the registration
form.  Validation problems and a closed registration window are
answered with ``400``; database failures with a generic ``500`` whose
details only end up in the server log.  Bodies of error responses are
plain text because the form shows them to the visitor as is.
"""

import json

from fastapi import APIRouter, Request, status
from fastapi.responses import PlainTextResponse
from pydantic import ValidationError

from tobbedansen_api.app.core.exceptions import (
    PersistenceError,
    RegistrationClosedError,
    UnknownReferenceError,
)
from tobbedansen_api.app.schemas.registration import RegistrationCreate, RegistrationRead
from tobbedansen_api.app.services.registration_service import RegistrationService


REGISTRATION_CLOSED_MESSAGE = "We laten momenteel nog geen inschrijvingen toe."
UNKNOWN_VESSEL_TYPE_MESSAGE = "Het gekozen type vaartuig bestaat niet."
PERSISTENCE_FAILED_MESSAGE = (
    "Er ging iets mis, als dit blijft voorkomen stuur je ons best een berichtje."
)
NOT_IMPLEMENTED_MESSAGE = "Registrations cannot be listed."

router = APIRouter()


def _validation_response(issues: list) -> PlainTextResponse:
    return PlainTextResponse(
        json.dumps(issues, default=str), status_code=status.HTTP_400_BAD_REQUEST
    )


@router.post("", response_model=RegistrationRead, status_code=status.HTTP_201_CREATED)
async def create_registration(request: Request):
    """Register a team for an event.

    The body is parsed by hand rather than declared as a parameter so
    that validation failures are answered with ``400`` and a plain-text
    list of issues instead of FastAPI's default ``422``.
    """
    try:
        payload = await request.json()
    except ValueError:
        return _validation_response(
            [{"loc": [], "msg": "Request body is not valid JSON", "type": "json_invalid"}]
        )

    try:
        registration = RegistrationCreate.model_validate(payload)
    except ValidationError as e:
        return _validation_response(e.errors(include_url=False))

    try:
        return await RegistrationService.create_registration(registration)
    except RegistrationClosedError:
        return PlainTextResponse(
            REGISTRATION_CLOSED_MESSAGE, status_code=status.HTTP_400_BAD_REQUEST
        )
    except UnknownReferenceError:
        return PlainTextResponse(
            UNKNOWN_VESSEL_TYPE_MESSAGE, status_code=status.HTTP_400_BAD_REQUEST
        )
    except PersistenceError:
        return PlainTextResponse(
            PERSISTENCE_FAILED_MESSAGE,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )


@router.get("")
async def list_registrations() -> PlainTextResponse:
    return PlainTextResponse(
        NOT_IMPLEMENTED_MESSAGE, status_code=status.HTTP_501_NOT_IMPLEMENTED
    )
