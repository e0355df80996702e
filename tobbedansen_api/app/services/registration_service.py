"""
Business logic for registrations.

``RegistrationService.create_registration`` stores a validated
registration together with its registrant, participants and vessel.
Everything happens in one ``BEGIN IMMEDIATE`` transaction: the event
gate is re-checked and the vessel type looked up while the write lock
is held, so two concurrent submissions cannot both slip past a window
that closes (or a vessel type that disappears) in between.
"""

import logging
import sqlite3
from datetime import datetime
from typing import Optional

from ..core.db import (
    from_db_timestamp,
    get_connection,
    new_id,
    to_db_timestamp,
    transaction,
    utcnow,
)
from ..core.exceptions import (
    PersistenceError,
    RegistrationClosedError,
    UnknownReferenceError,
)
from ..schemas.registration import (
    ParticipantRead,
    RegistrantRead,
    RegistrationCreate,
    RegistrationRead,
    VesselRead,
)
from .event_service import EventService
from .vessel_type_service import VesselTypeService


logger = logging.getLogger(__name__)


class RegistrationService:
    """Service for registration intake."""

    @classmethod
    async def create_registration(
        cls, data: RegistrationCreate, now: Optional[datetime] = None
    ) -> RegistrationRead:
        """Persist a registration and all of its children atomically.

        Raises
        ------
        RegistrationClosedError
            The event is unknown or its registration window has not
            opened yet.  Nothing is written.
        UnknownReferenceError
            ``vessel.vessel_type_id`` does not match a vessel type.
            Nothing is written.
        PersistenceError
            Any other database failure.  The transaction is rolled back.
        """
        now = now or utcnow()
        registrant = RegistrantRead(id=new_id(), **data.registrant.model_dump())
        participants = [
            ParticipantRead(id=new_id(), **p.model_dump()) for p in data.participants
        ]
        vessel = VesselRead(
            id=new_id(),
            name=data.vessel.name,
            vessel_type_id=data.vessel.vessel_type_id,
        )
        registration_id = new_id()
        created_at = to_db_timestamp(now)

        try:
            conn = get_connection()
        except sqlite3.Error as e:
            logger.exception("Could not open database for registration")
            raise PersistenceError("Could not open database") from e
        try:
            with transaction(conn) as cursor:
                if not EventService.check_registration_open(conn, data.event, now):
                    logger.info("Rejected registration for closed event %s", data.event)
                    raise RegistrationClosedError(data.event)
                if not VesselTypeService.exists(conn, vessel.vessel_type_id):
                    logger.warning(
                        "Rejected registration with unknown vessel type %s",
                        vessel.vessel_type_id,
                    )
                    raise UnknownReferenceError("vessel type", vessel.vessel_type_id)

                cursor.execute(
                    """
                    INSERT INTO registrants (id, first_name, last_name, email, date_of_birth, place_of_birth)
                    VALUES (?, ?, ?, ?, ?, ?)
                    """,
                    (
                        registrant.id,
                        registrant.first_name,
                        registrant.last_name,
                        registrant.email,
                        registrant.date_of_birth.isoformat(),
                        registrant.place_of_birth,
                    ),
                )
                cursor.execute(
                    "INSERT INTO vessels (id, name, vessel_type_id) VALUES (?, ?, ?)",
                    (vessel.id, vessel.name, vessel.vessel_type_id),
                )
                cursor.execute(
                    """
                    INSERT INTO registrations (id, event_id, registrant_id, vessel_id, music_request, association, created_at)
                    VALUES (?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        registration_id,
                        data.event,
                        registrant.id,
                        vessel.id,
                        data.music_request,
                        data.association,
                        created_at,
                    ),
                )
                cursor.executemany(
                    """
                    INSERT INTO participants (id, registration_id, first_name, last_name, date_of_birth)
                    VALUES (?, ?, ?, ?, ?)
                    """,
                    [
                        (
                            p.id,
                            registration_id,
                            p.first_name,
                            p.last_name,
                            p.date_of_birth.isoformat(),
                        )
                        for p in participants
                    ],
                )
        except sqlite3.Error as e:
            logger.exception("Failed to store registration for event %s", data.event)
            raise PersistenceError("Failed to store registration", {"event_id": data.event}) from e
        finally:
            conn.close()

        logger.info(
            "Stored registration %s for event %s with %d participant(s)",
            registration_id,
            data.event,
            len(participants),
        )
        return RegistrationRead(
            id=registration_id,
            event_id=data.event,
            music_request=data.music_request,
            association=data.association,
            created_at=from_db_timestamp(created_at),
            registrant=registrant,
            participants=participants,
            vessel=vessel,
        )
