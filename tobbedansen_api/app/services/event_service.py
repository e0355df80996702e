"""
Business logic for events.

Besides creating events for the admin tooling, ``EventService``
answers the two questions the public site asks: which event is the
current one, and whether an event accepts registrations right now.
"""

import logging
import sqlite3
from datetime import date, datetime
from typing import Optional

from ..core.config import settings
from ..core.db import (
    from_db_timestamp,
    get_connection,
    new_id,
    to_db_timestamp,
    utcnow,
)
from ..schemas.event import EventCreate, EventRead


logger = logging.getLogger(__name__)


def _row_to_event(row: sqlite3.Row) -> EventRead:
    return EventRead(
        id=row["id"],
        year=row["year"],
        registration_start_date=from_db_timestamp(row["registration_start_date"]),
    )


class EventService:
    """Service for festival events stored in SQLite."""

    @classmethod
    async def create_event(cls, data: EventCreate) -> EventRead:
        """Insert a new event and return it.

        An ``id`` is generated when the payload does not carry one.
        Raises ``ValueError`` if the identifier is already taken.
        """
        event_id = data.id or new_id()
        conn = get_connection()
        try:
            try:
                conn.execute(
                    "INSERT INTO events (id, year, registration_start_date) VALUES (?, ?, ?)",
                    (event_id, data.year, to_db_timestamp(data.registration_start_date)),
                )
            except sqlite3.IntegrityError as e:
                raise ValueError(f"Event {event_id} already exists") from e
            logger.info("Created event %s for year %s", event_id, data.year)
            row = conn.execute(
                "SELECT id, year, registration_start_date FROM events WHERE id = ?",
                (event_id,),
            ).fetchone()
            return _row_to_event(row)
        finally:
            conn.close()

    @classmethod
    async def get_current_event(cls, today: Optional[date] = None) -> Optional[EventRead]:
        """Return the event of the current calendar year, or ``None``.

        Only the year is compared.  Should several events share a year,
        the one inserted first wins.  Without ``today`` the server's
        local date is used, so on New Year's Eve the switch happens at
        local midnight rather than at midnight UTC.
        """
        year = (today or date.today()).year
        conn = get_connection()
        try:
            row = conn.execute(
                """
                SELECT id, year, registration_start_date FROM events
                WHERE year = ?
                ORDER BY rowid
                LIMIT 1
                """,
                (year,),
            ).fetchone()
            return _row_to_event(row) if row else None
        finally:
            conn.close()

    @classmethod
    def check_registration_open(
        cls,
        conn: sqlite3.Connection,
        event_id: str,
        now: Optional[datetime] = None,
    ) -> bool:
        """Synchronous gate check on an existing connection.

        Used directly by the registration intake so the check runs in
        the same transaction as the write that follows it.
        """
        now_str = to_db_timestamp(now or utcnow())
        if settings.registration_open_when_unset:
            query = (
                "SELECT 1 FROM events WHERE id = ? "
                "AND (registration_start_date IS NULL OR registration_start_date <= ?) "
                "LIMIT 1"
            )
        else:
            query = (
                "SELECT 1 FROM events WHERE id = ? "
                "AND registration_start_date <= ? "
                "LIMIT 1"
            )
        return conn.execute(query, (event_id, now_str)).fetchone() is not None

    @classmethod
    async def is_accepting_registrations(
        cls, event_id: str, now: Optional[datetime] = None
    ) -> bool:
        """Whether ``event_id`` accepts registrations at ``now``.

        True when the event exists and its registration start date lies
        at or before ``now``.  Unknown identifiers give ``False``.
        Events without a start date follow
        ``settings.registration_open_when_unset``.
        """
        conn = get_connection()
        try:
            return cls.check_registration_open(conn, event_id, now)
        finally:
            conn.close()
