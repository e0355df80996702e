"""
Business logic for the vessel-type catalogue.

Vessel types are maintained by the organisers (see ``manage.py``); the
registration form only reads them.
"""

import logging
import sqlite3
from typing import List

from ..core.db import get_connection, new_id
from ..schemas.vessel_type import VesselTypeCreate, VesselTypeRead


class VesselTypeService:
    """Service for listing and creating vessel types."""

    @classmethod
    async def list_vessel_types(cls) -> List[VesselTypeRead]:
        conn = get_connection()
        try:
            rows = conn.execute(
                "SELECT id, name FROM vessel_types ORDER BY name"
            ).fetchall()
            return [VesselTypeRead(id=row["id"], name=row["name"]) for row in rows]
        finally:
            conn.close()

    @classmethod
    async def create_vessel_type(cls, data: VesselTypeCreate) -> VesselTypeRead:
        """Insert a vessel type.  Raises ``ValueError`` on a duplicate id or name."""
        logger = logging.getLogger(__name__)
        vessel_type_id = data.id or new_id()
        conn = get_connection()
        try:
            try:
                conn.execute(
                    "INSERT INTO vessel_types (id, name) VALUES (?, ?)",
                    (vessel_type_id, data.name),
                )
            except sqlite3.IntegrityError as e:
                raise ValueError(f"Vessel type '{data.name}' already exists") from e
            logger.info("Created vessel type %s (%s)", vessel_type_id, data.name)
            return VesselTypeRead(id=vessel_type_id, name=data.name)
        finally:
            conn.close()

    @classmethod
    def exists(cls, conn: sqlite3.Connection, vessel_type_id: str) -> bool:
        row = conn.execute(
            "SELECT 1 FROM vessel_types WHERE id = ?", (vessel_type_id,)
        ).fetchone()
        return row is not None
