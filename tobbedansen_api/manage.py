#!/usr/bin/env python3
"""
Maintenance commands for the Tobbedansen database.

There is no admin HTTP surface, so organisers open a new edition and
maintain the vessel-type catalogue from the command line.  The
database is the one configured through ``DATABASE_URL``; ``--db``
overrides it.

Usage:
    python -m tobbedansen_api.manage init-db
    python -m tobbedansen_api.manage create-event --year 2024 --registration-start 2024-03-01T10:00:00+01:00
    python -m tobbedansen_api.manage create-vessel-type --name Kano
    python -m tobbedansen_api.manage list-vessel-types
"""

import argparse
import asyncio
import sys
from datetime import datetime
from typing import Optional, Sequence

from tobbedansen_api.app.core.config import settings
from tobbedansen_api.app.core.db import init_db
from tobbedansen_api.app.schemas.event import EventCreate
from tobbedansen_api.app.schemas.vessel_type import VesselTypeCreate
from tobbedansen_api.app.services.event_service import EventService
from tobbedansen_api.app.services.vessel_type_service import VesselTypeService


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Manage the Tobbedansen registration database.")
    ap.add_argument("--db", help="Path to the SQLite DB file (defaults to DATABASE_URL)")
    sub = ap.add_subparsers(dest="command", required=True)

    sub.add_parser("init-db", help="Create the database and apply migrations")

    ev = sub.add_parser("create-event", help="Create a festival edition")
    ev.add_argument("--year", type=int, required=True)
    ev.add_argument(
        "--registration-start",
        type=datetime.fromisoformat,
        help="ISO timestamp from which registrations are accepted; naive values are UTC",
    )
    ev.add_argument("--id", help="Event identifier (generated when omitted)")

    vt = sub.add_parser("create-vessel-type", help="Add a vessel type to the catalogue")
    vt.add_argument("--name", required=True)
    vt.add_argument("--id", help="Vessel type identifier (generated when omitted)")

    sub.add_parser("list-vessel-types", help="Print the vessel-type catalogue")
    return ap


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    if args.db:
        settings.database_url = args.db

    init_db()
    try:
        if args.command == "init-db":
            print("[+] Database is up to date")
        elif args.command == "create-event":
            event = asyncio.run(
                EventService.create_event(
                    EventCreate(
                        id=args.id,
                        year=args.year,
                        registration_start_date=args.registration_start,
                    )
                )
            )
            print(f"[+] Created event {event.id} for {event.year}")
        elif args.command == "create-vessel-type":
            vessel_type = asyncio.run(
                VesselTypeService.create_vessel_type(VesselTypeCreate(id=args.id, name=args.name))
            )
            print(f"[+] Created vessel type {vessel_type.id} ({vessel_type.name})")
        elif args.command == "list-vessel-types":
            for vessel_type in asyncio.run(VesselTypeService.list_vessel_types()):
                print(f"{vessel_type.id}\t{vessel_type.name}")
    except ValueError as e:
        print(f"[!] {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
