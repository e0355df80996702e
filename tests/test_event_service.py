"""Tests for EventService: registration gate, current-event lookup, creation."""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest

from tobbedansen_api.app.core.config import settings
from tobbedansen_api.app.schemas.event import EventCreate
from tobbedansen_api.app.services import event_service
from tobbedansen_api.app.services.event_service import EventService
from tests.conftest import insert_event


START = datetime(2024, 3, 1, 10, 0, 0, tzinfo=timezone.utc)


# ===========================================================================
# Registration gate
# ===========================================================================

class TestRegistrationGate:
    @pytest.mark.asyncio
    async def test_unknown_event_is_closed(self, db):
        assert await EventService.is_accepting_registrations("does-not-exist") is False

    @pytest.mark.asyncio
    async def test_open_after_start(self, db):
        insert_event("evt", 2024, START)
        assert await EventService.is_accepting_registrations(
            "evt", now=START + timedelta(days=1)
        ) is True

    @pytest.mark.asyncio
    async def test_open_exactly_at_start(self, db):
        insert_event("evt", 2024, START)
        assert await EventService.is_accepting_registrations("evt", now=START) is True

    @pytest.mark.asyncio
    async def test_closed_before_start(self, db):
        insert_event("evt", 2024, START)
        assert await EventService.is_accepting_registrations(
            "evt", now=START - timedelta(seconds=1)
        ) is False

    @pytest.mark.asyncio
    async def test_compares_across_timezones(self, db):
        brussels = timezone(timedelta(hours=1))
        insert_event("evt", 2024, datetime(2024, 3, 1, 11, 0, tzinfo=brussels))
        # 10:30 UTC is 11:30 in Brussels, after the opening.
        assert await EventService.is_accepting_registrations(
            "evt", now=datetime(2024, 3, 1, 10, 30, tzinfo=timezone.utc)
        ) is True
        assert await EventService.is_accepting_registrations(
            "evt", now=datetime(2024, 3, 1, 9, 59, tzinfo=timezone.utc)
        ) is False

    @pytest.mark.asyncio
    async def test_other_event_does_not_open_gate(self, db):
        insert_event("evt-open", 2024, START)
        insert_event("evt-closed", 2025, START + timedelta(days=365))
        now = START + timedelta(days=1)
        assert await EventService.is_accepting_registrations("evt-closed", now=now) is False

    @pytest.mark.asyncio
    async def test_missing_start_date_closed_by_default(self, db):
        insert_event("evt", 2024, None)
        assert await EventService.is_accepting_registrations("evt") is False

    @pytest.mark.asyncio
    async def test_missing_start_date_open_when_configured(self, db, monkeypatch):
        monkeypatch.setattr(settings, "registration_open_when_unset", True)
        insert_event("evt", 2024, None)
        assert await EventService.is_accepting_registrations("evt") is True

    @pytest.mark.asyncio
    async def test_setting_does_not_open_future_start(self, db, monkeypatch):
        monkeypatch.setattr(settings, "registration_open_when_unset", True)
        insert_event("evt", 2024, START)
        assert await EventService.is_accepting_registrations(
            "evt", now=START - timedelta(days=1)
        ) is False


# ===========================================================================
# Current event
# ===========================================================================

class TestCurrentEvent:
    @pytest.mark.asyncio
    async def test_none_when_no_event_for_year(self, db):
        insert_event("evt-2023", 2023, START)
        assert await EventService.get_current_event(today=date(2024, 6, 1)) is None

    @pytest.mark.asyncio
    async def test_returns_event_of_year(self, db):
        insert_event("evt-2023", 2023, START - timedelta(days=365))
        insert_event("evt-2024", 2024, START)
        event = await EventService.get_current_event(today=date(2024, 6, 1))
        assert event is not None
        assert event.id == "evt-2024"
        assert event.year == 2024
        assert event.registration_start_date == START

    @pytest.mark.asyncio
    async def test_first_inserted_wins_for_shared_year(self, db):
        insert_event("evt-b", 2024, START)
        insert_event("evt-a", 2024, START)
        event = await EventService.get_current_event(today=date(2024, 6, 1))
        assert event.id == "evt-b"

    @pytest.mark.asyncio
    async def test_defaults_to_local_year(self, db, monkeypatch):
        class FrozenDate(date):
            @classmethod
            def today(cls):
                return cls(2031, 12, 31)

        monkeypatch.setattr(event_service, "date", FrozenDate)
        insert_event("evt-2031", 2031, START)
        insert_event("evt-2032", 2032, START)
        event = await EventService.get_current_event()
        assert event.id == "evt-2031"

    @pytest.mark.asyncio
    async def test_start_date_may_be_missing(self, db):
        insert_event("evt-2024", 2024, None)
        event = await EventService.get_current_event(today=date(2024, 6, 1))
        assert event.registration_start_date is None


# ===========================================================================
# Creation
# ===========================================================================

class TestCreateEvent:
    @pytest.mark.asyncio
    async def test_generates_id(self, db):
        event = await EventService.create_event(EventCreate(year=2024, registration_start_date=START))
        assert event.id
        assert event.registration_start_date == START

    @pytest.mark.asyncio
    async def test_duplicate_id_rejected(self, db):
        await EventService.create_event(EventCreate(id="evt", year=2024))
        with pytest.raises(ValueError):
            await EventService.create_event(EventCreate(id="evt", year=2025))
