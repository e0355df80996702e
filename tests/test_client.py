"""Tests for the requests-based API client, served by the in-process app."""

from __future__ import annotations

import pytest
import requests

from tobbedansen_api.client import TobbedansenAPI
from tests.conftest import insert_vessel_type


class ASGISession:
    """Minimal stand-in for ``requests.Session`` that forwards to a TestClient."""

    def __init__(self, test_client):
        self.test_client = test_client

    def request(self, method, url, json=None, timeout=None):
        resp = self.test_client.request(method, url, json=json)
        out = requests.Response()
        out.status_code = resp.status_code
        out._content = resp.content
        out.url = url
        out.reason = resp.reason_phrase
        out.headers.update(resp.headers)
        return out


class FailingSession:
    def request(self, method, url, json=None, timeout=None):
        raise requests.ConnectionError("connection refused")


@pytest.fixture
def api(client):
    return TobbedansenAPI(base_url="http://testserver/", session=ASGISession(client))


class TestTobbedansenAPI:
    def test_current_event_none(self, api):
        event, error = api.get_current_event()
        assert event is None
        assert error is None

    def test_list_vessel_types(self, api):
        insert_vessel_type("vt-1", "Kano")
        vessel_types, error = api.list_vessel_types()
        assert error is None
        assert vessel_types == [{"id": "vt-1", "name": "Kano"}]

    def test_submit_registration(self, api, open_event, vessel_type, registration_payload):
        registration, error = api.submit_registration(registration_payload)
        assert error is None
        assert registration["event_id"] == "evt-2024"

    def test_submit_registration_closed(self, api, closed_event, vessel_type, registration_payload):
        registration, error = api.submit_registration(registration_payload)
        assert registration is None
        assert error == {
            "status_code": 400,
            "message": "We laten momenteel nog geen inschrijvingen toe.",
        }

    def test_connection_failure(self):
        api = TobbedansenAPI(base_url="http://localhost:1", session=FailingSession())
        vessel_types, error = api.list_vessel_types()
        assert vessel_types == []
        assert error["status_code"] is None
        assert "connection refused" in error["message"]
