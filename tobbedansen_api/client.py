"""Tobbedansen API client.

A small wrapper around the public HTTP routes of the registration API
for scripts and tooling that want to talk to a running server.  The
client uses the ``requests`` library internally.

Every method returns a tuple ``(data, error)``.  On success ``error``
is ``None``; on failure ``data`` is ``None`` (or empty) and ``error``
is a dictionary with the keys ``status_code`` and ``message``.  The
API answers failed registrations with a plain-text message meant for
the visitor, which ends up unchanged in ``message``.

* :meth:`get_current_event` - the event of the current year.
* :meth:`list_vessel_types` - vessel types that may be registered.
* :meth:`submit_registration` - register a team.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import requests


logger = logging.getLogger(__name__)

Error = Dict[str, Any]


class TobbedansenAPI:
    """Client for the registration API."""

    def __init__(
        self,
        *,
        base_url: str,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL of the server, e.g. ``https://tobbedansen.be``.
                The ``/api`` prefix is added by the client.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Timeout in seconds for every request.
        """
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def _request(
        self, method: str, path: str, *, json_body: Any | None = None
    ) -> Tuple[Optional[Any], Optional[Error]]:
        """Perform an HTTP request against ``/api`` + ``path``."""
        url = f"{self.base_url}/api{path}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                json=json_body,
                timeout=self.timeout,
            )
            response.raise_for_status()
            if response.content:
                return response.json(), None
            return None, None
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = exc.response.text if exc.response is not None else ""
            if not message:
                message = str(exc)
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": message}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

    def get_current_event(self) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Return this year's event, or ``None`` when there is none."""
        return self._request("GET", "/event/current")

    def list_vessel_types(self) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        data, error = self._request("GET", "/vessel-types")
        if error:
            return [], error
        return data or [], None

    def submit_registration(
        self, payload: Dict[str, Any]
    ) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Submit a registration.

        Args:
            payload: Registration document with ``registrant``,
                ``participants``, ``vessel`` and ``event`` keys, plus the
                optional ``music_request`` and ``association``.
        Returns:
            A tuple ``(registration, error)``.
        """
        return self._request("POST", "/registration", json_body=payload)
