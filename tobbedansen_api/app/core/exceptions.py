"""
Exception classes raised by the service layer.

Services raise these instead of building HTTP responses; the
endpoints translate them into status codes and the fixed messages
shown to visitors.
"""

from typing import Any, Dict, Optional


class RegistrationError(Exception):
    """Base exception class for registration intake errors."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{super().__str__()} (Context: {context_str})"
        return super().__str__()


class RegistrationClosedError(RegistrationError):
    """Raised when an event does not (yet) accept registrations.

    An unknown event identifier also ends up here; the two cases are
    not distinguished.
    """

    def __init__(self, event_id: str):
        super().__init__("Event is not accepting registrations", {"event_id": event_id})
        self.event_id = event_id


class UnknownReferenceError(RegistrationError):
    """Raised when a payload points at a catalogue record that does not exist."""

    def __init__(self, kind: str, identifier: str):
        super().__init__(f"Unknown {kind}", {"id": identifier})
        self.kind = kind
        self.identifier = identifier


class PersistenceError(RegistrationError):
    """Raised when the composite registration write fails in the store."""

    pass
