"""
Pydantic schema definitions for API payloads.

Each domain (events, vessel types, registrations) defines its own
Pydantic models for request and response bodies.  Schemas are
separated from the SQL tables so the API representation can evolve
independently of persistence.
"""
