"""
Endpoint subpackage.

Each module in this package defines an APIRouter for a specific
domain (events, registrations, vessel types).  The routers are
aggregated in ``router.py`` and then included in the main application.
"""
