"""
Service layer.

Services hold the business logic and talk to the database; endpoints
stay thin and only translate results and exceptions into HTTP
responses.
"""
