"""Pydantic Schemas — request validation for API endpoints.

Invariants:
    - Schemas validate at the system boundary (request bodies)
    - Parse helpers raise BadRequestError, never pydantic.ValidationError

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
