"""Pydantic Schemas: request/response validation for API endpoints.

Invariants:
    - Schemas validate at the system boundary (request payloads, API responses)

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
