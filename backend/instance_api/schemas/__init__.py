"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate at system boundary; the lifecycle engine never sees malformed input

Design Decisions:
    - Separate from core domain types: schemas are API contracts (ADR: DDD boundary)
"""
