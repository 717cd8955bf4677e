"""Core Layer — pure domain logic, no IO, no async.

Invariants:
    - No module in core/ imports from services/, api/ or infrastructure/
    - Outcome classification functions are pure and deterministic

Design Decisions:
    - Functional core separated from imperative shell (impureim sandwich)
"""
