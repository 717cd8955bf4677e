"""Infrastructure Layer — key-value store adapters and cross-cutting concerns.

Invariants:
    - Adapters implement core/store_protocols.InstanceStore
    - All backend failures mapped to BackendError before leaving this layer

Design Decisions:
    - Redis for production, in-memory for development and tests
"""
