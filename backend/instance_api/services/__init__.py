"""Services Layer — async orchestration of core logic around the injected store.

Invariants:
    - Services receive their store by injection; no module-level store lookups
"""
