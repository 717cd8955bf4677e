"""Boundary Protocols — contract between the lifecycle engine and key-value backends.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - Each method is ONE indivisible backend operation: the password check and the
      mutation happen in the same atomic step, never in two round trips
    - Methods return StoreReply for every well-defined reply; transport failures
      raise BackendError (core/errors.py)

Design Decisions:
    - Protocol over ABC: Redis adapter and in-memory fake satisfy it structurally
    - Keys are passed fully-namespaced: prefixing is the engine's job, not the store's
"""

from typing import Protocol

from instance_api.core.domain_types import StoreReply


class InstanceStore(Protocol):
    """Contract for atomic instance persistence — implemented by shell."""

    async def create_if_absent(
        self, key: str, password: str, content: str, ttl_seconds: int,
    ) -> StoreReply:
        """Write password+content with TTL if key is absent. OK | EXISTS | FAILED."""
        ...

    async def update_if_authorized(
        self, key: str, password: str, content: str, ttl_seconds: int,
    ) -> StoreReply:
        """Overwrite content and reset TTL on password match. OK | MISMATCH | MISSING | FAILED."""
        ...

    async def read_if_authorized(
        self, key: str, password: str, ttl_seconds: int,
    ) -> StoreReply:
        """Reset TTL and return content on password match. OK(content) | MISMATCH | MISSING | FAILED."""
        ...

    async def delete_if_authorized(self, key: str, password: str) -> StoreReply:
        """Delete the record on password match. OK | MISMATCH | MISSING | FAILED."""
        ...

    async def health_check(self) -> bool: ...

    async def close(self) -> None: ...
