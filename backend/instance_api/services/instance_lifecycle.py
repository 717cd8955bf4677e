"""Instance Lifecycle Engine — create / save / pull / destroy against an injected store.

Invariants:
    - Each transition issues exactly ONE atomic store call (create may issue one per attempt)
    - Domain outcomes (Collision, Forbidden, NotFound) are RETURNED as InstanceResult
    - Malformed store replies and transport failures RAISE BackendError
    - Every key is namespaced: key_prefix + id
    - Collision retry only with allocator-drawn ids, bounded by create_max_attempts

Design Decisions:
    - Store injected, never looked up globally: tests substitute InMemoryInstanceStore
    - Stateless engine, no locks: per-key atomicity is delegated to the store
    - create_max_attempts defaults to 1: a collision surfaces to the caller unretried
"""

import logging

from instance_api.core.domain_types import (
    InstanceId,
    InstanceResult,
    Operation,
    Outcome,
    StoreReply,
    DEFAULT_KEY_PREFIX,
    DEFAULT_TTL_SECONDS,
)
from instance_api.core.errors import BackendError, ErrorContext
from instance_api.core.id_allocator import IdAllocator
from instance_api.core.instance_outcomes import classify_reply
from instance_api.core.store_protocols import InstanceStore

logger = logging.getLogger(__name__)


class InstanceLifecycle:
    """Atomic lifecycle transitions for password-protected, TTL-bound instances."""

    def __init__(
        self,
        store: InstanceStore,
        allocator: IdAllocator | None = None,
        ttl_seconds: int = DEFAULT_TTL_SECONDS,
        key_prefix: str = DEFAULT_KEY_PREFIX,
        create_max_attempts: int = 1,
    ):
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        if create_max_attempts < 1:
            raise ValueError("create_max_attempts must be >= 1")
        self.store = store
        self.allocator = allocator or IdAllocator()
        self.ttl_seconds = ttl_seconds
        self.key_prefix = key_prefix
        self.create_max_attempts = create_max_attempts

    def key_for(self, instance_id: str) -> str:
        return f"{self.key_prefix}{instance_id}"

    async def create(
        self,
        password: str,
        content: str,
        instance_id: str | None = None,
    ) -> InstanceResult:
        """Create an instance under a fresh (or forced) id."""
        attempts = 1 if instance_id else self.create_max_attempts
        result = await self._create_once(instance_id, password, content)
        attempt = 1
        while result.outcome == Outcome.COLLISION and attempt < attempts:
            logger.info(
                "Id collision on create, drawing a new candidate",
                extra={"instance_id": result.instance_id, "attempt": attempt},
            )
            attempt += 1
            result = await self._create_once(None, password, content)
        return result

    async def _create_once(
        self, instance_id: str | None, password: str, content: str,
    ) -> InstanceResult:
        candidate = InstanceId(instance_id or self.allocator.next_id())
        reply = await self.store.create_if_absent(
            self.key_for(candidate), password, content, self.ttl_seconds,
        )
        return self._resolve(Operation.CREATE, candidate, reply)

    async def save(
        self, instance_id: str, password: str, content: str,
    ) -> InstanceResult:
        """Overwrite content and reset the TTL, gated by password."""
        reply = await self.store.update_if_authorized(
            self.key_for(instance_id), password, content, self.ttl_seconds,
        )
        return self._resolve(Operation.SAVE, InstanceId(instance_id), reply)

    async def pull(self, instance_id: str, password: str) -> InstanceResult:
        """Return content and reset the TTL, gated by password."""
        reply = await self.store.read_if_authorized(
            self.key_for(instance_id), password, self.ttl_seconds,
        )
        return self._resolve(Operation.PULL, InstanceId(instance_id), reply)

    async def destroy(self, instance_id: str, password: str) -> InstanceResult:
        """Delete the instance immediately, gated by password."""
        reply = await self.store.delete_if_authorized(
            self.key_for(instance_id), password,
        )
        return self._resolve(Operation.DESTROY, InstanceId(instance_id), reply)

    def _resolve(
        self, operation: Operation, instance_id: InstanceId, reply: StoreReply,
    ) -> InstanceResult:
        outcome = classify_reply(
            operation, reply.status, has_content=reply.content is not None,
        )
        if outcome == Outcome.BACKEND_ERROR:
            logger.debug(
                f"Unexpected store reply for {operation.value}: {reply.status.value}",
                extra={"instance_id": instance_id, "operation": operation.value},
            )
            raise BackendError(
                f"unexpected reply '{reply.status.value}'", operation.value,
                context=ErrorContext(instance_id=instance_id),
            )
        logger.debug(
            f"{operation.value} -> {outcome.value}",
            extra={
                "instance_id": instance_id,
                "operation": operation.value,
                "outcome": outcome.value,
            },
        )
        content = reply.content if outcome == Outcome.PULLED else None
        return InstanceResult(outcome, instance_id, content)
