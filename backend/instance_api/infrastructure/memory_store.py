"""In-Memory Instance Store — single-process implementation of the InstanceStore contract.

Invariants:
    - Each method runs to completion without awaiting: atomic under the asyncio event loop
    - An expired record is indistinguishable from a missing one (purged on access)
    - TTL resets to the full window on create/update/read; delete removes immediately

Design Decisions:
    - Injectable clock: TTL behavior testable without sleeping
    - Not shared across processes: development and tests only (STORE_BACKEND=memory)
"""

import time
from collections.abc import Callable
from dataclasses import dataclass, field

from instance_api.core.domain_types import ReplyStatus, StoreReply


@dataclass
class _Record:
    password: str
    content: str
    expires_at: float


@dataclass
class InMemoryInstanceStore:
    """InstanceStore kept in a dict; reference behavior for the Redis scripts."""

    clock: Callable[[], float] = time.monotonic
    _records: dict[str, _Record] = field(default_factory=dict)

    def _live(self, key: str) -> _Record | None:
        record = self._records.get(key)
        if record is not None and record.expires_at <= self.clock():
            del self._records[key]
            return None
        return record

    def _authorized(self, key: str, password: str) -> tuple[_Record | None, StoreReply | None]:
        """Return (record, None) on match, else (None, rejection reply)."""
        record = self._live(key)
        if record is None:
            return None, StoreReply(ReplyStatus.MISSING)
        if record.password != password:
            return None, StoreReply(ReplyStatus.MISMATCH)
        return record, None

    async def create_if_absent(
        self, key: str, password: str, content: str, ttl_seconds: int,
    ) -> StoreReply:
        if self._live(key) is not None:
            return StoreReply(ReplyStatus.EXISTS)
        self._records[key] = _Record(
            password=password, content=content,
            expires_at=self.clock() + ttl_seconds,
        )
        return StoreReply(ReplyStatus.OK)

    async def update_if_authorized(
        self, key: str, password: str, content: str, ttl_seconds: int,
    ) -> StoreReply:
        record, rejection = self._authorized(key, password)
        if rejection:
            return rejection
        record.content = content
        record.expires_at = self.clock() + ttl_seconds
        return StoreReply(ReplyStatus.OK)

    async def read_if_authorized(
        self, key: str, password: str, ttl_seconds: int,
    ) -> StoreReply:
        record, rejection = self._authorized(key, password)
        if rejection:
            return rejection
        record.expires_at = self.clock() + ttl_seconds
        return StoreReply(ReplyStatus.OK, content=record.content)

    async def delete_if_authorized(self, key: str, password: str) -> StoreReply:
        _, rejection = self._authorized(key, password)
        if rejection:
            return rejection
        del self._records[key]
        return StoreReply(ReplyStatus.OK)

    async def health_check(self) -> bool:
        return True

    async def close(self) -> None:
        self._records.clear()

    def ttl(self, key: str) -> float | None:
        """Remaining seconds for a live key, None when absent. Test inspection only."""
        record = self._live(key)
        return None if record is None else record.expires_at - self.clock()
