"""Redis Instance Store — atomic Lua-scripted lifecycle transitions over redis.asyncio.

Invariants:
    - Every transition is ONE server-side script: password check and mutation are atomic
    - Records are hashes with fields "password" and "content"; TTL set with EXPIRE
    - Raw script replies decoded here and only here (1 / 403 / 404 / 503 / bulk string)
    - All redis exceptions mapped to BackendError (core/errors.py); timeouts flagged ambiguous
    - Script failures logged at debug only: the API error handler reports them once

Design Decisions:
    - register_script over raw EVAL: EVALSHA after first load, NOSCRIPT handled by redis-py
    - TTL passed as ARGV instead of hardcoded in the script: one script per template
    - decode_responses=True: content round-trips as str, never bytes
"""

import logging

import redis.asyncio as redis
from redis.exceptions import (
    ConnectionError as RedisConnectionError,
    RedisError,
    TimeoutError as RedisTimeoutError,
)

from instance_api.core.domain_types import ReplyStatus, StoreReply
from instance_api.core.errors import BackendError

logger = logging.getLogger(__name__)

# Script reply codes, shared with the Lua below
_EXISTS = 503
_MISMATCH = 403
_MISSING = 404

CREATE_SCRIPT = """
if redis.call("EXISTS", KEYS[1]) == 0 then
  redis.call("HSET", KEYS[1], "password", ARGV[1], "content", ARGV[2])
  return redis.call("EXPIRE", KEYS[1], ARGV[3])
end
return 503
"""

UPDATE_SCRIPT = """
local stored = redis.call("HGET", KEYS[1], "password")
if not stored then return 404 end
if stored ~= ARGV[1] then return 403 end
redis.call("HSET", KEYS[1], "content", ARGV[2])
return redis.call("EXPIRE", KEYS[1], ARGV[3])
"""

READ_SCRIPT = """
local stored = redis.call("HGET", KEYS[1], "password")
if not stored then return 404 end
if stored ~= ARGV[1] then return 403 end
redis.call("EXPIRE", KEYS[1], ARGV[2])
return redis.call("HGET", KEYS[1], "content")
"""

DELETE_SCRIPT = """
local stored = redis.call("HGET", KEYS[1], "password")
if not stored then return 404 end
if stored ~= ARGV[1] then return 403 end
return redis.call("DEL", KEYS[1])
"""


def decode_status_reply(raw: object) -> StoreReply:
    """Decode an integer-only script reply (create/update/delete)."""
    if isinstance(raw, bool) or not isinstance(raw, int):
        return StoreReply(ReplyStatus.FAILED)
    if raw == 1:
        return StoreReply(ReplyStatus.OK)
    return StoreReply({
        _EXISTS: ReplyStatus.EXISTS,
        _MISMATCH: ReplyStatus.MISMATCH,
        _MISSING: ReplyStatus.MISSING,
    }.get(raw, ReplyStatus.FAILED))


def decode_read_reply(raw: object) -> StoreReply:
    """Decode the read script reply: bulk string is content, integers are codes."""
    if isinstance(raw, bytes):
        raw = raw.decode("utf-8")
    if isinstance(raw, str):
        return StoreReply(ReplyStatus.OK, content=raw)
    if raw == _MISMATCH:
        return StoreReply(ReplyStatus.MISMATCH)
    if raw == _MISSING:
        return StoreReply(ReplyStatus.MISSING)
    return StoreReply(ReplyStatus.FAILED)


class RedisInstanceStore:
    """InstanceStore backed by Redis (or any Redis-protocol service, e.g. Upstash)."""

    def __init__(self, client: redis.Redis):
        self.client = client
        self._create = client.register_script(CREATE_SCRIPT)
        self._update = client.register_script(UPDATE_SCRIPT)
        self._read = client.register_script(READ_SCRIPT)
        self._delete = client.register_script(DELETE_SCRIPT)

    @classmethod
    def from_url(
        cls, redis_url: str, timeout_seconds: float = 5.0,
    ) -> "RedisInstanceStore":
        client = redis.Redis.from_url(
            redis_url,
            decode_responses=True,
            socket_timeout=timeout_seconds,
            socket_connect_timeout=timeout_seconds,
        )
        return cls(client)

    async def create_if_absent(
        self, key: str, password: str, content: str, ttl_seconds: int,
    ) -> StoreReply:
        raw = await self._run(
            "create", self._create, key, [password, content, ttl_seconds],
        )
        return decode_status_reply(raw)

    async def update_if_authorized(
        self, key: str, password: str, content: str, ttl_seconds: int,
    ) -> StoreReply:
        raw = await self._run(
            "save", self._update, key, [password, content, ttl_seconds],
        )
        return decode_status_reply(raw)

    async def read_if_authorized(
        self, key: str, password: str, ttl_seconds: int,
    ) -> StoreReply:
        raw = await self._run("pull", self._read, key, [password, ttl_seconds])
        return decode_read_reply(raw)

    async def delete_if_authorized(self, key: str, password: str) -> StoreReply:
        raw = await self._run("destroy", self._delete, key, [password])
        return decode_status_reply(raw)

    async def _run(self, operation: str, script, key: str, args: list):
        """Execute one script, mapping every redis failure to BackendError."""
        try:
            return await script(keys=[key], args=args)
        except RedisTimeoutError as e:
            logger.debug(
                f"Redis timeout during {operation}: {e}",
                extra={"operation": operation},
            )
            raise BackendError("timed out", operation, ambiguous=True)
        except RedisConnectionError as e:
            logger.debug(
                f"Redis connection error during {operation}: {e}",
                extra={"operation": operation},
            )
            raise BackendError("connection error", operation)
        except RedisError as e:
            logger.debug(
                f"Redis error during {operation}: {e}",
                extra={"operation": operation},
            )
            raise BackendError("script error", operation)

    async def health_check(self) -> bool:
        """Check Redis connectivity (for readiness probes)."""
        try:
            return bool(await self.client.ping())
        except RedisError as e:
            logger.error(f"Redis health check failed: {e}")
            return False

    async def close(self) -> None:
        await self.client.aclose()
