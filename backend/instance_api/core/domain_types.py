"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - InstanceId is always a string of decimal digits — never a bare int in domain logic
    - All operation outcomes encoded as Enums — no raw status-code matching outside adapters
    - InstanceResult carries content only for Outcome.PULLED

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON and log records without custom encoders
"""

from dataclasses import dataclass
from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

InstanceId = NewType("InstanceId", str)


# ─── Constants ───────────────────────────────────────────────────

DEFAULT_TTL_SECONDS = 600
DEFAULT_KEY_PREFIX = "instance:"
DEFAULT_ID_MIN = 100_000
DEFAULT_ID_MAX = 1_000_000


# ─── Enums ───────────────────────────────────────────────────────

class Operation(str, Enum):
    """The four lifecycle transitions."""
    CREATE = "create"
    SAVE = "save"
    PULL = "pull"
    DESTROY = "destroy"


class Outcome(str, Enum):
    """Result classification of a lifecycle transition."""
    CREATED = "created"
    SAVED = "saved"
    PULLED = "pulled"
    DESTROYED = "destroyed"
    COLLISION = "collision"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    BACKEND_ERROR = "backend_error"


SUCCESS_OUTCOMES = frozenset({
    Outcome.CREATED, Outcome.SAVED, Outcome.PULLED, Outcome.DESTROYED,
})


class ReplyStatus(str, Enum):
    """Backend-agnostic status of one atomic store call."""
    OK = "ok"
    EXISTS = "exists"
    MISMATCH = "mismatch"
    MISSING = "missing"
    FAILED = "failed"


# ─── Value Types ─────────────────────────────────────────────────

@dataclass(frozen=True)
class StoreReply:
    """Reply of a single atomic store call. content is set only by reads."""
    status: ReplyStatus
    content: str | None = None


@dataclass(frozen=True)
class InstanceResult:
    """Outcome of a lifecycle transition, returned (never raised) to callers."""
    outcome: Outcome
    instance_id: InstanceId
    content: str | None = None

    @property
    def ok(self) -> bool:
        return self.outcome in SUCCESS_OUTCOMES
