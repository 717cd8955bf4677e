"""Outcome Classification — maps store replies to lifecycle outcomes, outcomes to API errors.

Invariants:
    - All functions are PURE: no IO, no async, no side effects
    - classify_reply is total: every (operation, status) pair maps to exactly one Outcome
    - A reply that does not belong to the operation's contract maps to BACKEND_ERROR
    - error_for_result returns None for success outcomes

Design Decisions:
    - Return values, not exceptions, for domain outcomes: callers branch on Outcome
    - Table-driven mapping over if-chains: the contract of each operation reads at a glance
"""

from instance_api.core.domain_types import (
    InstanceResult, Operation, Outcome, ReplyStatus,
)
from instance_api.core.errors import (
    ErrorContext,
    InstanceAPIError,
    InstanceCollisionError,
    InstanceForbiddenError,
    InstanceNotFoundError,
)


_SUCCESS: dict[Operation, Outcome] = {
    Operation.CREATE: Outcome.CREATED,
    Operation.SAVE: Outcome.SAVED,
    Operation.PULL: Outcome.PULLED,
    Operation.DESTROY: Outcome.DESTROYED,
}

# Which non-OK statuses each operation may legitimately return
_ALLOWED: dict[Operation, dict[ReplyStatus, Outcome]] = {
    Operation.CREATE: {ReplyStatus.EXISTS: Outcome.COLLISION},
    Operation.SAVE: {
        ReplyStatus.MISMATCH: Outcome.FORBIDDEN,
        ReplyStatus.MISSING: Outcome.NOT_FOUND,
    },
    Operation.PULL: {
        ReplyStatus.MISMATCH: Outcome.FORBIDDEN,
        ReplyStatus.MISSING: Outcome.NOT_FOUND,
    },
    Operation.DESTROY: {
        ReplyStatus.MISMATCH: Outcome.FORBIDDEN,
        ReplyStatus.MISSING: Outcome.NOT_FOUND,
    },
}


def classify_reply(
    operation: Operation, status: ReplyStatus, has_content: bool = False,
) -> Outcome:
    """Map one store reply status to the operation's outcome."""
    if status == ReplyStatus.OK:
        # A pull that matched but returned no content is a broken record
        if operation == Operation.PULL and not has_content:
            return Outcome.BACKEND_ERROR
        return _SUCCESS[operation]
    return _ALLOWED[operation].get(status, Outcome.BACKEND_ERROR)


def success_message(outcome: Outcome) -> str:
    """Human-readable message for the success envelope."""
    return {
        Outcome.CREATED: "Instance created",
        Outcome.SAVED: "Instance saved",
        Outcome.PULLED: "Instance pulled",
        Outcome.DESTROYED: "Instance destroyed",
    }[outcome]


def error_for_result(
    result: InstanceResult, operation: Operation,
) -> InstanceAPIError | None:
    """Translate a non-success result into the API error the route raises."""
    if result.ok:
        return None
    ctx = ErrorContext(instance_id=result.instance_id, operation=operation.value)
    if result.outcome == Outcome.COLLISION:
        return InstanceCollisionError(ctx)
    if result.outcome == Outcome.FORBIDDEN:
        return InstanceForbiddenError(ctx)
    if result.outcome == Outcome.NOT_FOUND:
        return InstanceNotFoundError(result.instance_id, ctx)
    raise ValueError(f"no API error for outcome {result.outcome!r}")
