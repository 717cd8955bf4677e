"""Instance Routes — create, save, pull and destroy password-protected instances.

Invariants:
    - Request bodies validated by Pydantic before reaching the handler
    - Each handler performs exactly one lifecycle call
    - Non-success outcomes raised as InstanceAPIError (rendered by error_handlers)
    - Response never echoes the password

Design Decisions:
    - POST for every operation, paths kept from the original public API (/api/instance/*)
    - get_lifecycle built per request from the store dependency: tests override get_store
"""

import logging

from fastapi import APIRouter, Depends

from instance_api.config import get_settings
from instance_api.core.domain_types import InstanceResult, Operation
from instance_api.core.id_allocator import IdAllocator
from instance_api.core.instance_outcomes import error_for_result, success_message
from instance_api.core.store_protocols import InstanceStore
from instance_api.infrastructure.instance_store import get_store
from instance_api.schemas.instance import (
    InstanceAccess, InstanceCreate, InstanceData, InstanceResponse, InstanceSave,
)
from instance_api.services.instance_lifecycle import InstanceLifecycle

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/instance", tags=["instances"])


def get_lifecycle(
    store: InstanceStore = Depends(get_store),
) -> InstanceLifecycle:
    """FastAPI dependency: lifecycle engine over the process store."""
    settings = get_settings()
    return InstanceLifecycle(
        store,
        allocator=IdAllocator(settings.instance_id_min, settings.instance_id_max),
        ttl_seconds=settings.instance_ttl_seconds,
        key_prefix=settings.instance_key_prefix,
        create_max_attempts=settings.create_max_attempts,
    )


def _respond(result: InstanceResult, operation: Operation) -> InstanceResponse:
    error = error_for_result(result, operation)
    if error is not None:
        raise error
    logger.info(
        f"Instance {result.outcome.value}",
        extra={"instance_id": result.instance_id, "operation": operation.value},
    )
    return InstanceResponse(
        message=success_message(result.outcome),
        data=InstanceData(id=result.instance_id, content=result.content),
    )


@router.post("/create", response_model=InstanceResponse, response_model_exclude_none=True)
async def create_instance(
    body: InstanceCreate,
    lifecycle: InstanceLifecycle = Depends(get_lifecycle),
):
    """Create a new instance; the id is allocated server-side."""
    result = await lifecycle.create(body.password, body.content)
    return _respond(result, Operation.CREATE)


@router.post("/save", response_model=InstanceResponse, response_model_exclude_none=True)
async def save_instance(
    body: InstanceSave,
    lifecycle: InstanceLifecycle = Depends(get_lifecycle),
):
    """Overwrite an instance's content and renew its TTL."""
    result = await lifecycle.save(body.id, body.password, body.content)
    return _respond(result, Operation.SAVE)


@router.post("/pull", response_model=InstanceResponse, response_model_exclude_none=True)
async def pull_instance(
    body: InstanceAccess,
    lifecycle: InstanceLifecycle = Depends(get_lifecycle),
):
    """Read an instance's content and renew its TTL."""
    result = await lifecycle.pull(body.id, body.password)
    return _respond(result, Operation.PULL)


@router.post("/destroy", response_model=InstanceResponse, response_model_exclude_none=True)
async def destroy_instance(
    body: InstanceAccess,
    lifecycle: InstanceLifecycle = Depends(get_lifecycle),
):
    """Delete an instance immediately."""
    result = await lifecycle.destroy(body.id, body.password)
    return _respond(result, Operation.DESTROY)
