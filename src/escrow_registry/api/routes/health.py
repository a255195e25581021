"""Health check endpoint.

Reports registry sizes; used by container healthchecks and load balancers.
No caller identity is required.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends

from escrow_registry.api.deps import get_registry_state
from escrow_registry.schemas.registry import HealthResponse

if TYPE_CHECKING:
    from escrow_registry.infrastructure.state import RegistryState

router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
)
async def health_check(
    state: RegistryState = Depends(get_registry_state),
) -> HealthResponse:
    return HealthResponse(
        status="ok",
        version="0.1.0",
        listers=len(state.listers),
        contractors=len(state.contractors),
        contracts=len(state.contracts),
    )
