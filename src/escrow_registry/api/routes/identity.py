"""Identity registry REST API routes.

Every route acts on behalf of the caller named by the identity headers.

Routes:
    POST   /api/v1/listers      — Register the caller as a lister
    POST   /api/v1/contractors  — Register the caller as a contractor
    GET    /api/v1/users/me     — Which registry holds the caller
    DELETE /api/v1/users/me     — Remove the caller from its registry
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends

from escrow_registry.api.deps import get_contract_service
from escrow_registry.domain.models import Response
from escrow_registry.schemas.registry import RegisterIdentityRequest

if TYPE_CHECKING:
    from escrow_registry.services.contract_service import ContractService

router = APIRouter(prefix="/api/v1", tags=["Identity"])


@router.post(
    "/listers",
    response_model=Response,
    summary="Register the caller as a lister",
)
async def create_lister(
    request: RegisterIdentityRequest,
    svc: ContractService = Depends(get_contract_service),
) -> Response:
    """Upsert: registering again under the same key replaces the record."""
    return svc.create_lister(name=request.name, email=request.email)


@router.post(
    "/contractors",
    response_model=Response,
    summary="Register the caller as a contractor",
)
async def create_contractor(
    request: RegisterIdentityRequest,
    svc: ContractService = Depends(get_contract_service),
) -> Response:
    return svc.create_contractor(name=request.name, email=request.email)


@router.get(
    "/users/me",
    response_model=Response,
    summary="Look up the caller",
)
async def get_user(
    svc: ContractService = Depends(get_contract_service),
) -> Response:
    """Status LISTER, CONTRACTOR, or NOTCREATED."""
    return svc.get_user()


@router.delete(
    "/users/me",
    response_model=Response,
    summary="Remove the caller",
)
async def remove_user(
    svc: ContractService = Depends(get_contract_service),
) -> Response:
    return svc.remove_user()
