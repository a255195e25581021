"""Business contract REST API routes.

Routes:
    POST   /api/v1/contracts                       — Create a contract (listers only)
    GET    /api/v1/contracts                       — Caller's contracts
    GET    /api/v1/contracts/{key}                 — Contract details
    POST   /api/v1/contracts/{key}/contractor      — Assign a contractor
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends

from escrow_registry.api.deps import get_contract_service
from escrow_registry.domain.models import Response
from escrow_registry.schemas.registry import (
    AssignContractorRequest,
    ContractResponse,
    CreateContractRequest,
)

if TYPE_CHECKING:
    from escrow_registry.services.contract_service import ContractService

router = APIRouter(prefix="/api/v1/contracts", tags=["Contracts"])


@router.post(
    "",
    response_model=Response,
    summary="Create a business contract",
)
async def create_contract(
    request: CreateContractRequest,
    svc: ContractService = Depends(get_contract_service),
) -> Response:
    """Returns CREATED with the contract_id, or NOTCREATED for unregistered callers."""
    return svc.create_contract(
        title=request.title,
        description=request.description,
        is_milestoned=request.is_milestoned,
        start_date=request.start_date,
        end_date=request.end_date,
    )


@router.get(
    "",
    response_model=list[ContractResponse],
    summary="List the caller's contracts",
)
async def list_contracts(
    svc: ContractService = Depends(get_contract_service),
) -> list[ContractResponse]:
    return [ContractResponse.model_validate(c) for c in svc.list_contracts()]


@router.get(
    "/{contract_key}",
    response_model=ContractResponse,
    summary="Get contract details",
)
async def get_contract(
    contract_key: str,
    svc: ContractService = Depends(get_contract_service),
) -> ContractResponse:
    return ContractResponse.model_validate(svc.get_contract(contract_key))


@router.post(
    "/{contract_key}/contractor",
    response_model=Response,
    summary="Assign a contractor",
)
async def assign_contractor(
    contract_key: str,
    request: AssignContractorRequest,
    svc: ContractService = Depends(get_contract_service),
) -> Response:
    return svc.assign_contractor(
        contract_key=contract_key,
        contractor_public_key=request.contractor_public_key,
    )
