"""Contract wallet REST API routes.

Routes:
    GET    /api/v1/contracts/{key}/wallet               — Wallet state
    POST   /api/v1/contracts/{key}/wallet/owners        — Add an owner (lister)
    DELETE /api/v1/contracts/{key}/wallet/owners/{id}   — Remove an owner (lister)
    POST   /api/v1/contracts/{key}/wallet/users         — Add a user (lister)
    PUT    /api/v1/contracts/{key}/wallet/threshold     — Set required confirmations (lister)
    POST   /api/v1/contracts/{key}/wallet/deposit       — Deposit funds
    POST   /api/v1/contracts/{key}/wallet/proposals     — Propose a release (owner)
    GET    /api/v1/contracts/{key}/wallet/proposals     — List proposals
    GET    /api/v1/proposals/{id}                       — Proposal details
    POST   /api/v1/proposals/{id}/confirm               — Confirm (owner)
    POST   /api/v1/proposals/{id}/reject                — Reject (owner)
    POST   /api/v1/proposals/{id}/execute               — Execute a confirmed proposal (owner)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends

from escrow_registry.api.deps import get_wallet_service
from escrow_registry.schemas.registry import (
    DepositRequest,
    ProposalResponse,
    ProposeReleaseRequest,
    ThresholdRequest,
    WalletMemberRequest,
    WalletResponse,
)

if TYPE_CHECKING:
    from escrow_registry.services.wallet_service import WalletService

router = APIRouter(prefix="/api/v1", tags=["Wallet"])


# ---------------------------------------------------------------------------
# Wallet configuration
# ---------------------------------------------------------------------------


@router.get("/contracts/{contract_key}/wallet", response_model=WalletResponse)
async def get_wallet(
    contract_key: str,
    svc: WalletService = Depends(get_wallet_service),
) -> WalletResponse:
    return WalletResponse.model_validate(svc.get_wallet(contract_key))


@router.post("/contracts/{contract_key}/wallet/owners", response_model=WalletResponse)
async def add_owner(
    contract_key: str,
    request: WalletMemberRequest,
    svc: WalletService = Depends(get_wallet_service),
) -> WalletResponse:
    return WalletResponse.model_validate(svc.add_owner(contract_key, request.account_id))


@router.delete(
    "/contracts/{contract_key}/wallet/owners/{account_id}",
    response_model=WalletResponse,
)
async def remove_owner(
    contract_key: str,
    account_id: str,
    svc: WalletService = Depends(get_wallet_service),
) -> WalletResponse:
    return WalletResponse.model_validate(svc.remove_owner(contract_key, account_id))


@router.post("/contracts/{contract_key}/wallet/users", response_model=WalletResponse)
async def add_user(
    contract_key: str,
    request: WalletMemberRequest,
    svc: WalletService = Depends(get_wallet_service),
) -> WalletResponse:
    return WalletResponse.model_validate(svc.add_user(contract_key, request.account_id))


@router.put("/contracts/{contract_key}/wallet/threshold", response_model=WalletResponse)
async def set_threshold(
    contract_key: str,
    request: ThresholdRequest,
    svc: WalletService = Depends(get_wallet_service),
) -> WalletResponse:
    wallet = svc.set_required_confirmations(contract_key, request.required_confirmations)
    return WalletResponse.model_validate(wallet)


@router.post("/contracts/{contract_key}/wallet/deposit", response_model=WalletResponse)
async def deposit(
    contract_key: str,
    request: DepositRequest,
    svc: WalletService = Depends(get_wallet_service),
) -> WalletResponse:
    return WalletResponse.model_validate(svc.deposit(contract_key, request.amount))


# ---------------------------------------------------------------------------
# Release proposals
# ---------------------------------------------------------------------------


@router.post(
    "/contracts/{contract_key}/wallet/proposals",
    response_model=ProposalResponse,
    status_code=201,
)
async def propose_release(
    contract_key: str,
    request: ProposeReleaseRequest,
    svc: WalletService = Depends(get_wallet_service),
) -> ProposalResponse:
    """Open a proposal; it executes at once if the threshold is one."""
    proposal = svc.propose_release(contract_key, request.recipient, request.amount)
    return ProposalResponse.model_validate(proposal)


@router.get(
    "/contracts/{contract_key}/wallet/proposals",
    response_model=list[ProposalResponse],
)
async def list_proposals(
    contract_key: str,
    svc: WalletService = Depends(get_wallet_service),
) -> list[ProposalResponse]:
    return [ProposalResponse.model_validate(p) for p in svc.list_proposals(contract_key)]


@router.get("/proposals/{proposal_id}", response_model=ProposalResponse)
async def get_proposal(
    proposal_id: int,
    svc: WalletService = Depends(get_wallet_service),
) -> ProposalResponse:
    return ProposalResponse.model_validate(svc.get_proposal(proposal_id))


@router.post("/proposals/{proposal_id}/confirm", response_model=ProposalResponse)
async def confirm_release(
    proposal_id: int,
    svc: WalletService = Depends(get_wallet_service),
) -> ProposalResponse:
    return ProposalResponse.model_validate(svc.confirm_release(proposal_id))


@router.post("/proposals/{proposal_id}/reject", response_model=ProposalResponse)
async def reject_release(
    proposal_id: int,
    svc: WalletService = Depends(get_wallet_service),
) -> ProposalResponse:
    return ProposalResponse.model_validate(svc.reject_release(proposal_id))


@router.post("/proposals/{proposal_id}/execute", response_model=ProposalResponse)
async def execute_release(
    proposal_id: int,
    svc: WalletService = Depends(get_wallet_service),
) -> ProposalResponse:
    """Execute once current-owner confirmations meet the threshold."""
    return ProposalResponse.model_validate(svc.execute_release(proposal_id))
