"""Pydantic API schemas."""

from escrow_registry.schemas.registry import (
    AssignContractorRequest,
    ContractResponse,
    CreateContractRequest,
    DepositRequest,
    HealthResponse,
    ProposalResponse,
    ProposeReleaseRequest,
    RegisterIdentityRequest,
    ThresholdRequest,
    WalletMemberRequest,
    WalletResponse,
)

__all__ = [
    "AssignContractorRequest",
    "ContractResponse",
    "CreateContractRequest",
    "DepositRequest",
    "HealthResponse",
    "ProposalResponse",
    "ProposeReleaseRequest",
    "RegisterIdentityRequest",
    "ThresholdRequest",
    "WalletMemberRequest",
    "WalletResponse",
]
