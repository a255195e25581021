"""Pydantic schemas for the Escrow Registry API.

These schemas define request/response shapes for the HTTP host. They are
separate from the domain records so request validation (lengths, date
ordering, positive amounts) stays at the boundary; the core itself does
not validate these inputs.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator

from escrow_registry.domain.enums import ProposalStatus
from escrow_registry.domain.models import MAX_REQUIRED_CONFIRMATIONS

# ---------------------------------------------------------------------------
# Request Schemas
# ---------------------------------------------------------------------------


class RegisterIdentityRequest(BaseModel):
    """Request body for registering the caller as a lister or contractor."""

    name: str = Field(
        ...,
        min_length=1,
        max_length=200,
        description="Display name",
        examples=["swapnil"],
    )
    email: str = Field(
        ...,
        min_length=3,
        max_length=320,
        description="Contact email",
        examples=["swapnil@gmail.com"],
    )


class CreateContractRequest(BaseModel):
    """Request body for creating a business contract."""

    title: str = Field(..., min_length=1, max_length=200, examples=["Kitchen remodel"])
    description: str = Field(
        ...,
        min_length=1,
        max_length=5000,
        examples=["Replace cabinets and countertops"],
    )
    is_milestoned: bool = False
    start_date: int = Field(..., ge=0, description="Start timestamp")
    end_date: int = Field(..., ge=0, description="End timestamp, not before start_date")

    @model_validator(mode="after")
    def check_schedule(self) -> CreateContractRequest:
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class AssignContractorRequest(BaseModel):
    """Request body for attaching a registered contractor to a contract."""

    contractor_public_key: str = Field(..., min_length=1, examples=["ed25519:4Rm..."])


class WalletMemberRequest(BaseModel):
    """Request body for adding an owner or user to a contract wallet."""

    account_id: str = Field(..., min_length=1, examples=["bob.testnet"])


class ThresholdRequest(BaseModel):
    """Request body for changing the wallet confirmation threshold."""

    required_confirmations: int = Field(..., ge=1, le=MAX_REQUIRED_CONFIRMATIONS)


class DepositRequest(BaseModel):
    """Request body for funding a contract wallet."""

    amount: int = Field(..., gt=0)


class ProposeReleaseRequest(BaseModel):
    """Request body for proposing a release of wallet funds."""

    recipient: str = Field(..., min_length=1, examples=["carol.testnet"])
    amount: int = Field(..., gt=0)


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------


class WalletResponse(BaseModel):
    """Response schema for a contract wallet."""

    model_config = ConfigDict(from_attributes=True)

    owners: list[str]
    users: list[str]
    required_confirmations: int
    total_reserves: int


class ContractResponse(BaseModel):
    """Response schema for a stored business contract."""

    model_config = ConfigDict(from_attributes=True)

    contract_key: str
    contract_id: str
    sequence: int
    title: str
    description: str
    contractor: str | None
    lister: str
    is_milestoned: bool
    start_date: int
    end_date: int
    wallet: WalletResponse


class ProposalResponse(BaseModel):
    """Response schema for a release proposal."""

    model_config = ConfigDict(from_attributes=True)

    proposal_id: int
    contract_key: str
    proposer: str
    recipient: str
    amount: int
    confirmations: list[str]
    status: ProposalStatus


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = "ok"
    version: str = "0.1.0"
    listers: int = 0
    contractors: int = 0
    contracts: int = 0
