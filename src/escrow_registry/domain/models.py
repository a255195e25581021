"""Domain records for the Escrow Registry.

Records:
    - Lister / Contractor   — identity records, keyed by public key in a registry.
    - MultiSigWallet        — escrow wallet embedded in every business contract.
    - BusinessContract      — agreement between a lister and a contractor.
    - ReleaseProposal       — pending wallet release, stored in the proposal arena.
    - Response              — uniform result envelope for identity/contract calls.

The records are pydantic models so the host can snapshot them as JSON.
Identifiers (account ids, public keys) are plain strings supplied by the host.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import ClassVar, Self

from pydantic import BaseModel, Field, model_validator

from escrow_registry.domain.enums import AccountStatus, IdentityKind, ProposalStatus
from escrow_registry.domain.exceptions import (
    DuplicateWalletMemberError,
    InsufficientReservesError,
    InvalidAmountError,
    ThresholdError,
    WalletMemberNotFoundError,
)
from escrow_registry.domain.hashing import generate_content_hash

# required_confirmations is stored as an unsigned byte on the ledger
MAX_REQUIRED_CONFIRMATIONS = 255


# ---------------------------------------------------------------------------
# Identities
# ---------------------------------------------------------------------------


class Identity(BaseModel):
    """Fields shared by both identity roles."""

    kind: ClassVar[IdentityKind]

    name: str
    email: str
    user_hash: str
    account_id: str
    account_status: AccountStatus = AccountStatus.UNVERIFIED

    @classmethod
    def new(cls, name: str, email: str, account_id: str) -> Self:
        """Build an UNVERIFIED record with its content hash."""
        return cls(
            name=name,
            email=email,
            user_hash=generate_content_hash(name, email),
            account_id=account_id,
        )


class Lister(Identity):
    """An identity that publishes business contracts."""

    kind: ClassVar[IdentityKind] = IdentityKind.LISTER


class Contractor(Identity):
    """An identity that can be assigned to business contracts."""

    kind: ClassVar[IdentityKind] = IdentityKind.CONTRACTOR


# ---------------------------------------------------------------------------
# Wallet
# ---------------------------------------------------------------------------


def _check_threshold(required: int, owner_count: int) -> None:
    if not 1 <= required <= MAX_REQUIRED_CONFIRMATIONS:
        raise ThresholdError(required, owner_count)
    if owner_count and required > owner_count:
        raise ThresholdError(required, owner_count)


class MultiSigWallet(BaseModel):
    """Escrow wallet owned by exclusively one business contract.

    Owners co-sign releases; users may interact (deposit) but not sign.
    Once owners is non-empty, required_confirmations never exceeds its length.
    """

    owners: list[str] = Field(default_factory=list)
    users: list[str] = Field(default_factory=list)
    required_confirmations: int = 1
    total_reserves: int = Field(default=0, ge=0)

    @model_validator(mode="after")
    def validate_threshold(self) -> MultiSigWallet:
        _check_threshold(self.required_confirmations, len(self.owners))
        return self

    @classmethod
    def new(
        cls,
        owners: Iterable[str],
        users: Iterable[str],
        required_confirmations: int,
    ) -> MultiSigWallet:
        """Create a wallet with zero reserves."""
        return cls(
            owners=list(owners),
            users=list(users),
            required_confirmations=required_confirmations,
        )

    def is_owner(self, account_id: str) -> bool:
        return account_id in self.owners

    def is_member(self, account_id: str) -> bool:
        return account_id in self.owners or account_id in self.users

    # --- Membership ---

    def add_owner(self, account_id: str) -> None:
        if account_id in self.owners:
            raise DuplicateWalletMemberError(account_id, "owner")
        _check_threshold(self.required_confirmations, len(self.owners) + 1)
        self.owners.append(account_id)

    def remove_owner(self, account_id: str) -> None:
        if account_id not in self.owners:
            raise WalletMemberNotFoundError(account_id, "owner")
        _check_threshold(self.required_confirmations, len(self.owners) - 1)
        self.owners.remove(account_id)

    def add_user(self, account_id: str) -> None:
        if account_id in self.users:
            raise DuplicateWalletMemberError(account_id, "user")
        self.users.append(account_id)

    def set_required_confirmations(self, required: int) -> None:
        _check_threshold(required, len(self.owners))
        self.required_confirmations = required

    # --- Reserves ---

    def deposit(self, amount: int) -> None:
        if amount <= 0:
            raise InvalidAmountError(amount)
        self.total_reserves += amount

    def withdraw(self, amount: int) -> None:
        if amount <= 0:
            raise InvalidAmountError(amount)
        if amount > self.total_reserves:
            raise InsufficientReservesError(amount, self.total_reserves)
        self.total_reserves -= amount


# ---------------------------------------------------------------------------
# Business contracts
# ---------------------------------------------------------------------------


class BusinessContract(BaseModel):
    """An agreement between a lister and an optionally assigned contractor.

    contract_id is the content hash of title+description and may collide;
    contract_key is unique and assigned when the contract is stored.
    """

    contract_id: str
    title: str
    description: str
    contractor: str | None = None
    lister: str
    is_milestoned: bool = False
    start_date: int
    end_date: int
    wallet: MultiSigWallet = Field(default_factory=MultiSigWallet)
    sequence: int = 0
    contract_key: str | None = None


class BusinessContractFactory:
    """Builds BusinessContract records with an empty escrow wallet.

    Usage:
        contract = BusinessContractFactory.create(
            "Roof repair", "Replace tiles", None, lister_pk, False, 100, 200
        )
    """

    @classmethod
    def create(
        cls,
        title: str,
        description: str,
        contractor: str | None,
        lister: str,
        is_milestoned: bool,
        start_date: int,
        end_date: int,
    ) -> BusinessContract:
        """Assemble a contract; dates and strings are not validated here."""
        return BusinessContract(
            contract_id=generate_content_hash(title, description),
            title=title,
            description=description,
            contractor=contractor,
            lister=lister,
            is_milestoned=is_milestoned,
            start_date=start_date,
            end_date=end_date,
            wallet=MultiSigWallet.new(owners=[], users=[], required_confirmations=1),
        )


# ---------------------------------------------------------------------------
# Wallet release proposals
# ---------------------------------------------------------------------------


class ReleaseProposal(BaseModel):
    """A request to move funds out of a contract wallet.

    proposal_id is the index of the proposal in the proposal arena.
    """

    proposal_id: int
    contract_key: str
    proposer: str
    recipient: str
    amount: int
    confirmations: list[str] = Field(default_factory=list)
    status: ProposalStatus = ProposalStatus.PROPOSED


# ---------------------------------------------------------------------------
# Response envelope
# ---------------------------------------------------------------------------


class Response(BaseModel):
    """Result envelope returned by every identity and contract operation."""

    status: str
    message: str
    data: str | None = None
