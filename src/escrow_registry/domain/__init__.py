"""Domain layer — pure business logic with zero framework dependencies."""

from escrow_registry.domain.enums import (
    AccountStatus,
    IdentityKind,
    ProposalStatus,
    ResponseStatus,
)
from escrow_registry.domain.exceptions import (
    ContractNotFoundError,
    InvalidStateTransitionError,
    ProposalNotFoundError,
    RegistryError,
)
from escrow_registry.domain.hashing import generate_content_hash
from escrow_registry.domain.models import (
    BusinessContract,
    BusinessContractFactory,
    Contractor,
    Lister,
    MultiSigWallet,
    ReleaseProposal,
    Response,
)
from escrow_registry.domain.state_machine import ProposalStateMachine

__all__ = [
    "AccountStatus",
    "IdentityKind",
    "ProposalStatus",
    "ResponseStatus",
    "ContractNotFoundError",
    "InvalidStateTransitionError",
    "ProposalNotFoundError",
    "RegistryError",
    "generate_content_hash",
    "BusinessContract",
    "BusinessContractFactory",
    "Contractor",
    "Lister",
    "MultiSigWallet",
    "ReleaseProposal",
    "Response",
    "ProposalStateMachine",
]
