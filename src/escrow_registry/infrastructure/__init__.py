"""Infrastructure — registry state, repositories, and the host collaborator."""

from escrow_registry.infrastructure.host import CallerContext, HostEnvironment
from escrow_registry.infrastructure.repositories import (
    ContractRepository,
    IdentityRegistry,
    ProposalRepository,
    contractor_registry,
    lister_registry,
    registry_for,
)
from escrow_registry.infrastructure.state import (
    RegistryState,
    close_state,
    get_state,
    init_state,
    load_snapshot,
    save_snapshot,
)

__all__ = [
    "CallerContext",
    "HostEnvironment",
    "ContractRepository",
    "IdentityRegistry",
    "ProposalRepository",
    "contractor_registry",
    "lister_registry",
    "registry_for",
    "RegistryState",
    "close_state",
    "get_state",
    "init_state",
    "load_snapshot",
    "save_snapshot",
]
