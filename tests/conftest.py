"""Shared test fixtures for the Escrow Registry test suite.

Provides:
    - A fresh RegistryState per test (no process-wide state)
    - Static caller contexts standing in for the host
    - Service factories bound to a caller
"""

from __future__ import annotations

import pytest

from escrow_registry.infrastructure.host import CallerContext
from escrow_registry.infrastructure.state import RegistryState
from escrow_registry.services.contract_service import ContractService
from escrow_registry.services.wallet_service import WalletService

# ---------------------------------------------------------------------------
# Callers
# ---------------------------------------------------------------------------


@pytest.fixture
def alice() -> CallerContext:
    return CallerContext(account_id="alice.testnet", public_key="ed25519:AL1CE")


@pytest.fixture
def bob() -> CallerContext:
    return CallerContext(account_id="bob.testnet", public_key="ed25519:B0B")


@pytest.fixture
def carol() -> CallerContext:
    return CallerContext(account_id="carol.testnet", public_key="ed25519:CAR0L")


@pytest.fixture
def stranger() -> CallerContext:
    return CallerContext(account_id="stranger.testnet", public_key="ed25519:STRANGER")


# ---------------------------------------------------------------------------
# State & services
# ---------------------------------------------------------------------------


@pytest.fixture
def state() -> RegistryState:
    """Return empty registry state."""
    return RegistryState()


@pytest.fixture
def contract_service(state: RegistryState):
    """Return a factory building a ContractService for a caller."""

    def _build(caller: CallerContext) -> ContractService:
        return ContractService(state, caller)

    return _build


@pytest.fixture
def wallet_service(state: RegistryState):
    """Return a factory building a WalletService for a caller."""

    def _build(caller: CallerContext) -> WalletService:
        return WalletService(state, caller)

    return _build


@pytest.fixture
def listed_contract(state: RegistryState, alice: CallerContext, contract_service) -> str:
    """Register alice as a lister, create one contract, return its key."""
    svc = contract_service(alice)
    svc.create_lister("alice", "alice@example.com")
    svc.create_contract("Kitchen remodel", "Replace cabinets", False, 100, 200)
    return next(iter(state.contracts))
