"""Tests for registry state snapshots and the process-wide lifecycle."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from escrow_registry.config import get_settings
from escrow_registry.domain.enums import AccountStatus, ProposalStatus
from escrow_registry.infrastructure import state as state_module
from escrow_registry.infrastructure.host import CallerContext
from escrow_registry.infrastructure.state import (
    RegistryState,
    close_state,
    get_state,
    init_state,
    load_snapshot,
    save_snapshot,
)
from escrow_registry.services.contract_service import ContractService
from escrow_registry.services.wallet_service import WalletService

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture
def populated_state() -> RegistryState:
    state = RegistryState()
    alice = CallerContext("alice.testnet", "ed25519:AL1CE")
    svc = ContractService(state, alice)
    svc.create_lister("alice", "alice@example.com")
    svc.create_contract("T", "D", True, 1, 2)
    key = next(iter(state.contracts))
    wallet = WalletService(state, alice)
    wallet.add_owner(key, "alice.testnet")
    wallet.deposit(key, 50)
    wallet.propose_release(key, "bob.testnet", 20)
    return state


@pytest.fixture
def reset_singleton(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(state_module, "_state", None)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestSnapshots:
    def test_round_trip_preserves_state(
        self, tmp_path: Path, populated_state: RegistryState
    ) -> None:
        path = tmp_path / "nested" / "state.json"
        save_snapshot(populated_state, path)
        restored = load_snapshot(path)

        assert restored == populated_state
        lister = restored.listers["ed25519:AL1CE"]
        assert lister.account_status is AccountStatus.VERIFIED
        assert restored.proposals[0].status is ProposalStatus.EXECUTED
        assert restored.contract_sequence == 1

    def test_missing_file_gives_empty_state(self, tmp_path: Path) -> None:
        assert load_snapshot(tmp_path / "absent.json") == RegistryState()

    def test_no_temp_file_left(self, tmp_path: Path, populated_state: RegistryState) -> None:
        save_snapshot(populated_state, tmp_path / "state.json")
        assert [p.name for p in tmp_path.iterdir()] == ["state.json"]


class TestLifecycle:
    def test_in_memory_by_default(
        self, monkeypatch: pytest.MonkeyPatch, reset_singleton
    ) -> None:
        monkeypatch.delenv("STATE_SNAPSHOT_PATH", raising=False)
        state = init_state()
        assert get_state() is state
        close_state()
        assert state_module._state is None

    def test_snapshot_saved_and_reloaded(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
        reset_singleton,
    ) -> None:
        path = tmp_path / "state.json"
        monkeypatch.setenv("STATE_SNAPSHOT_PATH", str(path))

        state = init_state()
        ContractService(state, CallerContext("a", "pk")).create_lister("a", "a@x.io")
        close_state()
        assert path.exists()

        reloaded = init_state()
        assert "pk" in reloaded.listers

    def test_get_state_creates_lazily(self, reset_singleton) -> None:
        assert get_state() is get_state()
