"""Tests for the identity registries and the contract/proposal repositories."""

from __future__ import annotations

import pytest

from escrow_registry.domain.enums import AccountStatus, IdentityKind
from escrow_registry.domain.exceptions import ProposalNotFoundError
from escrow_registry.domain.models import BusinessContractFactory, Contractor, Lister
from escrow_registry.infrastructure.repositories import (
    ContractRepository,
    ProposalRepository,
    contractor_registry,
    lister_registry,
    registry_for,
)
from escrow_registry.infrastructure.state import RegistryState


class TestIdentityRegistry:
    def test_create_verifies_and_stores(self, state: RegistryState) -> None:
        registry = lister_registry(state)
        lister = registry.create("alice.testnet", "pk-1", "alice", "alice@example.com")
        assert isinstance(lister, Lister)
        assert lister.account_status == AccountStatus.VERIFIED
        assert state.listers["pk-1"] is lister

    def test_create_overwrites_same_key(self, state: RegistryState) -> None:
        registry = lister_registry(state)
        registry.create("a.testnet", "pk-1", "first", "first@example.com")
        registry.create("a.testnet", "pk-1", "second", "second@example.com")
        assert len(registry) == 1
        assert registry.get("pk-1").name == "second"

    def test_get_missing(self, state: RegistryState) -> None:
        assert contractor_registry(state).get("nobody") is None

    def test_remove(self, state: RegistryState) -> None:
        registry = contractor_registry(state)
        created = registry.create("b.testnet", "pk-2", "bob", "bob@example.com")
        assert registry.remove("pk-2") is created
        assert registry.remove("pk-2") is None
        assert len(registry) == 0

    def test_registries_are_independent(self, state: RegistryState) -> None:
        lister_registry(state).create("a", "pk", "n", "e")
        assert contractor_registry(state).get("pk") is None

    def test_registry_for_tag(self, state: RegistryState) -> None:
        assert registry_for(state, IdentityKind.LISTER).kind is IdentityKind.LISTER
        record = registry_for(state, IdentityKind.CONTRACTOR).create("a", "pk", "n", "e")
        assert isinstance(record, Contractor)
        assert "pk" in state.contractors


class TestContractRepository:
    def _contract(self, lister: str = "pk-lister"):
        return BusinessContractFactory.create("T", "D", None, lister, False, 100, 200)

    def test_add_assigns_unique_keys(self, state: RegistryState) -> None:
        repo = ContractRepository(state)
        first = repo.add(self._contract())
        second = repo.add(self._contract())
        assert first.contract_id == second.contract_id
        assert first.contract_key != second.contract_key
        assert (first.sequence, second.sequence) == (1, 2)
        assert first.contract_key == f"{first.contract_id}-1"
        assert repo.count() == 2

    def test_add_indexes_by_lister(self, state: RegistryState) -> None:
        repo = ContractRepository(state)
        stored = repo.add(self._contract("pk-a"))
        repo.add(self._contract("pk-b"))
        assert state.lister_contracts["pk-a"] == [stored.contract_key]
        assert [c.contract_key for c in repo.for_lister("pk-a")] == [stored.contract_key]

    def test_assign_contractor_indexes(self, state: RegistryState) -> None:
        repo = ContractRepository(state)
        stored = repo.add(self._contract())
        repo.assign_contractor(stored, "pk-contractor")
        repo.assign_contractor(stored, "pk-contractor")
        assert repo.get(stored.contract_key).contractor == "pk-contractor"
        assert state.contractor_contracts["pk-contractor"] == [stored.contract_key]
        assert repo.for_contractor("pk-contractor") == [stored]

    def test_unknown_key(self, state: RegistryState) -> None:
        repo = ContractRepository(state)
        assert repo.get("missing") is None
        assert repo.for_lister("nobody") == []


class TestProposalRepository:
    def test_arena_ids_are_indexes(self, state: RegistryState) -> None:
        repo = ProposalRepository(state)
        first = repo.create("key-1", "bob", "carol", 10)
        second = repo.create("key-2", "bob", "carol", 20)
        assert (first.proposal_id, second.proposal_id) == (0, 1)
        assert repo.get_or_raise(1) is second
        assert repo.for_contract("key-1") == [first]

    @pytest.mark.parametrize("proposal_id", [-1, 0, 5])
    def test_missing_proposal(self, state: RegistryState, proposal_id: int) -> None:
        with pytest.raises(ProposalNotFoundError):
            ProposalRepository(state).get_or_raise(proposal_id)
