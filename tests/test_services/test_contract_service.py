"""Tests for ContractService: registration, lookup, removal, and contracts."""

from __future__ import annotations

import pytest

from escrow_registry.domain.exceptions import ContractNotFoundError
from escrow_registry.domain.hashing import generate_content_hash
from escrow_registry.infrastructure.host import CallerContext, HostEnvironment
from escrow_registry.infrastructure.state import RegistryState


class TestHost:
    def test_caller_context_is_a_host(self, alice: CallerContext) -> None:
        assert isinstance(alice, HostEnvironment)
        assert alice.current_caller_account_id() == "alice.testnet"
        assert alice.current_caller_public_key() == "ed25519:AL1CE"


class TestCreateIdentity:
    def test_repeated_create_lister_upserts(
        self, state: RegistryState, alice: CallerContext, contract_service
    ) -> None:
        svc = contract_service(alice)
        responses = [svc.create_lister("swapnil", "swapnil@gmail.com") for _ in range(4)]

        assert len(state.listers) == 1
        assert all(r.status == "LISTER CREATED" for r in responses)
        assert responses[0].data
        assert len({r.data for r in responses}) == 1

    def test_create_lister_returns_hash(self, alice: CallerContext, contract_service) -> None:
        resp = contract_service(alice).create_lister("swapnil", "swapnil@gmail.com")
        assert resp.data == generate_content_hash("swapnil", "swapnil@gmail.com")
        assert resp.message == "Lister created successfully"

    def test_create_contractor(
        self, state: RegistryState, bob: CallerContext, contract_service
    ) -> None:
        resp = contract_service(bob).create_contractor("bob", "bob@example.com")
        assert resp.status == "CONTRACTOR CREATED"
        assert resp.data == generate_content_hash("bob", "bob@example.com")
        assert state.contractors["ed25519:B0B"].account_id == "bob.testnet"
        assert state.listers == {}

    def test_later_registration_replaces_record(
        self, state: RegistryState, alice: CallerContext, contract_service
    ) -> None:
        svc = contract_service(alice)
        svc.create_lister("old", "old@example.com")
        resp = svc.create_lister("new", "new@example.com")
        assert state.listers["ed25519:AL1CE"].name == "new"
        assert svc.get_user().data == resp.data


class TestGetUser:
    def test_unknown_caller(self, stranger: CallerContext, contract_service) -> None:
        resp = contract_service(stranger).get_user()
        assert resp.status == "NOTCREATED"
        assert resp.data is None

    def test_lister(self, alice: CallerContext, contract_service) -> None:
        svc = contract_service(alice)
        created = svc.create_lister("swapnil", "swapnil@gmail.com")
        resp = svc.get_user()
        assert resp.status == "LISTER"
        assert resp.data == created.data

    def test_contractor(self, bob: CallerContext, contract_service) -> None:
        svc = contract_service(bob)
        created = svc.create_contractor("bob", "bob@example.com")
        resp = svc.get_user()
        assert resp.status == "CONTRACTOR"
        assert resp.data == created.data

    def test_lister_takes_priority(self, alice: CallerContext, contract_service) -> None:
        svc = contract_service(alice)
        lister = svc.create_lister("as lister", "l@example.com")
        svc.create_contractor("as contractor", "c@example.com")
        resp = svc.get_user()
        assert resp.status == "LISTER"
        assert resp.data == lister.data


class TestRemoveUser:
    def test_remove_lister(
        self, state: RegistryState, alice: CallerContext, contract_service
    ) -> None:
        svc = contract_service(alice)
        created = svc.create_lister("swapnil", "swapnil@gmail.com")

        resp = svc.remove_user()
        assert resp.status == "REMOVED"
        assert resp.data == created.data
        assert svc.get_user().status == "NOTCREATED"
        assert state.listers == {}

    def test_remove_contractor_uses_contractor_registry(
        self,
        state: RegistryState,
        alice: CallerContext,
        bob: CallerContext,
        contract_service,
    ) -> None:
        contract_service(alice).create_lister("alice", "alice@example.com")
        created = contract_service(bob).create_contractor("bob", "bob@example.com")

        resp = contract_service(bob).remove_user()
        assert resp.status == "REMOVED"
        assert resp.message == "Contractor REMOVED"
        assert resp.data == created.data
        assert "ed25519:B0B" not in state.contractors
        assert "ed25519:AL1CE" in state.listers

    def test_remove_prefers_lister_when_in_both(
        self, state: RegistryState, alice: CallerContext, contract_service
    ) -> None:
        svc = contract_service(alice)
        svc.create_lister("l", "l@example.com")
        svc.create_contractor("c", "c@example.com")

        assert svc.remove_user().message == "Lister REMOVED"
        assert svc.get_user().status == "CONTRACTOR"
        assert svc.remove_user().message == "Contractor REMOVED"
        assert svc.get_user().status == "NOTCREATED"

    def test_remove_unknown(self, stranger: CallerContext, contract_service) -> None:
        resp = contract_service(stranger).remove_user()
        assert resp.status == "NOTCREATED"
        assert resp.data is None


class TestCreateContract:
    def test_unregistered_caller(
        self, state: RegistryState, stranger: CallerContext, contract_service
    ) -> None:
        resp = contract_service(stranger).create_contract("T", "D", False, 100, 200)
        assert resp.status == "NOTCREATED"
        assert resp.message == "Invalid/Unregisterd User"
        assert resp.data is None
        assert state.contracts == {}

    def test_contractor_cannot_create(self, bob: CallerContext, contract_service) -> None:
        svc = contract_service(bob)
        svc.create_contractor("bob", "bob@example.com")
        assert svc.create_contract("T", "D", False, 100, 200).status == "NOTCREATED"

    def test_registered_lister(
        self, state: RegistryState, alice: CallerContext, contract_service
    ) -> None:
        svc = contract_service(alice)
        svc.create_lister("alice", "alice@example.com")

        resp = svc.create_contract("T", "D", False, 100, 200)
        assert resp.status == "CREATED"
        assert resp.data == generate_content_hash("T", "D")

        stored = next(iter(state.contracts.values()))
        assert stored.lister == "ed25519:AL1CE"
        assert stored.contractor is None
        assert stored.wallet.required_confirmations == 1

    def test_same_title_and_description_collide_but_both_persist(
        self, state: RegistryState, alice: CallerContext, contract_service
    ) -> None:
        svc = contract_service(alice)
        svc.create_lister("alice", "alice@example.com")

        first = svc.create_contract("T", "D", False, 100, 200)
        second = svc.create_contract("T", "D", True, 300, 400)
        assert first.data == second.data
        assert len(state.contracts) == 2
        assert len(state.lister_contracts["ed25519:AL1CE"]) == 2

    def test_removed_lister_cannot_create(self, alice: CallerContext, contract_service) -> None:
        svc = contract_service(alice)
        svc.create_lister("alice", "alice@example.com")
        svc.remove_user()
        assert svc.create_contract("T", "D", False, 1, 2).status == "NOTCREATED"


class TestAssignContractor:
    def test_assign(
        self,
        state: RegistryState,
        listed_contract: str,
        alice: CallerContext,
        bob: CallerContext,
        contract_service,
    ) -> None:
        contract_service(bob).create_contractor("bob", "bob@example.com")

        resp = contract_service(alice).assign_contractor(listed_contract, bob.public_key)
        assert resp.status == "ASSIGNED"
        assert resp.data == listed_contract
        assert state.contracts[listed_contract].contractor == bob.public_key
        assert [c.contract_key for c in contract_service(bob).list_contracts()] == [
            listed_contract
        ]

    def test_unknown_contract(self, alice: CallerContext, contract_service) -> None:
        resp = contract_service(alice).assign_contractor("missing", "pk")
        assert resp.status == "NOTFOUND"

    def test_only_lister_may_assign(
        self, listed_contract: str, bob: CallerContext, contract_service
    ) -> None:
        contract_service(bob).create_contractor("bob", "bob@example.com")
        resp = contract_service(bob).assign_contractor(listed_contract, bob.public_key)
        assert resp.status == "FORBIDDEN"

    def test_contractor_must_be_registered(
        self, listed_contract: str, alice: CallerContext, contract_service
    ) -> None:
        resp = contract_service(alice).assign_contractor(listed_contract, "ed25519:NOBODY")
        assert resp.status == "NOTCREATED"

    def test_second_contractor_conflicts(
        self,
        listed_contract: str,
        alice: CallerContext,
        bob: CallerContext,
        carol: CallerContext,
        contract_service,
    ) -> None:
        contract_service(bob).create_contractor("bob", "bob@example.com")
        contract_service(carol).create_contractor("carol", "carol@example.com")
        svc = contract_service(alice)

        assert svc.assign_contractor(listed_contract, bob.public_key).status == "ASSIGNED"
        assert svc.assign_contractor(listed_contract, bob.public_key).status == "ASSIGNED"
        assert svc.assign_contractor(listed_contract, carol.public_key).status == "CONFLICT"


class TestContractReads:
    def test_get_contract(self, listed_contract: str, stranger: CallerContext, contract_service) -> None:
        contract = contract_service(stranger).get_contract(listed_contract)
        assert contract.title == "Kitchen remodel"

    def test_get_missing_contract(self, alice: CallerContext, contract_service) -> None:
        with pytest.raises(ContractNotFoundError):
            contract_service(alice).get_contract("missing")

    def test_list_contracts_in_creation_order(self, alice: CallerContext, contract_service) -> None:
        svc = contract_service(alice)
        svc.create_lister("alice", "alice@example.com")
        svc.create_contract("B", "second", False, 1, 2)
        svc.create_contract("A", "first", False, 1, 2)
        assert [c.title for c in svc.list_contracts()] == ["B", "A"]

    def test_list_contracts_empty(self, stranger: CallerContext, contract_service) -> None:
        assert contract_service(stranger).list_contracts() == []
