"""Repository classes over the registry state.

Repositories encapsulate all reads and writes of RegistryState and provide
a clean interface to the service layer. They never decide business rules
(permissions, preconditions); that is the caller's responsibility.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Generic, TypeVar

from escrow_registry.domain.enums import AccountStatus, IdentityKind
from escrow_registry.domain.exceptions import ProposalNotFoundError
from escrow_registry.domain.models import (
    Contractor,
    Identity,
    Lister,
    ReleaseProposal,
)

if TYPE_CHECKING:
    from escrow_registry.domain.models import BusinessContract
    from escrow_registry.infrastructure.state import RegistryState

T = TypeVar("T", bound=Identity)


class IdentityRegistry(Generic[T]):
    """Public key -> identity record mapping for one identity kind.

    create is an upsert: a second registration under the same public key
    replaces the earlier record. None of the operations raise.
    """

    def __init__(self, records: dict[str, T], record_type: type[T]) -> None:
        self._records = records
        self._record_type = record_type

    @property
    def kind(self) -> IdentityKind:
        return self._record_type.kind

    def create(self, account_id: str, public_key: str, name: str, email: str) -> T:
        """Build a record, mark it VERIFIED and store it under public_key."""
        record = self._record_type.new(name, email, account_id)
        record.account_status = AccountStatus.VERIFIED
        self._records[public_key] = record
        return record

    def get(self, public_key: str) -> T | None:
        return self._records.get(public_key)

    def remove(self, public_key: str) -> T | None:
        return self._records.pop(public_key, None)

    def __len__(self) -> int:
        return len(self._records)


def lister_registry(state: RegistryState) -> IdentityRegistry[Lister]:
    return IdentityRegistry(state.listers, Lister)


def contractor_registry(state: RegistryState) -> IdentityRegistry[Contractor]:
    return IdentityRegistry(state.contractors, Contractor)


def registry_for(state: RegistryState, kind: IdentityKind) -> IdentityRegistry:
    """Select the identity registry for a kind tag."""
    if kind is IdentityKind.LISTER:
        return lister_registry(state)
    return contractor_registry(state)


class ContractRepository:
    """Data access for business contracts and the per-identity contract sets."""

    def __init__(self, state: RegistryState) -> None:
        self._state = state

    def add(self, contract: BusinessContract) -> BusinessContract:
        """Store a new contract under a unique key and index it by lister.

        The key is "{contract_id}-{sequence}", so contracts with equal
        title and description never overwrite each other.
        """
        self._state.contract_sequence += 1
        sequence = self._state.contract_sequence
        stored = contract.model_copy(
            deep=True,
            update={
                "sequence": sequence,
                "contract_key": f"{contract.contract_id}-{sequence}",
            },
        )
        self._state.contracts[stored.contract_key] = stored
        _index(self._state.lister_contracts, stored.lister, stored.contract_key)
        return stored

    def get(self, contract_key: str) -> BusinessContract | None:
        return self._state.contracts.get(contract_key)

    def assign_contractor(
        self,
        contract: BusinessContract,
        contractor_public_key: str,
    ) -> BusinessContract:
        """Record the contractor on the contract and index it by contractor."""
        contract.contractor = contractor_public_key
        _index(
            self._state.contractor_contracts,
            contractor_public_key,
            contract.contract_key,
        )
        return contract

    def for_lister(self, public_key: str) -> list[BusinessContract]:
        return self._resolve(self._state.lister_contracts.get(public_key, []))

    def for_contractor(self, public_key: str) -> list[BusinessContract]:
        return self._resolve(self._state.contractor_contracts.get(public_key, []))

    def count(self) -> int:
        return len(self._state.contracts)

    def _resolve(self, keys: list[str]) -> list[BusinessContract]:
        contracts = [self._state.contracts[k] for k in keys if k in self._state.contracts]
        return sorted(contracts, key=lambda c: c.sequence)


def _index(index: dict[str, list[str]], public_key: str, contract_key: str) -> None:
    keys = index.setdefault(public_key, [])
    if contract_key not in keys:
        keys.append(contract_key)


class ProposalRepository:
    """Append-only arena of release proposals, addressed by list index."""

    def __init__(self, state: RegistryState) -> None:
        self._state = state

    def create(
        self,
        contract_key: str,
        proposer: str,
        recipient: str,
        amount: int,
    ) -> ReleaseProposal:
        proposal = ReleaseProposal(
            proposal_id=len(self._state.proposals),
            contract_key=contract_key,
            proposer=proposer,
            recipient=recipient,
            amount=amount,
        )
        self._state.proposals.append(proposal)
        return proposal

    def get_or_raise(self, proposal_id: int) -> ReleaseProposal:
        if not 0 <= proposal_id < len(self._state.proposals):
            raise ProposalNotFoundError(proposal_id)
        return self._state.proposals[proposal_id]

    def for_contract(self, contract_key: str) -> list[ReleaseProposal]:
        return [p for p in self._state.proposals if p.contract_key == contract_key]
