"""Contract Service — identity registration and business contract creation.

This is the application layer that coordinates between:
    - The host (who is calling)
    - Identity registries (listers, contractors)
    - The business contract factory and contract repository

Identity and contract operations are total: they never raise, and report
their outcome through the Response envelope status.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from escrow_registry.domain.enums import IdentityKind, ResponseStatus
from escrow_registry.domain.exceptions import ContractNotFoundError
from escrow_registry.domain.models import BusinessContractFactory, Response
from escrow_registry.infrastructure.repositories import ContractRepository, registry_for
from escrow_registry.logging_config import get_logger

if TYPE_CHECKING:
    from escrow_registry.domain.models import BusinessContract, Identity
    from escrow_registry.infrastructure.host import HostEnvironment
    from escrow_registry.infrastructure.repositories import IdentityRegistry
    from escrow_registry.infrastructure.state import RegistryState

logger = get_logger(__name__)

# Lister first: a key present in both registries resolves to the lister.
_LOOKUP_ORDER = (IdentityKind.LISTER, IdentityKind.CONTRACTOR)

_CREATED_STATUS = {
    IdentityKind.LISTER: ResponseStatus.LISTER_CREATED,
    IdentityKind.CONTRACTOR: ResponseStatus.CONTRACTOR_CREATED,
}

UNREGISTERED_USER_MESSAGE = "Invalid/Unregisterd User"


class ContractService:
    """Manages registered identities and the contracts they create."""

    def __init__(self, state: RegistryState, host: HostEnvironment) -> None:
        self._state = state
        self._host = host
        self._contract_repo = ContractRepository(state)

    # ------------------------------------------------------------------
    # Identity Registration
    # ------------------------------------------------------------------

    def create_lister(self, name: str, email: str) -> Response:
        """Register (or re-register) the caller as a lister."""
        return self._create_identity(IdentityKind.LISTER, name, email)

    def create_contractor(self, name: str, email: str) -> Response:
        """Register (or re-register) the caller as a contractor."""
        return self._create_identity(IdentityKind.CONTRACTOR, name, email)

    # ------------------------------------------------------------------
    # Lookup / Removal
    # ------------------------------------------------------------------

    def get_user(self) -> Response:
        """Report which registry holds the caller, lister registry first."""
        match = self._find_caller()
        if match is None:
            return _user_not_found()

        kind, record = match
        return Response(
            status=ResponseStatus(kind.value).value,
            message="User exists",
            data=record.user_hash,
        )

    def remove_user(self) -> Response:
        """Remove the caller from whichever registry matched."""
        match = self._find_caller()
        if match is None:
            return _user_not_found()

        kind, record = match
        registry = self._registry(kind)
        registry.remove(self._host.current_caller_public_key())

        logger.info(
            "user.removed",
            kind=kind.value,
            name=record.name,
            remaining=len(registry),
        )
        return Response(
            status=ResponseStatus.REMOVED.value,
            message=f"{kind.value.capitalize()} REMOVED",
            data=record.user_hash,
        )

    # ------------------------------------------------------------------
    # Contracts
    # ------------------------------------------------------------------

    def create_contract(
        self,
        title: str,
        description: str,
        is_milestoned: bool,
        start_date: int,
        end_date: int,
    ) -> Response:
        """Create and store a contract listed by the caller.

        The caller must be a registered lister. The returned data is the
        contract's content hash; the stored record also carries a unique key.
        """
        lister_key = self._host.current_caller_public_key()
        if self._registry(IdentityKind.LISTER).get(lister_key) is None:
            logger.info("contract.rejected_unregistered", lister=lister_key)
            return Response(
                status=ResponseStatus.NOT_CREATED.value,
                message=UNREGISTERED_USER_MESSAGE,
            )

        contract = BusinessContractFactory.create(
            title=title,
            description=description,
            contractor=None,
            lister=lister_key,
            is_milestoned=is_milestoned,
            start_date=start_date,
            end_date=end_date,
        )
        contract = self._contract_repo.add(contract)

        logger.info(
            "contract.created",
            contract_id=contract.contract_id,
            contract_key=contract.contract_key,
            total_contracts=self._contract_repo.count(),
        )
        return Response(
            status=ResponseStatus.CREATED.value,
            message="Contract created successfully",
            data=contract.contract_id,
        )

    def assign_contractor(self, contract_key: str, contractor_public_key: str) -> Response:
        """Attach a registered contractor to a contract the caller listed."""
        contract = self._contract_repo.get(contract_key)
        if contract is None:
            return Response(
                status=ResponseStatus.NOT_FOUND.value,
                message="Contract does not exist",
            )
        if contract.lister != self._host.current_caller_public_key():
            return Response(
                status=ResponseStatus.FORBIDDEN.value,
                message="Only the lister can assign a contractor",
            )
        if self._registry(IdentityKind.CONTRACTOR).get(contractor_public_key) is None:
            return Response(
                status=ResponseStatus.NOT_CREATED.value,
                message="Contractor does not exist",
            )
        if contract.contractor not in (None, contractor_public_key):
            return Response(
                status=ResponseStatus.CONFLICT.value,
                message="Contract already has a contractor",
                data=contract_key,
            )

        self._contract_repo.assign_contractor(contract, contractor_public_key)
        logger.info(
            "contract.contractor_assigned",
            contract_key=contract_key,
            contractor=contractor_public_key,
        )
        return Response(
            status=ResponseStatus.ASSIGNED.value,
            message="Contractor assigned successfully",
            data=contract_key,
        )

    # ------------------------------------------------------------------
    # Read helpers
    # ------------------------------------------------------------------

    def get_contract(self, contract_key: str) -> BusinessContract:
        """Get a contract or raise."""
        contract = self._contract_repo.get(contract_key)
        if contract is None:
            raise ContractNotFoundError(contract_key)
        return contract

    def list_contracts(self) -> list[BusinessContract]:
        """Contracts where the caller is lister or contractor, in creation order."""
        public_key = self._host.current_caller_public_key()
        by_key = {
            c.contract_key: c
            for c in (
                *self._contract_repo.for_lister(public_key),
                *self._contract_repo.for_contractor(public_key),
            )
        }
        return sorted(by_key.values(), key=lambda c: c.sequence)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _registry(self, kind: IdentityKind) -> IdentityRegistry:
        return registry_for(self._state, kind)

    def _create_identity(self, kind: IdentityKind, name: str, email: str) -> Response:
        registry = self._registry(kind)
        record = registry.create(
            account_id=self._host.current_caller_account_id(),
            public_key=self._host.current_caller_public_key(),
            name=name,
            email=email,
        )

        logger.info(
            f"{kind.value.lower()}.created",
            name=record.name,
            total=len(registry),
        )
        return Response(
            status=_CREATED_STATUS[kind].value,
            message=f"{kind.value.capitalize()} created successfully",
            data=record.user_hash,
        )

    def _find_caller(self) -> tuple[IdentityKind, Identity] | None:
        public_key = self._host.current_caller_public_key()
        for kind in _LOOKUP_ORDER:
            record = self._registry(kind).get(public_key)
            if record is not None:
                return kind, record
        return None


def _user_not_found() -> Response:
    return Response(
        status=ResponseStatus.NOT_CREATED.value,
        message="User does not exist",
    )
