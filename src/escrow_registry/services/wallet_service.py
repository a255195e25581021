"""Wallet Service — multisig escrow wallet management and release protocol.

Coordinates between:
    - The host (who is calling)
    - The contract repository (each contract owns exactly one wallet)
    - The proposal arena and the ProposalStateMachine guard

Permissions:
    - Wallet membership and threshold: the contract's lister (by public key).
    - Deposits: the lister, any owner, or any user.
    - Propose / confirm / reject / execute releases: owners only (by account id).
      Only confirmations from current owners count toward the threshold.

Unlike identity operations, wallet operations raise domain exceptions.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from statemachine.exceptions import TransitionNotAllowed

from escrow_registry.domain.enums import ProposalStatus
from escrow_registry.domain.exceptions import (
    ConfirmationsPendingError,
    ContractNotFoundError,
    DuplicateConfirmationError,
    InsufficientReservesError,
    InvalidAmountError,
    InvalidStateTransitionError,
    NotContractListerError,
    WalletPermissionError,
)
from escrow_registry.domain.state_machine import ProposalStateMachine
from escrow_registry.infrastructure.repositories import (
    ContractRepository,
    ProposalRepository,
)
from escrow_registry.logging_config import get_logger

if TYPE_CHECKING:
    from escrow_registry.domain.models import BusinessContract, MultiSigWallet, ReleaseProposal
    from escrow_registry.infrastructure.host import HostEnvironment
    from escrow_registry.infrastructure.state import RegistryState

logger = get_logger(__name__)


class WalletService:
    """Manages the escrow wallet embedded in each business contract."""

    def __init__(self, state: RegistryState, host: HostEnvironment) -> None:
        self._host = host
        self._contract_repo = ContractRepository(state)
        self._proposal_repo = ProposalRepository(state)

    # ------------------------------------------------------------------
    # Membership & threshold (lister only)
    # ------------------------------------------------------------------

    def add_owner(self, contract_key: str, account_id: str) -> MultiSigWallet:
        contract = self._get_managed_contract(contract_key)
        contract.wallet.add_owner(account_id)
        logger.info("wallet.owner_added", contract_key=contract_key, owner=account_id)
        return contract.wallet

    def remove_owner(self, contract_key: str, account_id: str) -> MultiSigWallet:
        contract = self._get_managed_contract(contract_key)
        contract.wallet.remove_owner(account_id)
        logger.info("wallet.owner_removed", contract_key=contract_key, owner=account_id)
        return contract.wallet

    def add_user(self, contract_key: str, account_id: str) -> MultiSigWallet:
        contract = self._get_managed_contract(contract_key)
        contract.wallet.add_user(account_id)
        logger.info("wallet.user_added", contract_key=contract_key, user=account_id)
        return contract.wallet

    def set_required_confirmations(self, contract_key: str, required: int) -> MultiSigWallet:
        """Change the threshold; must not exceed the current owner count."""
        contract = self._get_managed_contract(contract_key)
        contract.wallet.set_required_confirmations(required)
        logger.info(
            "wallet.threshold_changed",
            contract_key=contract_key,
            required_confirmations=required,
        )
        return contract.wallet

    # ------------------------------------------------------------------
    # Funding
    # ------------------------------------------------------------------

    def deposit(self, contract_key: str, amount: int) -> MultiSigWallet:
        contract = self._get_contract_or_raise(contract_key)
        account_id = self._host.current_caller_account_id()
        is_lister = contract.lister == self._host.current_caller_public_key()
        if not (is_lister or contract.wallet.is_member(account_id)):
            raise WalletPermissionError(account_id, "deposit")

        contract.wallet.deposit(amount)
        logger.info(
            "wallet.deposited",
            contract_key=contract_key,
            amount=amount,
            total_reserves=contract.wallet.total_reserves,
        )
        return contract.wallet

    def get_wallet(self, contract_key: str) -> MultiSigWallet:
        return self._get_contract_or_raise(contract_key).wallet

    # ------------------------------------------------------------------
    # Release protocol (owners only)
    # ------------------------------------------------------------------

    def propose_release(
        self,
        contract_key: str,
        recipient: str,
        amount: int,
    ) -> ReleaseProposal:
        """Open a release proposal; the proposer's confirmation is recorded.

        With a threshold of one the proposal executes immediately.
        """
        contract = self._get_contract_or_raise(contract_key)
        account_id = self._require_owner(contract, "propose releases")
        if amount <= 0:
            raise InvalidAmountError(amount)
        wallet = contract.wallet
        if wallet.required_confirmations <= 1 and amount > wallet.total_reserves:
            raise InsufficientReservesError(amount, wallet.total_reserves)

        proposal = self._proposal_repo.create(
            contract_key=contract_key,
            proposer=account_id,
            recipient=recipient,
            amount=amount,
        )
        logger.info(
            "wallet.release_proposed",
            contract_key=contract_key,
            proposal_id=proposal.proposal_id,
            amount=amount,
        )
        self._confirm(proposal, contract, account_id)
        return proposal

    def confirm_release(self, proposal_id: int) -> ReleaseProposal:
        proposal = self._proposal_repo.get_or_raise(proposal_id)
        contract = self._get_contract_or_raise(proposal.contract_key)
        account_id = self._require_owner(contract, "confirm releases")
        self._confirm(proposal, contract, account_id)
        return proposal

    def reject_release(self, proposal_id: int) -> ReleaseProposal:
        proposal = self._proposal_repo.get_or_raise(proposal_id)
        contract = self._get_contract_or_raise(proposal.contract_key)
        account_id = self._require_owner(contract, "reject releases")

        proposal.status = self._fire_transition(proposal, "reject")
        logger.info(
            "wallet.release_rejected",
            proposal_id=proposal_id,
            rejected_by=account_id,
        )
        return proposal

    def execute_release(self, proposal_id: int) -> ReleaseProposal:
        """Execute a proposal whose current-owner confirmations meet the threshold.

        Needed when the threshold was lowered, or an owner removed, after the
        last confirmation arrived.
        """
        proposal = self._proposal_repo.get_or_raise(proposal_id)
        contract = self._get_contract_or_raise(proposal.contract_key)
        account_id = self._require_owner(contract, "execute releases")
        wallet = contract.wallet

        new_status = self._fire_transition(proposal, "execute")
        confirmed = len(_owner_confirmations(proposal, wallet))
        if confirmed < wallet.required_confirmations:
            raise ConfirmationsPendingError(
                proposal_id, confirmed, wallet.required_confirmations
            )
        if proposal.amount > wallet.total_reserves:
            raise InsufficientReservesError(proposal.amount, wallet.total_reserves)

        proposal.status = new_status
        self._withdraw(proposal, wallet, executed_by=account_id)
        return proposal

    def get_proposal(self, proposal_id: int) -> ReleaseProposal:
        return self._proposal_repo.get_or_raise(proposal_id)

    def list_proposals(self, contract_key: str) -> list[ReleaseProposal]:
        self._get_contract_or_raise(contract_key)
        return self._proposal_repo.for_contract(contract_key)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _confirm(
        self,
        proposal: ReleaseProposal,
        contract: BusinessContract,
        account_id: str,
    ) -> None:
        """Record one owner confirmation and execute once the threshold is met.

        Only confirmations from accounts that are still owners count toward
        the threshold. Nothing is recorded if the transition is illegal or if
        execution would overdraw the wallet.
        """
        if account_id in proposal.confirmations:
            raise DuplicateConfirmationError(proposal.proposal_id, account_id)

        wallet = contract.wallet
        confirmed = len(_owner_confirmations(proposal, wallet)) + 1
        reaches_threshold = confirmed >= wallet.required_confirmations
        events = ("confirm", "execute") if reaches_threshold else ("confirm",)
        new_status = self._fire_transition(proposal, *events)

        if reaches_threshold and proposal.amount > wallet.total_reserves:
            raise InsufficientReservesError(proposal.amount, wallet.total_reserves)

        proposal.confirmations.append(account_id)
        proposal.status = new_status
        logger.info(
            "wallet.release_confirmed",
            proposal_id=proposal.proposal_id,
            confirmations=confirmed,
            required=wallet.required_confirmations,
        )

        if new_status is ProposalStatus.EXECUTED:
            self._withdraw(proposal, wallet, executed_by=account_id)

    def _withdraw(
        self,
        proposal: ReleaseProposal,
        wallet: MultiSigWallet,
        executed_by: str,
    ) -> None:
        wallet.withdraw(proposal.amount)
        logger.info(
            "wallet.release_executed",
            proposal_id=proposal.proposal_id,
            recipient=proposal.recipient,
            amount=proposal.amount,
            executed_by=executed_by,
            total_reserves=wallet.total_reserves,
        )

    def _get_contract_or_raise(self, contract_key: str) -> BusinessContract:
        contract = self._contract_repo.get(contract_key)
        if contract is None:
            raise ContractNotFoundError(contract_key)
        return contract

    def _get_managed_contract(self, contract_key: str) -> BusinessContract:
        contract = self._get_contract_or_raise(contract_key)
        if contract.lister != self._host.current_caller_public_key():
            raise NotContractListerError(contract_key)
        return contract

    def _require_owner(self, contract: BusinessContract, action: str) -> str:
        account_id = self._host.current_caller_account_id()
        if not contract.wallet.is_owner(account_id):
            raise WalletPermissionError(account_id, action)
        return account_id

    def _fire_transition(self, proposal: ReleaseProposal, *event_names: str) -> ProposalStatus:
        """Validate a sequence of state machine events and return the final status.

        Raises InvalidStateTransitionError if any event is illegal.
        """
        sm = ProposalStateMachine(current_status=proposal.status.value)
        for event_name in event_names:
            try:
                getattr(sm, event_name)()
            except TransitionNotAllowed as err:
                raise InvalidStateTransitionError(sm.status, event_name) from err
        return ProposalStatus(sm.status)


def _owner_confirmations(proposal: ReleaseProposal, wallet: MultiSigWallet) -> list[str]:
    """Confirmations given by accounts that are still wallet owners."""
    return [a for a in proposal.confirmations if wallet.is_owner(a)]
