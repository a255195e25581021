"""Domain exceptions for the Escrow Registry.

Identity and contract operations never raise: they return a Response whose
status encodes the outcome. These exceptions cover the wallet protocol and
lookups by key, and are translated to HTTP responses by the API middleware.
"""


class RegistryError(Exception):
    """Base exception for all domain errors."""

    def __init__(self, message: str, code: str = "REGISTRY_ERROR") -> None:
        self.message = message
        self.code = code
        super().__init__(self.message)


# --- Caller Errors ---


class CallerIdentityMissingError(RegistryError):
    """Raised when the host cannot supply the caller's account or public key."""

    def __init__(self, header: str) -> None:
        super().__init__(
            message=f"Missing caller identity header: {header}",
            code="CALLER_IDENTITY_MISSING",
        )
        self.header = header


# --- Lookup Errors ---


class ContractNotFoundError(RegistryError):
    """Raised when a contract key does not exist."""

    def __init__(self, contract_key: str) -> None:
        super().__init__(
            message=f"Contract not found: {contract_key}",
            code="CONTRACT_NOT_FOUND",
        )
        self.contract_key = contract_key


class ProposalNotFoundError(RegistryError):
    """Raised when a proposal id is outside the proposal arena."""

    def __init__(self, proposal_id: int) -> None:
        super().__init__(
            message=f"Proposal not found: {proposal_id}",
            code="PROPOSAL_NOT_FOUND",
        )
        self.proposal_id = proposal_id


# --- State Machine Errors ---


class InvalidStateTransitionError(RegistryError):
    """Raised when an event is fired against a proposal that cannot accept it.

    Example: confirming an EXECUTED proposal.
    """

    def __init__(self, current_state: str, attempted_event: str) -> None:
        super().__init__(
            message=f"Invalid state transition: {current_state} -> {attempted_event}",
            code="INVALID_STATE_TRANSITION",
        )
        self.current_state = current_state
        self.attempted_event = attempted_event


# --- Permission Errors ---


class NotContractListerError(RegistryError):
    """Raised when someone other than the contract's lister manages its wallet."""

    def __init__(self, contract_key: str) -> None:
        super().__init__(
            message=f"Caller is not the lister of contract: {contract_key}",
            code="NOT_CONTRACT_LISTER",
        )
        self.contract_key = contract_key


class WalletPermissionError(RegistryError):
    """Raised when an account is not allowed to perform a wallet action."""

    def __init__(self, account_id: str, action: str) -> None:
        super().__init__(
            message=f"Account {account_id} is not permitted to {action}",
            code="WALLET_PERMISSION_DENIED",
        )
        self.account_id = account_id
        self.action = action


# --- Wallet Invariant Errors ---


class ThresholdError(RegistryError):
    """Raised when required_confirmations would break the owner-set invariant."""

    def __init__(self, required: int, owners: int) -> None:
        super().__init__(
            message=(
                f"Invalid confirmation threshold {required} for {owners} owner(s)"
            ),
            code="INVALID_THRESHOLD",
        )
        self.required = required
        self.owners = owners


class DuplicateWalletMemberError(RegistryError):
    """Raised when an account is added twice to the same wallet role."""

    def __init__(self, account_id: str, role: str) -> None:
        super().__init__(
            message=f"Account {account_id} is already a wallet {role}",
            code="DUPLICATE_WALLET_MEMBER",
        )


class WalletMemberNotFoundError(RegistryError):
    """Raised when removing an account that does not hold the wallet role."""

    def __init__(self, account_id: str, role: str) -> None:
        super().__init__(
            message=f"Account {account_id} is not a wallet {role}",
            code="WALLET_MEMBER_NOT_FOUND",
        )


class DuplicateConfirmationError(RegistryError):
    """Raised when an owner confirms the same proposal twice."""

    def __init__(self, proposal_id: int, account_id: str) -> None:
        super().__init__(
            message=f"Account {account_id} already confirmed proposal {proposal_id}",
            code="DUPLICATE_CONFIRMATION",
        )


class ConfirmationsPendingError(RegistryError):
    """Raised when executing a proposal that lacks current-owner confirmations."""

    def __init__(self, proposal_id: int, confirmed: int, required: int) -> None:
        super().__init__(
            message=(
                f"Proposal {proposal_id} has {confirmed} of {required} "
                "required owner confirmations"
            ),
            code="CONFIRMATIONS_PENDING",
        )
        self.confirmed = confirmed
        self.required = required


class InvalidAmountError(RegistryError):
    """Raised for zero or negative deposit and release amounts."""

    def __init__(self, amount: int) -> None:
        super().__init__(
            message=f"Amount must be positive, got {amount}",
            code="INVALID_AMOUNT",
        )


class InsufficientReservesError(RegistryError):
    """Raised when the wallet holds less than a release requires."""

    def __init__(self, required: int, available: int) -> None:
        super().__init__(
            message=f"Insufficient reserves: required {required}, available {available}",
            code="INSUFFICIENT_RESERVES",
        )
        self.required = required
        self.available = available
