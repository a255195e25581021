"""Domain enumerations for the Escrow Registry.

These enums define the canonical states and status literals used throughout
the system. They are framework-agnostic (no FastAPI imports).
"""

import enum


class AccountStatus(enum.StrEnum):
    """Standing of a registered identity.

    Records are constructed UNVERIFIED; the registry create path promotes
    them to VERIFIED before insertion.
    """

    BLOCKED = "BLOCKED"
    LOCKED = "LOCKED"
    VERIFIED = "VERIFIED"
    UNVERIFIED = "UNVERIFIED"


class IdentityKind(enum.StrEnum):
    """Tag selecting one of the two identity registries."""

    LISTER = "LISTER"
    CONTRACTOR = "CONTRACTOR"


class ResponseStatus(enum.StrEnum):
    """Status literals carried by the Response envelope.

    These are wire strings; clients match on them exactly.
    """

    # Identity creation
    LISTER_CREATED = "LISTER CREATED"
    CONTRACTOR_CREATED = "CONTRACTOR CREATED"

    # Lookup
    LISTER = "LISTER"
    CONTRACTOR = "CONTRACTOR"
    NOT_CREATED = "NOTCREATED"

    # Removal
    REMOVED = "REMOVED"

    # Contracts
    CREATED = "CREATED"
    ASSIGNED = "ASSIGNED"
    NOT_FOUND = "NOTFOUND"
    FORBIDDEN = "FORBIDDEN"
    CONFLICT = "CONFLICT"


class ProposalStatus(enum.StrEnum):
    """Lifecycle states of a wallet release proposal.

    See domain/state_machine.py for the transition table.
    """

    PROPOSED = "PROPOSED"
    PARTIALLY_CONFIRMED = "PARTIALLY_CONFIRMED"
    EXECUTED = "EXECUTED"
    REJECTED = "REJECTED"
