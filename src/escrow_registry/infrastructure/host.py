"""Host Environment Protocol.

The host supplies the identity of the current caller for every invocation.
This is a Protocol (structural subtyping) so any object with the two
accessors can act as the host: the HTTP layer builds a CallerContext from
request headers, tests build one directly.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable


@runtime_checkable
class HostEnvironment(Protocol):
    """Side-effect-free reads of the invocation context."""

    def current_caller_account_id(self) -> str:
        """Return the caller's ledger account identifier."""
        ...

    def current_caller_public_key(self) -> str:
        """Return the caller's public key (the registry lookup key)."""
        ...


@dataclass(frozen=True)
class CallerContext:
    """A fixed caller identity for one invocation.

    Attributes:
        account_id: Ledger-level account of the caller (e.g. "alice.testnet").
        public_key: Caller's key (e.g. "ed25519:7Hb..."), distinct from account_id.
    """

    account_id: str
    public_key: str

    def current_caller_account_id(self) -> str:
        return self.account_id

    def current_caller_public_key(self) -> str:
        return self.public_key
