"""FastAPI dependency injection providers.

These are used with Depends() in route handlers to inject the registry
state, the caller identity read from request headers, and the services
bound to both.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import Depends, Request

from escrow_registry.config import Settings, get_settings
from escrow_registry.domain.exceptions import CallerIdentityMissingError
from escrow_registry.infrastructure.host import CallerContext
from escrow_registry.infrastructure.state import get_state
from escrow_registry.logging_config import bind_caller
from escrow_registry.services.contract_service import ContractService
from escrow_registry.services.wallet_service import WalletService

if TYPE_CHECKING:
    from escrow_registry.infrastructure.state import RegistryState


def get_app_settings() -> Settings:
    """Provide the application settings."""
    return get_settings()


def get_registry_state() -> RegistryState:
    """Provide the process-wide registry state."""
    return get_state()


async def get_caller(
    request: Request,
    settings: Settings = Depends(get_app_settings),
) -> CallerContext:
    """Build the caller identity from the configured request headers."""
    account_id = request.headers.get(settings.caller_account_header)
    if not account_id:
        raise CallerIdentityMissingError(settings.caller_account_header)
    public_key = request.headers.get(settings.caller_public_key_header)
    if not public_key:
        raise CallerIdentityMissingError(settings.caller_public_key_header)

    bind_caller(account_id, public_key)
    return CallerContext(account_id=account_id, public_key=public_key)


async def get_contract_service(
    state: RegistryState = Depends(get_registry_state),
    caller: CallerContext = Depends(get_caller),
) -> ContractService:
    """Provide a ContractService bound to the current caller."""
    return ContractService(state, caller)


async def get_wallet_service(
    state: RegistryState = Depends(get_registry_state),
    caller: CallerContext = Depends(get_caller),
) -> WalletService:
    """Provide a WalletService bound to the current caller."""
    return WalletService(state, caller)
