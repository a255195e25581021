"""Application services — use case orchestration."""

from escrow_registry.services.contract_service import ContractService
from escrow_registry.services.wallet_service import WalletService

__all__ = ["ContractService", "WalletService"]
