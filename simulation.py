#!/usr/bin/env python3
"""Escrow Registry — End-to-End Simulation.

Runs the service layer directly (no HTTP) with a handful of callers:

    Scenario 1: Registration
        - Alice registers as a lister four times (upsert, one record)
        - Bob registers as a contractor, is looked up, then removed

    Scenario 2: Contracts
        - An unregistered caller is refused
        - Alice lists two contracts with the same title/description
          (same contract_id, distinct contract keys)
        - Alice assigns Bob as contractor

    Scenario 3: Multisig Release
        - Alice configures a 2-of-3 wallet and funds it
        - Owner proposes, a second owner confirms -> EXECUTED
        - Another proposal is rejected; an overdraw is refused

Usage:
    python simulation.py
    python simulation.py --scenario 3
    python simulation.py --snapshot state.json   # save final state
"""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from pathlib import Path

from escrow_registry.domain.exceptions import RegistryError
from escrow_registry.infrastructure.host import CallerContext
from escrow_registry.infrastructure.state import RegistryState, save_snapshot
from escrow_registry.logging_config import get_logger, setup_logging
from escrow_registry.services.contract_service import ContractService
from escrow_registry.services.wallet_service import WalletService

setup_logging(log_level="INFO", json_logs=False)
logger = get_logger("simulation")


# ---------------------------------------------------------------------------
# Callers
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class Actor:
    """A simulated caller with its own account and key."""

    name: str
    account_id: str
    public_key: str

    @property
    def caller(self) -> CallerContext:
        return CallerContext(account_id=self.account_id, public_key=self.public_key)

    def contracts(self, state: RegistryState) -> ContractService:
        return ContractService(state, self.caller)

    def wallet(self, state: RegistryState) -> WalletService:
        return WalletService(state, self.caller)


ALICE = Actor("alice", "alice.testnet", "ed25519:AL1CE")
BOB = Actor("bob", "bob.testnet", "ed25519:B0B")
CAROL = Actor("carol", "carol.testnet", "ed25519:CAR0L")
DAVE = Actor("dave", "dave.testnet", "ed25519:DAVE")
MALLORY = Actor("mallory", "mallory.testnet", "ed25519:MALL0RY")


def section(title: str) -> None:
    print(f"\n{'=' * 70}\n  {title}\n{'=' * 70}")


def show(label: str, value: object) -> None:
    print(f"  {label:<28} {value}")


# ===========================================================================
# Scenarios
# ===========================================================================
def scenario_1_registration(state: RegistryState) -> None:
    section("SCENARIO 1: Registration")

    for _ in range(4):
        resp = ALICE.contracts(state).create_lister("swapnil", "swapnil@gmail.com")
    show("create_lister x4:", f"{resp.status} ({len(state.listers)} lister)")

    resp = BOB.contracts(state).create_contractor("bob", "bob@example.com")
    show("create_contractor:", resp.status)
    show("get_user (bob):", BOB.contracts(state).get_user().status)

    resp = BOB.contracts(state).remove_user()
    show("remove_user (bob):", f"{resp.status} / {resp.message}")
    show("get_user (bob):", BOB.contracts(state).get_user().status)


def scenario_2_contracts(state: RegistryState) -> str:
    section("SCENARIO 2: Contracts")

    ALICE.contracts(state).create_lister("alice", "alice@example.com")
    BOB.contracts(state).create_contractor("bob", "bob@example.com")

    resp = MALLORY.contracts(state).create_contract("Roof", "Fix it", False, 100, 200)
    show("unregistered create:", f"{resp.status} / {resp.message}")

    first = ALICE.contracts(state).create_contract("Roof", "Fix it", False, 100, 200)
    second = ALICE.contracts(state).create_contract("Roof", "Fix it", True, 300, 400)
    show("same contract_id:", first.data == second.data)

    keys = [c.contract_key for c in ALICE.contracts(state).list_contracts()]
    show("distinct contract keys:", len(set(keys)))

    resp = ALICE.contracts(state).assign_contractor(keys[0], BOB.public_key)
    show("assign_contractor:", resp.status)
    show("bob's contracts:", len(BOB.contracts(state).list_contracts()))
    return keys[0]


def scenario_3_multisig(state: RegistryState, contract_key: str) -> None:
    section("SCENARIO 3: Multisig Release")

    lister_wallet = ALICE.wallet(state)
    for owner in (BOB, CAROL, DAVE):
        lister_wallet.add_owner(contract_key, owner.account_id)
    lister_wallet.set_required_confirmations(contract_key, 2)
    wallet = lister_wallet.deposit(contract_key, 1_000)
    show("wallet:", f"{len(wallet.owners)} owners, 2-of-3, reserves={wallet.total_reserves}")

    proposal = BOB.wallet(state).propose_release(contract_key, CAROL.account_id, 400)
    show("proposed:", f"#{proposal.proposal_id} {proposal.status}")
    proposal = CAROL.wallet(state).confirm_release(proposal.proposal_id)
    show("after 2nd confirmation:", proposal.status)
    show("reserves:", lister_wallet.get_wallet(contract_key).total_reserves)

    proposal = DAVE.wallet(state).propose_release(contract_key, DAVE.account_id, 100)
    proposal = BOB.wallet(state).reject_release(proposal.proposal_id)
    show("rejected proposal:", proposal.status)

    proposal = BOB.wallet(state).propose_release(contract_key, BOB.account_id, 5_000)
    try:
        DAVE.wallet(state).confirm_release(proposal.proposal_id)
    except RegistryError as exc:
        show("overdraw refused:", exc.code)

    try:
        MALLORY.wallet(state).confirm_release(proposal.proposal_id)
    except RegistryError as exc:
        show("non-owner refused:", exc.code)


# ===========================================================================
# Main
# ===========================================================================
def run(scenario: int = 0, snapshot: Path | None = None) -> RegistryState:
    """Run one scenario (1-3) or all of them (0) on fresh state."""
    state = RegistryState()

    if scenario in (0, 1):
        scenario_1_registration(state)
    if scenario in (0, 2, 3):
        contract_key = scenario_2_contracts(state)
        if scenario in (0, 3):
            scenario_3_multisig(state, contract_key)

    if snapshot is not None:
        save_snapshot(state, snapshot)
    logger.info(
        "simulation.finished",
        listers=len(state.listers),
        contractors=len(state.contractors),
        contracts=len(state.contracts),
        proposals=len(state.proposals),
    )
    return state


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Escrow Registry Simulation")
    parser.add_argument(
        "--scenario",
        type=int,
        default=0,
        choices=[0, 1, 2, 3],
        help="Run a specific scenario (1, 2, or 3). Default: run all.",
    )
    parser.add_argument(
        "--snapshot",
        type=Path,
        default=None,
        help="Write the final registry state to this JSON file.",
    )
    args = parser.parse_args()
    run(scenario=args.scenario, snapshot=args.snapshot)
