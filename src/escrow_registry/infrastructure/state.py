"""Registry state and its lifecycle.

Provides:
    - RegistryState: the explicit state object threaded through every service.
    - load_snapshot / save_snapshot: JSON persistence of the whole state.
    - init_state / get_state / close_state: process-wide singleton for the
      HTTP host, mirroring an engine lifecycle (load on startup, save on shutdown).

Services never reach for the singleton themselves; they receive a state
object, so tests construct a fresh RegistryState per test.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field

from escrow_registry.config import get_settings
from escrow_registry.domain.models import (
    BusinessContract,
    Contractor,
    Lister,
    ReleaseProposal,
)
from escrow_registry.logging_config import get_logger

logger = get_logger(__name__)


class RegistryState(BaseModel):
    """Everything the registry persists.

    Layout:
        listers / contractors     — public key -> identity record
        contracts                 — contract_key -> BusinessContract
        lister_contracts          — public key -> contract keys (set semantics)
        contractor_contracts      — public key -> contract keys (set semantics)
        proposals                 — release proposal arena, indexed by proposal_id
        contract_sequence         — last issued contract sequence number
    """

    listers: dict[str, Lister] = Field(default_factory=dict)
    contractors: dict[str, Contractor] = Field(default_factory=dict)
    contracts: dict[str, BusinessContract] = Field(default_factory=dict)
    lister_contracts: dict[str, list[str]] = Field(default_factory=dict)
    contractor_contracts: dict[str, list[str]] = Field(default_factory=dict)
    proposals: list[ReleaseProposal] = Field(default_factory=list)
    contract_sequence: int = 0


# ---------------------------------------------------------------------------
# Snapshots
# ---------------------------------------------------------------------------


def load_snapshot(path: Path) -> RegistryState:
    """Read a state snapshot, or return empty state if the file is absent."""
    if not path.exists():
        logger.info("state.snapshot_missing", path=str(path))
        return RegistryState()
    state = RegistryState.model_validate_json(path.read_text(encoding="utf-8"))
    logger.info(
        "state.snapshot_loaded",
        path=str(path),
        listers=len(state.listers),
        contractors=len(state.contractors),
        contracts=len(state.contracts),
    )
    return state


def save_snapshot(state: RegistryState, path: Path) -> None:
    """Write the state atomically (temp file + rename)."""
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    tmp_path.write_text(state.model_dump_json(indent=2), encoding="utf-8")
    tmp_path.replace(path)
    logger.info("state.snapshot_saved", path=str(path))


# ---------------------------------------------------------------------------
# Process-wide lifecycle (used by the HTTP host)
# ---------------------------------------------------------------------------

_state: RegistryState | None = None


def init_state() -> RegistryState:
    """Initialize the state singleton. Called during app startup."""
    global _state
    settings = get_settings()
    if settings.state_snapshot_path:
        _state = load_snapshot(Path(settings.state_snapshot_path))
    else:
        _state = RegistryState()
        logger.info("state.in_memory")
    return _state


def get_state() -> RegistryState:
    """Return the state singleton, creating empty state on first use."""
    global _state
    if _state is None:
        _state = RegistryState()
    return _state


def close_state() -> None:
    """Persist (if configured) and drop the singleton. Called during app shutdown."""
    global _state
    settings = get_settings()
    if _state is not None and settings.state_snapshot_path:
        save_snapshot(_state, Path(settings.state_snapshot_path))
    _state = None
