"""UI-agnostic controllers for combat flow orchestration."""
from __future__ import annotations

from .turn_controller import PlacementResult, RejectReason, TurnController, validate_combat_config

__all__ = [
    "PlacementResult",
    "RejectReason",
    "TurnController",
    "validate_combat_config",
]
