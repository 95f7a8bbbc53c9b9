"""Enemy definition structures."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class EnemyDef:
    """Enemy type with its health pool and intent ranges."""

    id: str
    name: str
    max_health: int
    min_attack: int
    max_attack: int
    block_chance: float = 0.0
    min_block: int = 0
    max_block: int = 0
