"""Combat setup definition structures."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from .enemy_def import EnemyDef
from .token_def import TokenDef


@dataclass(frozen=True, slots=True)
class CombatSetupDef:
    """Raw combat configuration referencing tokens and enemies by id."""

    id: str
    player_health: int
    player_max_mana: int
    hand_size: int
    grid_size: int
    deck_ids: Tuple[str, ...]
    enemy_ids: Tuple[str, ...]


@dataclass(frozen=True, slots=True)
class CombatConfig:
    """Fully resolved configuration handed to the turn controller."""

    player_health: int
    player_max_mana: int
    hand_size: int
    grid_size: int
    deck: Tuple[TokenDef, ...]
    enemies: Tuple[EnemyDef, ...]
