"""Factory helpers for runtime entities."""

from .enemy_factory import create_enemy_combatant
from .id_factory import make_instance_id
from .player_factory import create_player_combatant
from .token_factory import TokenFactory

__all__ = [
    "TokenFactory",
    "create_enemy_combatant",
    "create_player_combatant",
    "make_instance_id",
]
