"""Domain models for dice combat."""

from .action_grid import ActionGrid
from .combat_models import CombatSession, CombatView, EnemyIntent
from .combatant import Combatant, EnemyCombatant, PlayerCombatant
from .deck import Deck
from .hand import Hand
from .tokens import TokenInstance, TokenLocation

__all__ = [
    "ActionGrid",
    "CombatSession",
    "CombatView",
    "Combatant",
    "Deck",
    "EnemyCombatant",
    "EnemyIntent",
    "Hand",
    "PlayerCombatant",
    "TokenInstance",
    "TokenLocation",
]
