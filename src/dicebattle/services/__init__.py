"""Service layer exports."""

from .action_resolver import ActionResolver
from .controllers import PlacementResult, TurnController
from .enemy_ai import EnemyAI
from .errors import CombatSetupError, FactoryError
from .factories.combat_factory import create_turn_controller

__all__ = [
    "ActionResolver",
    "CombatSetupError",
    "EnemyAI",
    "FactoryError",
    "PlacementResult",
    "TurnController",
    "create_turn_controller",
]
