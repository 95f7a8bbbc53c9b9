"""Domain definition exports."""

from .combat_setup_def import CombatConfig, CombatSetupDef
from .enemy_def import EnemyDef
from .token_def import TokenDef

__all__ = [
    "CombatConfig",
    "CombatSetupDef",
    "EnemyDef",
    "TokenDef",
]
