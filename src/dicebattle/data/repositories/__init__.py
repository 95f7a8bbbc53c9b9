"""Repository exports."""

from .combat_setup_repo import CombatSetupRepository
from .enemies_repo import EnemiesRepository
from .tokens_repo import TokensRepository

__all__ = [
    "CombatSetupRepository",
    "EnemiesRepository",
    "TokensRepository",
]
