"""Enemies repository."""
from __future__ import annotations

from typing import Dict

from dicebattle.data.errors import DataValidationError
from dicebattle.data.repositories.base import RepositoryBase
from dicebattle.domain.defs import EnemyDef


class EnemiesRepository(RepositoryBase[EnemyDef]):
    """Loads and validates enemy definitions."""

    def __init__(self, base_path=None) -> None:
        super().__init__("enemies.json", base_path)

    def _build(self, raw: dict[str, object]) -> Dict[str, EnemyDef]:
        enemies: Dict[str, EnemyDef] = {}
        for raw_id, payload in raw.items():
            if not isinstance(raw_id, str):
                raise DataValidationError("Enemy IDs must be strings.")
            context = f"enemy '{raw_id}'"
            enemy_data = self._require_mapping(payload, context)
            self._assert_required(enemy_data, {"name", "max_health", "min_attack", "max_attack"}, context)

            min_attack = self._require_int(enemy_data["min_attack"], f"{context} min_attack", minimum=0)
            max_attack = self._require_int(enemy_data["max_attack"], f"{context} max_attack", minimum=0)
            if max_attack < min_attack:
                raise DataValidationError(f"{context} max_attack must be >= min_attack.")

            block_chance = self._require_probability(enemy_data.get("block_chance", 0.0), f"{context} block_chance")
            min_block = self._require_int(enemy_data.get("min_block", 0), f"{context} min_block", minimum=0)
            max_block = self._require_int(enemy_data.get("max_block", min_block), f"{context} max_block", minimum=0)
            if max_block < min_block:
                raise DataValidationError(f"{context} max_block must be >= min_block.")

            enemies[raw_id] = EnemyDef(
                id=raw_id,
                name=self._require_str(enemy_data["name"], f"{context} name"),
                max_health=self._require_int(enemy_data["max_health"], f"{context} max_health", minimum=1),
                min_attack=min_attack,
                max_attack=max_attack,
                block_chance=block_chance,
                min_block=min_block,
                max_block=max_block,
            )
        return enemies
