"""Combat setup repository."""
from __future__ import annotations

from typing import Dict, List

from dicebattle.data.errors import DataReferenceError, DataValidationError
from dicebattle.data.repositories.base import RepositoryBase
from dicebattle.data.repositories.enemies_repo import EnemiesRepository
from dicebattle.data.repositories.tokens_repo import TokensRepository
from dicebattle.domain.defs import CombatConfig, CombatSetupDef, EnemyDef, TokenDef

DEFAULT_HAND_SIZE = 5
DEFAULT_GRID_SIZE = 9


class CombatSetupRepository(RepositoryBase[CombatSetupDef]):
    """Loads combat setups: starting player stats, deck list and enemy roster."""

    def __init__(self, base_path=None) -> None:
        super().__init__("combat.json", base_path)

    def _build(self, raw: dict[str, object]) -> Dict[str, CombatSetupDef]:
        setups: Dict[str, CombatSetupDef] = {}
        for raw_id, payload in raw.items():
            if not isinstance(raw_id, str):
                raise DataValidationError("Combat setup IDs must be strings.")
            context = f"combat setup '{raw_id}'"
            setup_data = self._require_mapping(payload, context)
            self._assert_required(setup_data, {"player_health", "player_max_mana", "deck", "enemies"}, context)

            setups[raw_id] = CombatSetupDef(
                id=raw_id,
                player_health=self._require_int(setup_data["player_health"], f"{context} player_health", minimum=1),
                player_max_mana=self._require_int(
                    setup_data["player_max_mana"], f"{context} player_max_mana", minimum=0
                ),
                hand_size=self._require_int(
                    setup_data.get("hand_size", DEFAULT_HAND_SIZE), f"{context} hand_size", minimum=1
                ),
                grid_size=self._require_int(
                    setup_data.get("grid_size", DEFAULT_GRID_SIZE), f"{context} grid_size", minimum=1
                ),
                deck_ids=tuple(self._require_str_list(setup_data["deck"], f"{context} deck")),
                enemy_ids=tuple(self._require_str_list(setup_data["enemies"], f"{context} enemies")),
            )
        return setups

    def resolve(
        self,
        setup_id: str,
        tokens_repo: TokensRepository,
        enemies_repo: EnemiesRepository,
    ) -> CombatConfig:
        """Resolve a setup's token and enemy references into a CombatConfig."""
        try:
            setup = self.get(setup_id)
        except KeyError as exc:
            raise DataReferenceError(f"Combat setup '{setup_id}' not found.") from exc

        deck: List[TokenDef] = []
        for token_id in setup.deck_ids:
            try:
                deck.append(tokens_repo.get(token_id))
            except KeyError as exc:
                raise DataReferenceError(f"Combat setup '{setup_id}' references unknown token '{token_id}'.") from exc

        enemies: List[EnemyDef] = []
        for enemy_id in setup.enemy_ids:
            try:
                enemies.append(enemies_repo.get(enemy_id))
            except KeyError as exc:
                raise DataReferenceError(f"Combat setup '{setup_id}' references unknown enemy '{enemy_id}'.") from exc

        return CombatConfig(
            player_health=setup.player_health,
            player_max_mana=setup.player_max_mana,
            hand_size=setup.hand_size,
            grid_size=setup.grid_size,
            deck=tuple(deck),
            enemies=tuple(enemies),
        )
