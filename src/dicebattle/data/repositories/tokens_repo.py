"""Token definitions repository."""
from __future__ import annotations

from typing import Dict

from dicebattle.core.types import ACTION_KINDS, DIE_SIDES, ELEMENTS, RARITIES, TARGET_KINDS
from dicebattle.data.errors import DataValidationError
from dicebattle.data.repositories.base import RepositoryBase
from dicebattle.domain.defs import TokenDef


class TokensRepository(RepositoryBase[TokenDef]):
    """Loads and validates die definitions."""

    def __init__(self, base_path=None) -> None:
        super().__init__("tokens.json", base_path)

    def _build(self, raw: dict[str, object]) -> Dict[str, TokenDef]:
        tokens: Dict[str, TokenDef] = {}
        for raw_id, payload in raw.items():
            if not isinstance(raw_id, str):
                raise DataValidationError("Token IDs must be strings.")
            context = f"token '{raw_id}'"
            token_data = self._require_mapping(payload, context)
            self._assert_required(token_data, {"sides", "mana_cost", "action", "target"}, context)

            tokens[raw_id] = TokenDef(
                id=raw_id,
                name=self._require_str(token_data.get("name", raw_id), f"{context} name"),
                sides=self._require_literal(
                    self._require_int(token_data["sides"], f"{context} sides"), DIE_SIDES, f"{context} sides"
                ),
                rarity=self._require_literal(token_data.get("rarity", "common"), RARITIES, f"{context} rarity"),
                mana_cost=self._require_int(token_data["mana_cost"], f"{context} mana_cost", minimum=0),
                element=self._require_literal(token_data.get("element", "none"), ELEMENTS, f"{context} element"),
                action=self._require_literal(token_data["action"], ACTION_KINDS, f"{context} action"),
                target=self._require_literal(token_data["target"], TARGET_KINDS, f"{context} target"),
            )
        return tokens
