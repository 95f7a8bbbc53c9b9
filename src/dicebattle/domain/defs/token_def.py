"""Token (die) definition structures."""
from __future__ import annotations

from dataclasses import dataclass

from dicebattle.core.types import ActionKind, Element, Rarity, TargetKind


@dataclass(frozen=True, slots=True)
class TokenDef:
    """Authored die definition; instances reference it and carry the roll."""

    id: str
    name: str
    sides: int
    rarity: Rarity
    mana_cost: int
    element: Element
    action: ActionKind
    target: TargetKind

    @property
    def max_roll(self) -> int:
        return self.sides
