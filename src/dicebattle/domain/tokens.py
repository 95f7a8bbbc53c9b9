"""Runtime token (die) instances."""
from __future__ import annotations

from dataclasses import dataclass

from dicebattle.core.types import SlotArea
from dicebattle.domain.defs import TokenDef


@dataclass(frozen=True, slots=True)
class TokenLocation:
    area: SlotArea
    index: int


@dataclass(slots=True, eq=False)
class TokenInstance:
    """A drawn die: definition, its roll, and where it currently sits."""

    instance_id: str
    definition: TokenDef
    roll: int
    location: TokenLocation | None = None

    @property
    def mana_cost(self) -> int:
        return self.definition.mana_cost

    @property
    def display_name(self) -> str:
        return f"{self.definition.name} d{self.definition.sides}={self.roll}"
