"""Combat session models and read-only views."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Tuple

from dicebattle.core.types import TERMINAL_PHASES, ActionKind, CombatPhase, IntentKind, TargetKind
from dicebattle.domain.defs import EnemyDef

if TYPE_CHECKING:
    from dicebattle.domain.combatant import EnemyCombatant, PlayerCombatant


@dataclass(frozen=True, slots=True)
class EnemyIntent:
    """An enemy's pre-committed action for its next turn."""

    action: IntentKind
    magnitude: int


@dataclass(slots=True)
class CombatSession:
    """Tracks one combat run against an ordered roster of enemies."""

    player: PlayerCombatant
    roster: Tuple[EnemyDef, ...]
    enemy_index: int = 0
    enemy: EnemyCombatant | None = None
    phase: CombatPhase = "idle"
    turn_number: int = 0
    resolving: bool = False
    can_submit: bool = False

    @property
    def is_over(self) -> bool:
        return self.phase in TERMINAL_PHASES

    @property
    def has_more_enemies(self) -> bool:
        return self.enemy_index + 1 < len(self.roster)

    @property
    def remaining_enemies(self) -> int:
        return max(0, len(self.roster) - self.enemy_index - 1)


@dataclass(slots=True)
class CombatantView:
    instance_id: str
    name: str
    health: int
    max_health: int
    block: int
    is_alive: bool


@dataclass(slots=True)
class TokenView:
    instance_id: str
    token_id: str
    name: str
    action: ActionKind
    target: TargetKind
    roll: int
    sides: int
    mana_cost: int
    slot: int


@dataclass(slots=True)
class CombatView:
    """Presentation view of the current combat state."""

    phase: CombatPhase
    turn_number: int
    player: CombatantView
    mana: int
    max_mana: int
    enemy: CombatantView | None
    intent: EnemyIntent | None
    hand: List[TokenView] = field(default_factory=list)
    grid: List[TokenView] = field(default_factory=list)
    hand_capacity: int = 0
    grid_capacity: int = 0
    draw_count: int = 0
    discard_count: int = 0
    can_submit: bool = False
