"""Turns a resolved die into a single combatant mutation."""
from __future__ import annotations

import logging
from typing import Callable, Dict, Tuple

from dicebattle.domain.combatant import Combatant, PlayerCombatant
from dicebattle.domain.defs import TokenDef
from dicebattle.domain.events import EventBus, ResolutionWarningEvent

logger = logging.getLogger(__name__)

_Handler = Callable[[int, PlayerCombatant, "Combatant | None"], bool]


def _attack_enemy(roll: int, player: PlayerCombatant, enemy: Combatant | None) -> bool:
    if enemy is None:
        return False
    enemy.take_damage(roll)
    return True


def _block_self(roll: int, player: PlayerCombatant, enemy: Combatant | None) -> bool:
    player.add_block(roll)
    return True


def _heal_self(roll: int, player: PlayerCombatant, enemy: Combatant | None) -> bool:
    player.heal(roll)
    return True


# Closed policy table; combinations not listed here are configuration errors.
POLICY: Dict[Tuple[str, str], _Handler] = {
    ("attack", "single_enemy"): _attack_enemy,
    ("block", "self"): _block_self,
    ("heal", "self"): _heal_self,
}


class ActionResolver:
    """Applies (action, target, roll) to exactly one combatant."""

    def __init__(self, bus: EventBus | None = None) -> None:
        self._bus = bus

    def resolve(
        self,
        token_def: TokenDef,
        roll: int,
        source_slot: int,
        player: PlayerCombatant,
        enemy: Combatant | None,
        *,
        token_id: str | None = None,
    ) -> None:
        """Resolve one die. Unhandled combinations are reported and skipped."""
        handler = POLICY.get((token_def.action, token_def.target))
        if handler is None:
            self._warn(token_def, token_id, "unhandled action/target combination")
            return

        logger.debug(
            "Resolving %s (%s -> %s, roll %d) from slot %d",
            token_def.id,
            token_def.action,
            token_def.target,
            roll,
            source_slot,
        )
        if not handler(roll, player, enemy):
            self._warn(token_def, token_id, "no enemy to target")

    def _warn(self, token_def: TokenDef, token_id: str | None, reason: str) -> None:
        logger.warning(
            "Skipping %s: %s (action=%s, target=%s)", token_def.id, reason, token_def.action, token_def.target
        )
        if self._bus is not None:
            self._bus.publish(
                ResolutionWarningEvent(
                    token_id=token_id or token_def.id,
                    action=str(token_def.action),
                    target=str(token_def.target),
                    reason=reason,
                )
            )
