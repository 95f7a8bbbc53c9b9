"""Enemy intent selection and execution."""
from __future__ import annotations

import logging

from dicebattle.core.rng import RNG
from dicebattle.domain.combat_models import EnemyIntent
from dicebattle.domain.combatant import Combatant, EnemyCombatant
from dicebattle.domain.events import EventBus, IntentChangedEvent

logger = logging.getLogger(__name__)


class EnemyAI:
    """Chooses one intent per enemy turn and carries it out unmodified."""

    def __init__(self, rng: RNG, bus: EventBus | None = None) -> None:
        self._rng = rng
        self._bus = bus

    def prepare_intent(self, enemy: EnemyCombatant) -> EnemyIntent:
        """Pick and store the enemy's next action.

        Enemies attack for a roll in their attack range; those with a positive
        ``block_chance`` sometimes guard instead.
        """
        enemy_def = enemy.definition
        if enemy_def is None:
            raise ValueError(f"Enemy '{enemy.instance_id}' has no definition to plan from.")

        if enemy_def.block_chance > 0 and self._rng.random() < enemy_def.block_chance:
            intent = EnemyIntent(action="block", magnitude=self._rng.randint(enemy_def.min_block, enemy_def.max_block))
        else:
            intent = EnemyIntent(
                action="attack", magnitude=self._rng.randint(enemy_def.min_attack, enemy_def.max_attack)
            )

        enemy.intent = intent
        logger.debug("%s prepares intent: %s for %d", enemy.display_name, intent.action, intent.magnitude)
        if self._bus is not None:
            self._bus.publish(
                IntentChangedEvent(enemy_id=enemy.instance_id, action=intent.action, magnitude=intent.magnitude)
            )
        return intent

    def execute_intent(self, enemy: EnemyCombatant, intent: EnemyIntent | None, target: Combatant) -> None:
        if intent is None:
            logger.warning("%s has no prepared intent; skipping its action.", enemy.display_name)
            return

        logger.debug("%s executes %s for %d", enemy.display_name, intent.action, intent.magnitude)
        if intent.action == "attack":
            target.take_damage(intent.magnitude)
        elif intent.action == "block":
            enemy.add_block(intent.magnitude)
        else:
            logger.warning("Unhandled intent %r for %s", intent.action, enemy.display_name)
