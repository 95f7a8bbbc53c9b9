"""Factory for creating enemy combatants from definitions."""
from __future__ import annotations

from dicebattle.core.rng import RNG
from dicebattle.domain.combatant import EnemyCombatant
from dicebattle.domain.defs import EnemyDef
from dicebattle.domain.events import EventBus
from dicebattle.services.errors import FactoryError

from .id_factory import make_instance_id


def create_enemy_combatant(enemy_def: EnemyDef, rng: RNG, bus: EventBus | None = None) -> EnemyCombatant:
    """Spawn a fresh enemy at full health with no block or intent."""
    if enemy_def.max_health <= 0:
        raise FactoryError(f"Enemy '{enemy_def.id}' must have positive max_health.")
    if enemy_def.max_attack < enemy_def.min_attack:
        raise FactoryError(f"Enemy '{enemy_def.id}' has an empty attack range.")

    return EnemyCombatant(
        instance_id=make_instance_id("enemy", rng),
        display_name=enemy_def.name,
        side="enemy",
        max_health=enemy_def.max_health,
        health=enemy_def.max_health,
        bus=bus,
        definition=enemy_def,
    )
