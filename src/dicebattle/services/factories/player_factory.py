"""Factory for the player's combatant."""
from __future__ import annotations

from dicebattle.domain.combatant import PlayerCombatant
from dicebattle.domain.events import EventBus
from dicebattle.services.errors import FactoryError


def create_player_combatant(
    max_health: int,
    max_mana: int,
    *,
    name: str = "Player",
    bus: EventBus | None = None,
) -> PlayerCombatant:
    """Create the player at full health and mana."""
    if max_health <= 0:
        raise FactoryError("Player max_health must be positive.")
    if max_mana < 0:
        raise FactoryError("Player max_mana cannot be negative.")
    return PlayerCombatant(
        instance_id="player",
        display_name=name,
        side="player",
        max_health=max_health,
        health=max_health,
        bus=bus,
        max_mana=max_mana,
        mana=max_mana,
    )
