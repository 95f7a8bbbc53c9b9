"""Combatant models: health, block and the player's mana pool."""
from __future__ import annotations

import logging
from dataclasses import dataclass

from dicebattle.core.types import Side
from dicebattle.domain.defs import EnemyDef
from dicebattle.domain.combat_models import EnemyIntent
from dicebattle.domain.events import (
    BlockChangedEvent,
    CombatEvent,
    DefeatedEvent,
    EventBus,
    HealthChangedEvent,
    ManaChangedEvent,
)

logger = logging.getLogger(__name__)


@dataclass(slots=True, eq=False)
class Combatant:
    """A participant in combat. Mutators publish state changes on ``bus``."""

    instance_id: str
    display_name: str
    side: Side
    max_health: int
    health: int
    block: int = 0
    bus: EventBus | None = None

    @property
    def is_alive(self) -> bool:
        return self.health > 0

    @property
    def is_defeated(self) -> bool:
        return self.health <= 0

    def take_damage(self, amount: int) -> None:
        """Apply damage, letting block absorb it before health."""
        if amount <= 0:
            return
        was_alive = self.is_alive
        remaining = amount
        if self.block > 0:
            absorbed = min(self.block, remaining)
            self.block -= absorbed
            remaining -= absorbed
            self._publish(BlockChangedEvent(combatant_id=self.instance_id, block=self.block))

        if remaining > 0:
            previous = self.health
            self.health = max(0, self.health - remaining)
            if self.health != previous:
                self._publish_health(self.health - previous)

        logger.debug(
            "%s took %d damage (block %d, health %d/%d)",
            self.display_name,
            amount,
            self.block,
            self.health,
            self.max_health,
        )
        if was_alive and self.is_defeated:
            logger.info("%s has been defeated", self.display_name)
            self._publish(DefeatedEvent(combatant_id=self.instance_id, combatant_name=self.display_name))

    def add_block(self, amount: int) -> None:
        if amount <= 0:
            return
        self.block += amount
        logger.debug("%s gained %d block (total %d)", self.display_name, amount, self.block)
        self._publish(BlockChangedEvent(combatant_id=self.instance_id, block=self.block))

    def clear_block(self) -> None:
        """Reset block at the start of this combatant's own turn."""
        self.block = 0
        self._publish(BlockChangedEvent(combatant_id=self.instance_id, block=0))

    def heal(self, amount: int) -> None:
        if amount <= 0:
            return
        previous = self.health
        self.health = min(self.max_health, self.health + amount)
        logger.debug("%s healed %d (health %d/%d)", self.display_name, amount, self.health, self.max_health)
        if self.health != previous:
            self._publish_health(self.health - previous)

    def _publish_health(self, delta: int) -> None:
        self._publish(
            HealthChangedEvent(
                combatant_id=self.instance_id,
                health=self.health,
                max_health=self.max_health,
                delta=delta,
            )
        )

    def _publish(self, event: CombatEvent) -> None:
        if self.bus is not None:
            self.bus.publish(event)


@dataclass(slots=True, eq=False)
class PlayerCombatant(Combatant):
    """The player's combatant; the only one with a mana pool."""

    max_mana: int = 0
    mana: int = 0

    def initialize(self, health: int, max_health: int, mana: int, max_mana: int) -> None:
        """Reset the player to starting values at combat setup."""
        self.max_health = max_health
        self.health = max(0, min(health, max_health))
        self.max_mana = max_mana
        self.mana = max(0, min(mana, max_mana))
        self.block = 0
        self._publish_health(0)
        self._publish(BlockChangedEvent(combatant_id=self.instance_id, block=0))
        self._publish_mana()

    def can_afford(self, amount: int) -> bool:
        return 0 <= amount <= self.mana

    def spend_mana(self, amount: int) -> bool:
        """Deduct mana; returns False without mutating when unaffordable."""
        if not self.can_afford(amount):
            logger.debug("%s cannot spend %d mana (has %d)", self.display_name, amount, self.mana)
            return False
        self.mana -= amount
        self._publish_mana()
        return True

    def gain_mana(self, amount: int) -> None:
        if amount <= 0:
            return
        self.mana = min(self.max_mana, self.mana + amount)
        self._publish_mana()

    def refill_mana_to_max(self) -> None:
        self.mana = self.max_mana
        self._publish_mana()

    def _publish_mana(self) -> None:
        self._publish(ManaChangedEvent(combatant_id=self.instance_id, mana=self.mana, max_mana=self.max_mana))


@dataclass(slots=True, eq=False)
class EnemyCombatant(Combatant):
    """An enemy spawned from its definition, holding its pending intent."""

    definition: EnemyDef | None = None
    intent: EnemyIntent | None = None
