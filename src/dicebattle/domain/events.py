"""Combat events and the channel the core publishes them on."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, List, Tuple, Type

from dicebattle.core.types import ActionKind, CombatPhase, IntentKind, SlotArea, TargetKind

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CombatEvent:
    """Base combat event."""


# -----------------------
# Turn flow
# -----------------------
@dataclass(slots=True)
class CombatSetupCompleteEvent(CombatEvent):
    player_id: str
    enemy_names: List[str]


@dataclass(slots=True)
class SetupFailedEvent(CombatEvent):
    reason: str


@dataclass(slots=True)
class PhaseChangedEvent(CombatEvent):
    previous: CombatPhase
    current: CombatPhase


@dataclass(slots=True)
class PlayerTurnStartedEvent(CombatEvent):
    turn_number: int
    hand_size: int


@dataclass(slots=True)
class ActionPhaseStartedEvent(CombatEvent):
    turn_number: int


@dataclass(slots=True)
class DieResolvedEvent(CombatEvent):
    token_id: str
    action: ActionKind
    target: TargetKind
    roll: int
    source_slot: int


@dataclass(slots=True)
class ResolutionWarningEvent(CombatEvent):
    token_id: str
    action: str
    target: str
    reason: str


@dataclass(slots=True)
class ActionPhaseEndedEvent(CombatEvent):
    resolved_count: int


@dataclass(slots=True)
class EnemyTurnStartedEvent(CombatEvent):
    enemy_id: str


@dataclass(slots=True)
class EnemyActionResolvedEvent(CombatEvent):
    enemy_id: str
    action: IntentKind | None
    magnitude: int


@dataclass(slots=True)
class EnemyTurnEndedEvent(CombatEvent):
    enemy_id: str


@dataclass(slots=True)
class EnemySpawnedEvent(CombatEvent):
    enemy_id: str
    enemy_name: str
    roster_index: int


@dataclass(slots=True)
class EnemyDefeatedEvent(CombatEvent):
    enemy_id: str
    enemy_name: str
    remaining: int


@dataclass(slots=True)
class AllEnemiesDefeatedEvent(CombatEvent):
    turn_number: int


@dataclass(slots=True)
class PlayerDefeatedEvent(CombatEvent):
    turn_number: int


# -----------------------
# Combatant state
# -----------------------
@dataclass(slots=True)
class HealthChangedEvent(CombatEvent):
    combatant_id: str
    health: int
    max_health: int
    delta: int


@dataclass(slots=True)
class BlockChangedEvent(CombatEvent):
    combatant_id: str
    block: int


@dataclass(slots=True)
class ManaChangedEvent(CombatEvent):
    combatant_id: str
    mana: int
    max_mana: int


@dataclass(slots=True)
class DefeatedEvent(CombatEvent):
    combatant_id: str
    combatant_name: str


@dataclass(slots=True)
class IntentChangedEvent(CombatEvent):
    enemy_id: str
    action: IntentKind
    magnitude: int


# -----------------------
# Placement
# -----------------------
@dataclass(slots=True)
class TokenPlacedEvent(CombatEvent):
    token_id: str
    from_area: SlotArea
    slot: int
    mana_spent: int


@dataclass(slots=True)
class TokenReclaimedEvent(CombatEvent):
    token_id: str
    hand_slot: int
    mana_refunded: int


EventListener = Callable[[CombatEvent], None]


class EventBus:
    """Synchronous publish/subscribe channel for combat events.

    Listeners registered with an ``event_type`` only receive instances of that
    type (or subclasses). Delivery happens in subscription order. A listener
    that raises is logged and skipped; the remaining listeners and the combat
    flow carry on.
    """

    def __init__(self) -> None:
        self._listeners: List[Tuple[EventListener, Type[CombatEvent]]] = []

    def subscribe(self, listener: EventListener, event_type: Type[CombatEvent] = CombatEvent) -> None:
        """Register ``listener``; the default ``CombatEvent`` type receives every event."""
        self._listeners.append((listener, event_type))

    def unsubscribe(self, listener: EventListener, event_type: Type[CombatEvent] = CombatEvent) -> bool:
        """Remove a subscription; returns False when it was not registered."""
        try:
            self._listeners.remove((listener, event_type))
        except ValueError:
            return False
        return True

    def publish(self, event: CombatEvent) -> None:
        logger.debug("Publishing %s", event)
        for listener, event_type in list(self._listeners):
            if not isinstance(event, event_type):
                continue
            try:
                listener(event)
            except Exception:
                logger.exception("Listener %r failed on %s", listener, type(event).__name__)

    @property
    def listener_count(self) -> int:
        return len(self._listeners)
