"""Text rendering for combat views and events."""
from __future__ import annotations

import os
from typing import Sequence

from dicebattle.domain.combat_models import CombatantView, CombatView, EnemyIntent, TokenView
from dicebattle.domain.events import (
    ActionPhaseEndedEvent,
    AllEnemiesDefeatedEvent,
    CombatEvent,
    CombatSetupCompleteEvent,
    DieResolvedEvent,
    EnemyActionResolvedEvent,
    EnemyDefeatedEvent,
    EnemySpawnedEvent,
    PlayerDefeatedEvent,
    PlayerTurnStartedEvent,
    ResolutionWarningEvent,
    SetupFailedEvent,
)

_ACTION_VERBS = {"attack": "hits for", "block": "blocks", "heal": "heals"}


def debug_enabled() -> bool:
    """Return True only when DICEBATTLE_DEBUG is explicitly set to '1'."""
    return os.getenv("DICEBATTLE_DEBUG") == "1"


def render_heading(title: str) -> None:
    """Print a consistent section heading."""
    print(f"\n=== {title} ===")


def format_combatant(view: CombatantView) -> str:
    status = "DOWN" if not view.is_alive else f"{view.health}/{view.max_health}"
    return f"{view.name:<14} HP {status:<9} Block {view.block}"


def format_intent(intent: EnemyIntent | None) -> str:
    if intent is None:
        return "Thinking..."
    if intent.action == "attack":
        return f"Attacks for {intent.magnitude}"
    return f"Blocks for {intent.magnitude}"


def format_token(token: TokenView) -> str:
    return f"[{token.slot + 1}] {token.name} d{token.sides}={token.roll} ({token.action}, cost {token.mana_cost})"


def render_slots(title: str, tokens: Sequence[TokenView], capacity: int) -> None:
    print(f"{title} ({len(tokens)}/{capacity}):")
    if not tokens:
        print("  (empty)")
    for token in tokens:
        print(f"  {format_token(token)}")


def render_combat_view(view: CombatView) -> None:
    render_heading(f"Turn {view.turn_number}")
    print(f"  {format_combatant(view.player)} Mana {view.mana}/{view.max_mana}")
    if view.enemy is not None:
        print(f"  {format_combatant(view.enemy)} Intent: {format_intent(view.intent)}")
    render_slots("Hand", view.hand, view.hand_capacity)
    render_slots("Grid", view.grid, view.grid_capacity)
    if debug_enabled():
        print(f"  Draw pile {view.draw_count} / discard {view.discard_count} / phase {view.phase}")


def render_event(event: CombatEvent) -> None:
    """Print a one-line summary for the events a player cares about."""
    if isinstance(event, CombatSetupCompleteEvent):
        print(f"Combat begins. Foes: {', '.join(event.enemy_names)}.")
    elif isinstance(event, SetupFailedEvent):
        print(f"Combat could not start: {event.reason}")
    elif isinstance(event, EnemySpawnedEvent):
        print(f"- {event.enemy_name} appears!")
    elif isinstance(event, PlayerTurnStartedEvent):
        print(f"- Your turn. Drew {event.hand_size} dice.")
    elif isinstance(event, DieResolvedEvent):
        verb = _ACTION_VERBS.get(event.action, event.action)
        print(f"- Slot {event.source_slot + 1}: {event.token_id} {verb} {event.roll}.")
    elif isinstance(event, ResolutionWarningEvent):
        print(f"- {event.token_id} fizzles ({event.reason}).")
    elif isinstance(event, ActionPhaseEndedEvent):
        print(f"- {event.resolved_count} dice resolved.")
    elif isinstance(event, EnemyActionResolvedEvent):
        if event.action == "attack":
            print(f"- The enemy attacks for {event.magnitude}.")
        elif event.action == "block":
            print(f"- The enemy blocks for {event.magnitude}.")
    elif isinstance(event, EnemyDefeatedEvent):
        print(f"- {event.enemy_name} is defeated. {event.remaining} remaining.")
    elif isinstance(event, AllEnemiesDefeatedEvent):
        print(f"\nVictory! All enemies defeated in {event.turn_number} turns.")
    elif isinstance(event, PlayerDefeatedEvent):
        print(f"\nDefeat on turn {event.turn_number}.")
    elif debug_enabled():
        print(f"  {event}")
