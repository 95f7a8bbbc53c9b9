"""Shared type aliases for the core and domain layers."""
from typing import Literal

ActionKind = Literal["attack", "block", "heal"]
TargetKind = Literal["self", "single_enemy"]
Rarity = Literal["common", "uncommon", "rare", "mythic"]
Element = Literal["none", "fire", "earth", "air", "water"]
IntentKind = Literal["attack", "block"]
SlotArea = Literal["hand", "grid"]
Side = Literal["player", "enemy"]

CombatPhase = Literal[
    "idle",
    "setup_combat",
    "setup_failed",
    "player_turn_start",
    "player_action_phase",
    "enemy_turn",
    "enemy_turn_resolved",
    "enemy_defeated",
    "setup_next_enemy",
    "player_defeated",
    "all_enemies_defeated",
]

TERMINAL_PHASES: tuple[CombatPhase, ...] = ("setup_failed", "player_defeated", "all_enemies_defeated")

DIE_SIDES: tuple[int, ...] = (4, 6, 8, 10)
ACTION_KINDS: tuple[ActionKind, ...] = ("attack", "block", "heal")
TARGET_KINDS: tuple[TargetKind, ...] = ("self", "single_enemy")
RARITIES: tuple[Rarity, ...] = ("common", "uncommon", "rare", "mythic")
ELEMENTS: tuple[Element, ...] = ("none", "fire", "earth", "air", "water")

__all__ = [
    "ACTION_KINDS",
    "ActionKind",
    "CombatPhase",
    "DIE_SIDES",
    "ELEMENTS",
    "Element",
    "IntentKind",
    "RARITIES",
    "Rarity",
    "Side",
    "SlotArea",
    "TARGET_KINDS",
    "TERMINAL_PHASES",
    "TargetKind",
]
