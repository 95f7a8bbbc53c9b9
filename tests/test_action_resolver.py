from __future__ import annotations

import logging
from typing import List

from dicebattle.domain.combatant import EnemyCombatant, PlayerCombatant
from dicebattle.domain.events import CombatEvent, EventBus, ResolutionWarningEvent
from dicebattle.services.action_resolver import POLICY, ActionResolver
from tests.helpers.combat_builders import events_of, make_token_def


def _build_parties() -> tuple[PlayerCombatant, EnemyCombatant]:
    player = PlayerCombatant(
        instance_id="player",
        display_name="Player",
        side="player",
        max_health=100,
        health=90,
        max_mana=3,
        mana=3,
    )
    enemy = EnemyCombatant(
        instance_id="enemy_1",
        display_name="Goblin",
        side="enemy",
        max_health=50,
        health=50,
    )
    return player, enemy


def _build_resolver() -> tuple[ActionResolver, List[CombatEvent]]:
    events: List[CombatEvent] = []
    bus = EventBus()
    bus.subscribe(events.append)
    return ActionResolver(bus), events


def test_policy_table_covers_exactly_the_supported_combinations() -> None:
    assert set(POLICY) == {("attack", "single_enemy"), ("block", "self"), ("heal", "self")}


def test_attack_damages_only_the_enemy() -> None:
    resolver, _ = _build_resolver()
    player, enemy = _build_parties()

    resolver.resolve(make_token_def(action="attack", target="single_enemy"), 6, 0, player, enemy)

    assert enemy.health == 44
    assert player.health == 90
    assert player.block == 0


def test_block_and_heal_affect_only_the_player() -> None:
    resolver, _ = _build_resolver()
    player, enemy = _build_parties()

    resolver.resolve(make_token_def("guard", action="block", target="self"), 4, 0, player, enemy)
    resolver.resolve(make_token_def("mend", action="heal", target="self"), 7, 1, player, enemy)

    assert player.block == 4
    assert player.health == 97
    assert enemy.health == 50
    assert enemy.block == 0


def test_unhandled_combination_is_skipped_with_warning(caplog) -> None:
    resolver, events = _build_resolver()
    player, enemy = _build_parties()
    token_def = make_token_def("odd", action="heal", target="single_enemy")

    with caplog.at_level(logging.WARNING, logger="dicebattle.services.action_resolver"):
        resolver.resolve(token_def, 5, 2, player, enemy, token_id="odd#1")

    assert enemy.health == 50
    assert player.health == 90
    assert "unhandled action/target combination" in caplog.text
    warnings = events_of(events, ResolutionWarningEvent)
    assert len(warnings) == 1
    assert warnings[0].token_id == "odd#1"
    assert warnings[0].action == "heal"
    assert warnings[0].target == "single_enemy"


def test_attack_without_enemy_is_skipped_with_warning(caplog) -> None:
    resolver, events = _build_resolver()
    player, _ = _build_parties()

    with caplog.at_level(logging.WARNING, logger="dicebattle.services.action_resolver"):
        resolver.resolve(make_token_def(), 6, 0, player, None)

    assert "no enemy to target" in caplog.text
    assert events_of(events, ResolutionWarningEvent)[0].token_id == "strike"


def test_resolver_without_bus_still_resolves() -> None:
    player, enemy = _build_parties()

    ActionResolver().resolve(make_token_def(), 3, 0, player, enemy)

    assert enemy.health == 47
