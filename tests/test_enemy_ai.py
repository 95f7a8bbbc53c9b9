from __future__ import annotations

from typing import List

import pytest

from dicebattle.core.rng import RNG
from dicebattle.domain.combat_models import EnemyIntent
from dicebattle.domain.combatant import EnemyCombatant, PlayerCombatant
from dicebattle.domain.events import CombatEvent, EventBus, IntentChangedEvent
from dicebattle.services.enemy_ai import EnemyAI
from dicebattle.services.factories.enemy_factory import create_enemy_combatant
from tests.helpers.combat_builders import HighRollRNG, events_of, make_enemy_def


def _build_player() -> PlayerCombatant:
    return PlayerCombatant(
        instance_id="player",
        display_name="Player",
        side="player",
        max_health=100,
        health=100,
        max_mana=3,
        mana=3,
    )


def test_attack_intent_stays_within_attack_range() -> None:
    rng = RNG(5)
    ai = EnemyAI(rng)
    enemy = create_enemy_combatant(make_enemy_def(min_attack=5, max_attack=10), rng)

    magnitudes = {ai.prepare_intent(enemy).magnitude for _ in range(200)}

    assert magnitudes <= set(range(5, 11))
    assert enemy.intent is not None
    assert enemy.intent.action == "attack"


def test_prepare_intent_stores_and_publishes() -> None:
    events: List[CombatEvent] = []
    bus = EventBus()
    bus.subscribe(events.append)
    rng = HighRollRNG()
    ai = EnemyAI(rng, bus)
    enemy = create_enemy_combatant(make_enemy_def(max_attack=10), rng, bus)

    intent = ai.prepare_intent(enemy)

    assert intent == EnemyIntent(action="attack", magnitude=10)
    assert enemy.intent is intent
    published = events_of(events, IntentChangedEvent)
    assert len(published) == 1
    assert published[0].enemy_id == enemy.instance_id
    assert published[0].magnitude == 10


def test_guarding_enemy_can_choose_block() -> None:
    rng = HighRollRNG()
    ai = EnemyAI(rng)
    enemy = create_enemy_combatant(make_enemy_def(block_chance=1.0, min_block=3, max_block=8), rng)

    intent = ai.prepare_intent(enemy)

    assert intent == EnemyIntent(action="block", magnitude=8)


def test_prepare_intent_requires_definition() -> None:
    enemy = EnemyCombatant(instance_id="e", display_name="Ghost", side="enemy", max_health=5, health=5)

    with pytest.raises(ValueError):
        EnemyAI(RNG(1)).prepare_intent(enemy)


def test_execute_attack_damages_target() -> None:
    rng = HighRollRNG()
    enemy = create_enemy_combatant(make_enemy_def(), rng)
    player = _build_player()
    player.add_block(3)

    EnemyAI(rng).execute_intent(enemy, EnemyIntent(action="attack", magnitude=10), player)

    assert player.block == 0
    assert player.health == 93


def test_execute_block_guards_enemy() -> None:
    rng = HighRollRNG()
    enemy = create_enemy_combatant(make_enemy_def(), rng)
    player = _build_player()

    EnemyAI(rng).execute_intent(enemy, EnemyIntent(action="block", magnitude=6), player)

    assert enemy.block == 6
    assert player.health == 100


def test_execute_without_intent_does_nothing(caplog) -> None:
    rng = HighRollRNG()
    enemy = create_enemy_combatant(make_enemy_def(), rng)
    player = _build_player()

    EnemyAI(rng).execute_intent(enemy, None, player)

    assert player.health == 100
    assert "no prepared intent" in caplog.text
