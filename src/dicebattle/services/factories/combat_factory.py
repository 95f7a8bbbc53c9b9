"""Wires a TurnController together from a resolved combat configuration."""
from __future__ import annotations

from dicebattle.core.rng import RNG
from dicebattle.domain.action_grid import ActionGrid
from dicebattle.domain.deck import Deck
from dicebattle.domain.defs import CombatConfig
from dicebattle.domain.events import EventBus, SetupFailedEvent
from dicebattle.domain.hand import Hand
from dicebattle.services.action_resolver import ActionResolver
from dicebattle.services.controllers.turn_controller import TurnController, validate_combat_config
from dicebattle.services.enemy_ai import EnemyAI
from dicebattle.services.errors import CombatSetupError

from .player_factory import create_player_combatant
from .token_factory import TokenFactory


def create_turn_controller(
    config: CombatConfig,
    rng: RNG,
    bus: EventBus | None = None,
    *,
    player_name: str = "Player",
) -> TurnController:
    """Build the deck, hand, grid, player and services for one combat run.

    Invalid configuration is reported on ``bus`` and raised as CombatSetupError
    before any component is built.
    """
    bus = bus if bus is not None else EventBus()
    problems = validate_combat_config(config)
    if problems:
        reason = "; ".join(problems)
        bus.publish(SetupFailedEvent(reason=reason))
        raise CombatSetupError(reason)

    deck = Deck(config.deck, rng)
    hand = Hand(config.hand_size, deck, TokenFactory(rng))
    grid = ActionGrid(config.grid_size)
    player = create_player_combatant(config.player_health, config.player_max_mana, name=player_name, bus=bus)
    return TurnController(
        config,
        player=player,
        deck=deck,
        hand=hand,
        grid=grid,
        resolver=ActionResolver(bus),
        enemy_ai=EnemyAI(rng, bus),
        rng=rng,
        bus=bus,
    )
