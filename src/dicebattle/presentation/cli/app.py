"""Console-driven combat loop."""
from __future__ import annotations

import argparse
import logging
import secrets
from typing import Callable, Sequence

from dicebattle.core.rng import RNG
from dicebattle.data.errors import DataError
from dicebattle.data.repositories import CombatSetupRepository, EnemiesRepository, TokensRepository
from dicebattle.domain.combat_models import CombatView, TokenView
from dicebattle.domain.events import EventBus
from dicebattle.services import CombatSetupError, PlacementResult, TurnController, create_turn_controller

from .render import debug_enabled, render_combat_view, render_event

_MAX_RANDOM_SEED = 2**31 - 1

_HELP_TEXT = """Commands:
  place <hand#> <grid#>   put a die from your hand onto the grid (spends mana)
  move <grid#> <grid#>    move a placed die to another grid slot
  reclaim <grid#>         return a placed die to your hand (refunds mana)
  end                     resolve the grid and end your turn
  help                    show this help
  quit                    leave combat"""

_REJECT_MESSAGES = {
    "occupied": "That grid slot is already taken.",
    "insufficient_mana": "Not enough mana.",
    "hand_full": "Your hand is full.",
    "not_player_turn": "It is not your turn.",
    "unknown_token": "There is no die there.",
    "invalid_slot": "No such grid slot.",
    "not_on_grid": "That die is not on the grid.",
}


def main(argv: Sequence[str] | None = None) -> int:
    """Start an interactive combat session."""
    args = _parse_args(argv)
    _configure_logging()

    seed = args.seed if args.seed is not None else secrets.randbelow(_MAX_RANDOM_SEED)
    bus = EventBus()
    bus.subscribe(render_event)
    try:
        controller = _build_controller(args.setup, RNG(seed), bus, args.definitions)
        print(f"=== Dice Battle (seed {seed}) ===")
        controller.start_combat()
    except (DataError, CombatSetupError) as exc:
        print(f"Unable to start combat: {exc}")
        return 1

    _run_combat_loop(controller, input)
    print("Goodbye!")
    return 0


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="dicebattle", description="Turn-based dice combat.")
    parser.add_argument("--seed", type=int, default=None, help="seed for the shared RNG")
    parser.add_argument("--setup", default="default", help="combat setup id from combat.json")
    parser.add_argument("--definitions", default=None, help="directory holding the JSON definitions")
    return parser.parse_args(argv)


def _configure_logging() -> None:
    level = logging.DEBUG if debug_enabled() else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def _build_controller(setup_id: str, rng: RNG, bus: EventBus, definitions: str | None) -> TurnController:
    """Construct the TurnController from the JSON definitions."""
    tokens_repo = TokensRepository(definitions)
    enemies_repo = EnemiesRepository(definitions)
    setups_repo = CombatSetupRepository(definitions)
    config = setups_repo.resolve(setup_id, tokens_repo, enemies_repo)
    return create_turn_controller(config, rng, bus)


def _run_combat_loop(controller: TurnController, read_line: Callable[[str], str]) -> bool:
    """Prompt for commands until the combat ends. Returns True on victory."""
    while not controller.session.is_over:
        view = controller.get_combat_view()
        render_combat_view(view)
        try:
            raw = read_line("> ").strip()
        except EOFError:
            return False
        if not raw:
            continue
        command, *params = raw.split()
        command = command.lower()
        if command == "quit":
            return False
        if command == "help":
            print(_HELP_TEXT)
            continue
        if command == "end":
            controller.submit_turn()
            continue
        result = _dispatch_placement(controller, view, command, params)
        if result is None:
            print("Unknown command. Type 'help' for options.")
        elif not result.accepted:
            print(_REJECT_MESSAGES.get(result.reason or "", "Request rejected."))
    return controller.phase == "all_enemies_defeated"


def _dispatch_placement(
    controller: TurnController, view: CombatView, command: str, params: Sequence[str]
) -> PlacementResult | None:
    numbers = _parse_slot_numbers(params)
    if numbers is None:
        return None
    if command == "place" and len(numbers) == 2:
        token = _token_at(view.hand, numbers[0])
        if token is None:
            return PlacementResult.rejected("unknown_token")
        return controller.request_place(token.instance_id, numbers[1])
    if command == "move" and len(numbers) == 2:
        token = _token_at(view.grid, numbers[0])
        if token is None:
            return PlacementResult.rejected("unknown_token")
        return controller.request_place(token.instance_id, numbers[1])
    if command == "reclaim" and len(numbers) == 1:
        token = _token_at(view.grid, numbers[0])
        if token is None:
            return PlacementResult.rejected("unknown_token")
        return controller.request_reclaim(token.instance_id)
    return None


def _parse_slot_numbers(params: Sequence[str]) -> list[int] | None:
    """Convert 1-based slot numbers typed by the player into indices."""
    try:
        return [int(value) - 1 for value in params]
    except ValueError:
        return None


def _token_at(tokens: Sequence[TokenView], slot: int) -> TokenView | None:
    for token in tokens:
        if token.slot == slot:
            return token
    return None
