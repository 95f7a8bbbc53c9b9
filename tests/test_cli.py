from __future__ import annotations

from typing import Callable, Iterable

import pytest

from dicebattle.domain.combat_models import EnemyIntent
from dicebattle.presentation.cli import app
from dicebattle.presentation.cli.render import debug_enabled, format_intent, render_event
from tests.helpers.combat_builders import build_controller, make_config, make_enemy_def


def _scripted(lines: Iterable[str]) -> Callable[[str], str]:
    remaining = iter(lines)

    def _read(prompt: str) -> str:
        try:
            return next(remaining)
        except StopIteration:
            raise EOFError from None

    return _read


def _weak_enemy_controller():
    controller, _ = build_controller(make_config(enemies=[make_enemy_def(max_health=5)]), start=False)
    controller.bus.subscribe(render_event)
    controller.start_combat()
    return controller


def test_combat_loop_reaches_victory(capsys) -> None:
    controller = _weak_enemy_controller()

    won = app._run_combat_loop(controller, _scripted(["help", "place 1 1", "end"]))

    output = capsys.readouterr().out
    assert won is True
    assert "Commands:" in output
    assert "Victory!" in output
    assert controller.phase == "all_enemies_defeated"


def test_combat_loop_reports_bad_input(capsys) -> None:
    controller = _weak_enemy_controller()

    won = app._run_combat_loop(
        controller, _scripted(["dance", "reclaim 3", "place 1 10", "place one two", "quit"])
    )

    output = capsys.readouterr().out
    assert won is False
    assert output.count("Unknown command. Type 'help' for options.") == 2
    assert "There is no die there." in output
    assert "No such grid slot." in output
    assert controller.phase == "player_action_phase"


def test_combat_loop_stops_on_end_of_input() -> None:
    controller = _weak_enemy_controller()

    assert app._run_combat_loop(controller, _scripted([])) is False


def test_main_exits_cleanly_on_end_of_input(monkeypatch, capsys) -> None:
    monkeypatch.delenv("DICEBATTLE_DEFINITIONS", raising=False)
    monkeypatch.setattr("builtins.input", _scripted([]))

    assert app.main(["--seed", "3"]) == 0

    output = capsys.readouterr().out
    assert "Dice Battle (seed 3)" in output
    assert "Goodbye!" in output


def test_main_reports_unknown_setup(monkeypatch, capsys) -> None:
    monkeypatch.delenv("DICEBATTLE_DEFINITIONS", raising=False)

    assert app.main(["--setup", "nope"]) == 1

    assert "Unable to start combat" in capsys.readouterr().out


@pytest.mark.parametrize(
    ("intent", "expected"),
    [
        (None, "Thinking..."),
        (EnemyIntent(action="attack", magnitude=7), "Attacks for 7"),
        (EnemyIntent(action="block", magnitude=4), "Blocks for 4"),
    ],
)
def test_format_intent(intent, expected) -> None:
    assert format_intent(intent) == expected


def test_debug_flag_requires_exact_value(monkeypatch) -> None:
    monkeypatch.setenv("DICEBATTLE_DEBUG", "1")
    assert debug_enabled()
    monkeypatch.setenv("DICEBATTLE_DEBUG", "true")
    assert not debug_enabled()
    monkeypatch.delenv("DICEBATTLE_DEBUG")
    assert not debug_enabled()
