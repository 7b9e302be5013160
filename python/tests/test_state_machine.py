"""Game state machine: transitions, side effects, and a full play-through."""

from __future__ import annotations

import random

import pytest

from backend.config import StorePaths
from backend.engine.gameplay import TickResult
from backend.engine.gamestate import GameStateMachine
from backend.models.grid import Position
from backend.models.highscore import ScoreEntry
from backend.models.intent import AppState, Intent
from backend.storage.store import load_settings, read_score_pairs, write_score_pairs

TICK = 1.0  # always longer than any speed interval


# -- helpers ------------------------------------------------------------------


def _select(machine: GameStateMachine, index: int) -> None:
    for _ in range(index):
        machine.handle(Intent.DOWN)
    machine.handle(Intent.CONFIRM)


def _start(machine: GameStateMachine) -> None:
    _select(machine, 0)
    assert machine.state is AppState.PLAYING


def _park_food(machine: GameStateMachine) -> None:
    machine.sim.food = Position(machine.sim.width - 1, machine.sim.height - 1)


def _crash(machine: GameStateMachine) -> None:
    """Drive the snake straight up into the top wall."""
    _park_food(machine)
    while machine.state is AppState.PLAYING:
        machine.update(TICK)


# -- menu ---------------------------------------------------------------------


def test_starts_in_menu(machine: GameStateMachine) -> None:
    assert machine.state is AppState.MENU
    assert machine.menu_index == 0
    assert machine.running is True


def test_menu_selection_wraps(machine: GameStateMachine) -> None:
    machine.handle(Intent.UP)
    assert machine.menu_index == 3
    machine.handle(Intent.DOWN)
    assert machine.menu_index == 0
    for _ in range(5):
        machine.handle(Intent.DOWN)
    assert machine.menu_index == 1


@pytest.mark.parametrize(
    ("index", "state"),
    [(0, AppState.PLAYING), (1, AppState.LEADERBOARD), (2, AppState.SETTINGS)],
)
def test_menu_confirm_targets(
    machine: GameStateMachine, index: int, state: AppState
) -> None:
    _select(machine, index)
    assert machine.state is state
    assert machine.menu_index == 0


def test_menu_exit_stops_running(machine: GameStateMachine) -> None:
    _select(machine, 3)
    assert machine.running is False
    assert machine.state is AppState.MENU


# -- playing and pause --------------------------------------------------------


def test_pause_and_resume(machine: GameStateMachine) -> None:
    _start(machine)
    machine.handle(Intent.PAUSE)
    assert machine.state is AppState.PAUSED

    head = machine.sim.snake.head
    assert machine.update(TICK) is None
    assert machine.sim.snake.head == head

    machine.handle(Intent.PAUSE)
    assert machine.state is AppState.PLAYING


@pytest.mark.parametrize("from_pause", [False, True])
def test_back_returns_to_menu(machine: GameStateMachine, from_pause: bool) -> None:
    _start(machine)
    if from_pause:
        machine.handle(Intent.PAUSE)
    machine.handle(Intent.BACK)
    assert machine.state is AppState.MENU


def test_tick_waits_for_speed_interval(machine: GameStateMachine) -> None:
    _start(machine)
    _park_food(machine)
    head = machine.sim.snake.head
    assert machine.update(0.1) is None
    assert machine.sim.snake.head == head
    assert machine.update(0.06) is TickResult.MOVED
    assert machine.sim.snake.head == Position(head.x, head.y - 1)
    assert machine.session.move_timer == 0.0


def test_directional_intents_steer(machine: GameStateMachine) -> None:
    _start(machine)
    _park_food(machine)
    machine.handle(Intent.RIGHT)
    machine.update(TICK)
    assert machine.sim.snake.head == Position(16, 10)


def test_start_resets_previous_session(machine: GameStateMachine) -> None:
    _start(machine)
    machine.sim.food = Position(15, 9)
    machine.update(TICK)
    assert machine.session.score == 10
    machine.handle(Intent.BACK)

    _start(machine)
    assert machine.session.score == 0
    assert len(machine.sim.snake) == 3


# -- game over ----------------------------------------------------------------


def test_game_over_options(machine: GameStateMachine) -> None:
    _start(machine)
    _crash(machine)
    assert machine.state is AppState.GAME_OVER

    machine.handle(Intent.RESTART)
    assert machine.state is AppState.PLAYING
    assert machine.session.score == 0

    _crash(machine)
    machine.handle(Intent.LEADERBOARD)
    assert machine.state is AppState.LEADERBOARD

    machine.handle(Intent.CONFIRM)
    assert machine.state is AppState.MENU


def test_game_over_back_to_menu(machine: GameStateMachine) -> None:
    _start(machine)
    _crash(machine)
    machine.handle(Intent.BACK)
    assert machine.state is AppState.MENU


def test_zero_score_game_over_writes_nothing(
    machine: GameStateMachine, paths: StorePaths
) -> None:
    _start(machine)
    _crash(machine)
    assert not paths.leaderboard.exists()
    assert not paths.user_scores.exists()


# -- leaderboard and settings -------------------------------------------------


def test_leaderboard_reloads_on_entry(
    machine: GameStateMachine, paths: StorePaths
) -> None:
    write_score_pairs(paths.leaderboard, [("outside", 90)])
    _select(machine, 1)
    assert machine.snapshot().leaderboard == (ScoreEntry("outside", 90),)

    machine.handle(Intent.BACK)
    assert machine.state is AppState.MENU


def test_settings_toggle_and_save_on_exit(
    machine: GameStateMachine, paths: StorePaths
) -> None:
    _select(machine, 2)
    machine.handle(Intent.CONFIRM)
    assert machine.state is AppState.SETTINGS
    assert machine.settings.show_grid is False
    assert not paths.settings.exists()

    machine.handle(Intent.BACK)
    assert machine.state is AppState.MENU
    assert load_settings(paths.settings).show_grid is False


def test_settings_loaded_at_startup(paths: StorePaths) -> None:
    paths.settings.write_text("0\n")
    assert GameStateMachine("p", paths).snapshot().show_grid is False


def test_obstacles_loaded_at_startup(paths: StorePaths) -> None:
    paths.obstacles.write_text("1 1\n2 2\n99 99\n")
    machine = GameStateMachine("p", paths)
    assert machine.snapshot().obstacles == frozenset({Position(1, 1), Position(2, 2)})


# -- shutdown -----------------------------------------------------------------


def test_shutdown_flushes_and_is_idempotent(
    machine: GameStateMachine, paths: StorePaths
) -> None:
    write_score_pairs(paths.user_scores, [("a", 1), ("a", 4)])
    machine.shutdown()
    machine.shutdown()
    assert machine.running is False
    assert read_score_pairs(paths.user_scores) == [("a", 4)]
    assert load_settings(paths.settings).show_grid is True


# -- end to end ---------------------------------------------------------------


def test_eat_then_hit_left_wall(paths: StorePaths) -> None:
    write_score_pairs(paths.leaderboard, [("rival", 30), ("tester", 5)])
    write_score_pairs(paths.user_scores, [("rival", 30), ("tester", 5)])
    machine = GameStateMachine("tester", paths, rng=random.Random(3))

    _start(machine)
    assert machine.session.score == 0
    assert machine.sim.snake.head == Position(15, 10)

    machine.sim.food = Position(15, 9)
    assert machine.update(TICK) is TickResult.ATE
    assert machine.session.score == 10
    assert len(machine.sim.snake) == 4

    _park_food(machine)
    machine.handle(Intent.LEFT)
    results = [machine.update(TICK) for _ in range(16)]
    assert results[-1] is TickResult.COLLIDED
    assert machine.state is AppState.GAME_OVER

    assert dict(read_score_pairs(paths.leaderboard)) == {"rival": 30, "tester": 10}
    assert dict(read_score_pairs(paths.user_scores))["tester"] == 10

    snap = machine.snapshot()
    assert snap.score == 10
    assert snap.personal_best == 10
    assert snap.global_best == 30
    assert snap.new_personal_best is True
    assert snap.new_global_best is False
    assert snap.leaderboard[0] == ScoreEntry("rival", 30)


def test_snapshot_reports_difficulty(machine: GameStateMachine) -> None:
    _start(machine)
    machine.session.score = 120
    snap = machine.snapshot()
    assert snap.difficulty_level == 3
    assert snap.state is AppState.PLAYING
    assert snap.snake[0] == machine.sim.snake.head
    assert snap.leaderboard == ()
