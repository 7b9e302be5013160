"""Top-level controller: menu, play, pause, game over, leaderboard, settings."""

from __future__ import annotations

import logging
import random
from collections.abc import Callable

from backend.config import (
    GRID_HEIGHT,
    GRID_WIDTH,
    MAX_OBSTACLES,
    MENU_ITEMS,
    StorePaths,
)
from backend.engine.gameplay import SnakeSimulation, TickResult
from backend.engine.gamestate.state import GameSession, Snapshot
from backend.models.highscore import Leaderboard, ScoreManager
from backend.models.intent import AppState, Intent
from backend.storage.store import load_obstacles, load_settings, save_settings

logger = logging.getLogger(__name__)

_MENU_START, _MENU_LEADERBOARD, _MENU_SETTINGS, _MENU_EXIT = range(len(MENU_ITEMS))


class GameStateMachine:
    """Routes intents per UI state and drives the simulation clock.

    Stores are loaded once here; they are written back when a personal
    best is set, on game over, when leaving settings, and on
    :meth:`shutdown`.
    """

    def __init__(
        self,
        player: str,
        paths: StorePaths,
        *,
        rng: random.Random | None = None,
        width: int = GRID_WIDTH,
        height: int = GRID_HEIGHT,
    ) -> None:
        self.player = player
        self.paths = paths
        self.state = AppState.MENU
        self.menu_index = 0
        self.running = True
        self._shut_down = False

        self.settings = load_settings(paths.settings)
        self.scores = ScoreManager(paths.user_scores, player)
        self.leaderboard = Leaderboard(paths.leaderboard)
        obstacles = load_obstacles(paths.obstacles, width, height, MAX_OBSTACLES)

        self.sim = SnakeSimulation(width, height, obstacles, rng)
        self.session = GameSession()
        self.reset()

        self._dispatch: dict[AppState, Callable[[Intent], None]] = {
            AppState.MENU: self._on_menu,
            AppState.PLAYING: self._on_playing,
            AppState.PAUSED: self._on_paused,
            AppState.GAME_OVER: self._on_game_over,
            AppState.LEADERBOARD: self._on_leaderboard,
            AppState.SETTINGS: self._on_settings,
        }

    # -- session --------------------------------------------------------------

    def reset(self) -> None:
        """Start a fresh session: new snake, new food, score back to 0."""
        self.sim.initialize()
        self.sim.place_food()
        self.session = GameSession(
            best_at_start=self.scores.personal_best,
            global_at_start=self.scores.global_best,
        )

    def change_state(self, new_state: AppState) -> None:
        logger.debug("State %s -> %s", self.state, new_state)
        self.state = new_state
        self.menu_index = 0
        if new_state is AppState.LEADERBOARD:
            self.leaderboard.load()

    # -- per-frame API --------------------------------------------------------

    def handle(self, intent: Intent) -> None:
        """Apply one player intent in the current state."""
        self._dispatch[self.state](intent)

    def update(self, dt: float) -> TickResult | None:
        """Advance timers by *dt* seconds; tick the snake when one is due."""
        self.session.animation_timer += dt
        if self.state is not AppState.PLAYING:
            return None
        if not self.session.advance(dt):
            return None

        result = self.sim.tick()
        if result is TickResult.ATE:
            score = self.session.add_food()
            logger.info("Food eaten, score %d", score)
        elif result is TickResult.COLLIDED:
            self._game_over()
        return result

    def snapshot(self) -> Snapshot:
        show_scores = self.state in (AppState.LEADERBOARD, AppState.GAME_OVER)
        return Snapshot(
            state=self.state,
            player=self.player,
            menu_index=self.menu_index,
            show_grid=self.settings.show_grid,
            snake=tuple(self.sim.snake.segments),
            food=self.sim.food,
            obstacles=self.sim.obstacles,
            score=self.session.score,
            personal_best=self.scores.personal_best,
            global_best=self.scores.global_best,
            difficulty_level=self.session.difficulty_level,
            animation_timer=self.session.animation_timer,
            leaderboard=tuple(self.leaderboard.entries) if show_scores else (),
            new_personal_best=self.session.new_personal_best,
            new_global_best=self.session.new_global_best,
        )

    def shutdown(self) -> None:
        """Flush best scores and settings.  Safe to call more than once."""
        if self._shut_down:
            return
        self._shut_down = True
        self.running = False
        self.scores.merge_session_best()
        save_settings(self.paths.settings, self.settings)

    # -- helpers --------------------------------------------------------------

    def _game_over(self) -> None:
        score = self.session.score
        logger.info("Game over for %s with score %d", self.player, score)
        self.leaderboard.record(self.player, score)
        self.scores.record_personal_best(score)
        self.change_state(AppState.GAME_OVER)

    # -- intent handlers ------------------------------------------------------

    def _on_menu(self, intent: Intent) -> None:
        if intent is Intent.DOWN:
            self.menu_index = (self.menu_index + 1) % len(MENU_ITEMS)
        elif intent is Intent.UP:
            self.menu_index = (self.menu_index - 1) % len(MENU_ITEMS)
        elif intent is Intent.CONFIRM:
            if self.menu_index == _MENU_START:
                self.reset()
                self.change_state(AppState.PLAYING)
            elif self.menu_index == _MENU_LEADERBOARD:
                self.change_state(AppState.LEADERBOARD)
            elif self.menu_index == _MENU_SETTINGS:
                self.change_state(AppState.SETTINGS)
            elif self.menu_index == _MENU_EXIT:
                self.running = False

    def _on_playing(self, intent: Intent) -> None:
        if intent is Intent.PAUSE:
            self.change_state(AppState.PAUSED)
        elif intent is Intent.BACK:
            self.change_state(AppState.MENU)
        elif intent.direction is not None:
            self.sim.steer(intent.direction)

    def _on_paused(self, intent: Intent) -> None:
        if intent is Intent.PAUSE:
            self.change_state(AppState.PLAYING)
        elif intent is Intent.BACK:
            self.change_state(AppState.MENU)

    def _on_game_over(self, intent: Intent) -> None:
        if intent is Intent.RESTART:
            self.reset()
            self.change_state(AppState.PLAYING)
        elif intent is Intent.BACK:
            self.change_state(AppState.MENU)
        elif intent is Intent.LEADERBOARD:
            self.change_state(AppState.LEADERBOARD)

    def _on_leaderboard(self, intent: Intent) -> None:
        if intent in (Intent.BACK, Intent.CONFIRM):
            self.change_state(AppState.MENU)

    def _on_settings(self, intent: Intent) -> None:
        if intent is Intent.CONFIRM:
            self.settings.toggle_grid()
        elif intent is Intent.BACK:
            save_settings(self.paths.settings, self.settings)
            self.change_state(AppState.MENU)
