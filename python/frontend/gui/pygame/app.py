"""Pygame GUI frontend: a thin renderer over the game state machine.

Draws whatever :class:`Snapshot` says and turns key presses into
intents.  No game rules live here.
"""

from __future__ import annotations

import math
import random
from pathlib import Path

import pygame

from backend.config import GRID_HEIGHT, GRID_WIDTH, MENU_ITEMS, StorePaths
from backend.engine.gamestate import GameStateMachine, Snapshot
from backend.models.grid import Position
from backend.models.intent import AppState
from frontend.keymap import to_intent

# ---------------------------------------------------------------------------
# Catppuccin Mocha palette
# ---------------------------------------------------------------------------
COL_BASE = (30, 30, 46)
COL_MANTLE = (24, 24, 37)
COL_SURFACE0 = (49, 50, 68)
COL_OVERLAY0 = (108, 112, 134)
COL_TEXT = (205, 214, 244)
COL_SUBTEXT = (166, 173, 200)
COL_BLUE = (137, 180, 250)
COL_GREEN = (166, 227, 161)
COL_TEAL = (148, 226, 213)
COL_YELLOW = (249, 226, 175)
COL_RED = (243, 139, 168)

# ---------------------------------------------------------------------------
# Layout
# ---------------------------------------------------------------------------
CELL = 20
FIELD_W, FIELD_H = GRID_WIDTH * CELL, GRID_HEIGHT * CELL
SIDEBAR_W = 250
WIN_W, WIN_H = FIELD_W + SIDEBAR_W, FIELD_H + 150
FPS = 60

_KEY_ACTIONS: dict[int, str] = {
    pygame.K_UP: "up",
    pygame.K_w: "up",
    pygame.K_DOWN: "down",
    pygame.K_s: "down",
    pygame.K_LEFT: "left",
    pygame.K_a: "left",
    pygame.K_RIGHT: "right",
    pygame.K_d: "right",
    pygame.K_RETURN: "enter",
    pygame.K_KP_ENTER: "enter",
    pygame.K_SPACE: "space",
    pygame.K_p: "pause",
    pygame.K_q: "quit",
    pygame.K_ESCAPE: "quit",
    pygame.K_r: "restart",
    pygame.K_l: "leaderboard",
}


# ---------------------------------------------------------------------------
# Centring helpers
# ---------------------------------------------------------------------------
def _cx(w: int) -> int:
    return (WIN_W - w) // 2


def _blit_center(surf: pygame.Surface, rendered: pygame.Surface, y: int) -> None:
    surf.blit(rendered, (_cx(rendered.get_width()), y))


def _cell_rect(pos: Position) -> pygame.Rect:
    return pygame.Rect(pos.x * CELL, pos.y * CELL, CELL - 2, CELL - 2)


# ---------------------------------------------------------------------------
# Main application
# ---------------------------------------------------------------------------
class PygameApp:
    def __init__(self, machine: GameStateMachine) -> None:
        self._machine = machine

        pygame.init()
        self._surf = pygame.display.set_mode((WIN_W, WIN_H))
        pygame.display.set_caption("Snake")
        self._clock = pygame.time.Clock()

        # Fonts
        self._f_big = pygame.font.SysFont("Helvetica", 40, bold=True)
        self._f_title = pygame.font.SysFont("Helvetica", 22, bold=True)
        self._f_body = pygame.font.SysFont("Helvetica", 18)
        self._f_small = pygame.font.SysFont("Helvetica", 14)

        self._glow = pygame.Surface((CELL * 2, CELL * 2), pygame.SRCALPHA)

    # ── drawing ─────────────────────────────────────────────────────────────

    def _draw_glow(self, pos: Position, color: tuple, intensity: float) -> None:
        self._glow.fill((0, 0, 0, 0))
        pygame.draw.circle(
            self._glow,
            (*color, int(100 * intensity)),
            (CELL, CELL),
            int(CELL * 0.8 * intensity),
        )
        self._surf.blit(self._glow, (pos.x * CELL - CELL // 2, pos.y * CELL - CELL // 2))

    def _draw_field(self, snap: Snapshot) -> None:
        pygame.draw.rect(self._surf, COL_MANTLE, pygame.Rect(0, 0, FIELD_W, FIELD_H))

        if snap.show_grid:
            for x in range(GRID_WIDTH + 1):
                pygame.draw.line(self._surf, COL_SURFACE0, (x * CELL, 0), (x * CELL, FIELD_H))
            for y in range(GRID_HEIGHT + 1):
                pygame.draw.line(self._surf, COL_SURFACE0, (0, y * CELL), (FIELD_W, y * CELL))

        for obs in snap.obstacles:
            pygame.draw.rect(self._surf, COL_OVERLAY0, _cell_rect(obs), border_radius=3)

        count = len(snap.snake)
        for i, seg in enumerate(snap.snake):
            if i == 0:
                self._draw_glow(seg, COL_GREEN, 0.5)
                pygame.draw.rect(self._surf, COL_GREEN, _cell_rect(seg), border_radius=4)
                continue
            fade = 1.0 - i / count
            shade = tuple(int(c * (0.45 + 0.55 * fade)) for c in COL_TEAL)
            pygame.draw.rect(self._surf, shade, _cell_rect(seg), border_radius=3)

        pulse = math.sin(snap.animation_timer * 8.0) * 0.3 + 0.7
        self._draw_glow(snap.food, COL_RED, pulse * 0.6)
        pygame.draw.circle(
            self._surf,
            COL_RED,
            (snap.food.x * CELL + CELL // 2, snap.food.y * CELL + CELL // 2),
            max(2, int((CELL // 2 - 2) * pulse)),
        )

    def _draw_sidebar(self, snap: Snapshot) -> None:
        x = FIELD_W + 20
        y = 20
        rows = [
            (self._f_title, "SNAKE", COL_BLUE, 35),
            (self._f_body, f"Player: {snap.player}", COL_GREEN, 28),
            (self._f_body, f"Score: {snap.score}", COL_TEXT, 28),
            (self._f_small, f"Your Best: {snap.personal_best}", COL_YELLOW, 22),
            (self._f_small, f"Best Overall: {snap.global_best}", COL_BLUE, 32),
            (self._f_small, f"Speed Level: {snap.difficulty_level}", COL_YELLOW, 36),
            (self._f_body, "Controls:", COL_BLUE, 26),
        ]
        for font, text, col, step in rows:
            self._surf.blit(font.render(text, True, col), (x, y))
            y += step
        for line in ("WASD/Arrows - Move", "P/Space - Pause", "Q/Esc - Menu"):
            self._surf.blit(self._f_small.render(line, True, COL_SUBTEXT), (x, y))
            y += 20

    def _draw_panel(self, w: int, h: int, alpha: int) -> pygame.Rect:
        shade = pygame.Surface((WIN_W, WIN_H), pygame.SRCALPHA)
        shade.fill((0, 0, 0, alpha))
        self._surf.blit(shade, (0, 0))
        rect = pygame.Rect(_cx(w), (WIN_H - h) // 2, w, h)
        pygame.draw.rect(self._surf, COL_BASE, rect, border_radius=10)
        pygame.draw.rect(self._surf, COL_BLUE, rect, width=2, border_radius=10)
        return rect

    def _draw_game(self, snap: Snapshot) -> None:
        self._surf.fill(COL_BASE)
        self._draw_field(snap)
        self._draw_sidebar(snap)

    def _draw_paused(self, snap: Snapshot) -> None:
        self._draw_game(snap)
        rect = self._draw_panel(220, 120, 128)
        _blit_center(self._surf, self._f_title.render("PAUSED", True, COL_BLUE), rect.y + 18)
        _blit_center(
            self._surf, self._f_small.render("P to continue", True, COL_SUBTEXT), rect.y + 56
        )
        _blit_center(
            self._surf, self._f_small.render("Q for menu", True, COL_SUBTEXT), rect.y + 80
        )

    def _draw_game_over(self, snap: Snapshot) -> None:
        self._draw_game(snap)
        rect = self._draw_panel(400, 300, 180)
        _blit_center(self._surf, self._f_big.render("GAME OVER", True, COL_YELLOW), rect.y + 30)
        _blit_center(
            self._surf,
            self._f_title.render(f"Final Score: {snap.score}", True, COL_TEXT),
            rect.y + 90,
        )
        if snap.new_global_best:
            banner = self._f_body.render("NEW HIGHEST SCORE!", True, COL_YELLOW)
            _blit_center(self._surf, banner, rect.y + 130)
        elif snap.new_personal_best:
            banner = self._f_body.render("NEW PERSONAL BEST!", True, COL_GREEN)
            _blit_center(self._surf, banner, rect.y + 130)

        y = rect.y + 200
        for line in ("R - Restart Game", "L - View Leaderboard", "Q - Return to Menu"):
            _blit_center(self._surf, self._f_body.render(line, True, COL_BLUE), y)
            y += 24

    def _draw_menu(self, snap: Snapshot) -> None:
        self._surf.fill(COL_BASE)
        cy = WIN_H // 2
        _blit_center(self._surf, self._f_big.render("SNAKE", True, COL_BLUE), cy - 170)
        _blit_center(
            self._surf,
            self._f_body.render(f"Welcome, {snap.player}!", True, COL_GREEN),
            cy - 100,
        )
        _blit_center(
            self._surf,
            self._f_small.render(f"Highest Score: {snap.global_best}", True, COL_YELLOW),
            cy - 70,
        )
        _blit_center(
            self._surf,
            self._f_small.render(f"Your Best: {snap.personal_best}", True, COL_SUBTEXT),
            cy - 50,
        )

        for i, label in enumerate(MENU_ITEMS):
            y = cy + i * 40
            selected = i == snap.menu_index
            if selected:
                pygame.draw.rect(
                    self._surf, COL_SURFACE0, pygame.Rect(_cx(220), y - 6, 220, 32),
                    border_radius=6,
                )
            col = COL_BLUE if selected else COL_TEXT
            _blit_center(self._surf, self._f_body.render(label, True, col), y)

        _blit_center(
            self._surf,
            self._f_small.render(
                "W/S or Arrows to navigate, Enter to select", True, COL_OVERLAY0
            ),
            WIN_H - 60,
        )
        _blit_center(
            self._surf,
            self._f_small.render("Speed increases as you eat!", True, COL_YELLOW),
            WIN_H - 38,
        )

    def _draw_leaderboard(self, snap: Snapshot) -> None:
        self._surf.fill(COL_BASE)
        _blit_center(self._surf, self._f_big.render("LEADERBOARD", True, COL_BLUE), 40)

        y = 110
        if not snap.leaderboard:
            _blit_center(
                self._surf,
                self._f_body.render("No scores yet. Be the first!", True, COL_OVERLAY0),
                y + 40,
            )
        else:
            for col_x, head in ((80, "Rank"), (180, "Player"), (420, "Score")):
                self._surf.blit(self._f_body.render(head, True, COL_BLUE), (col_x, y))
            pygame.draw.line(self._surf, COL_SURFACE0, (60, y + 28), (WIN_W - 60, y + 28))
            for i, entry in enumerate(snap.leaderboard, 1):
                ry = y + 14 + i * 30
                mine = entry.name == snap.player
                if mine:
                    pygame.draw.rect(
                        self._surf, COL_SURFACE0,
                        pygame.Rect(60, ry - 4, WIN_W - 120, 26), border_radius=4,
                    )
                col = COL_GREEN if mine else COL_TEXT
                for col_x, text in ((80, str(i)), (180, entry.display_name), (420, str(entry.score))):
                    self._surf.blit(self._f_body.render(text, True, col), (col_x, ry))

        _blit_center(
            self._surf,
            self._f_small.render("Q / Esc / Enter to return to menu", True, COL_OVERLAY0),
            WIN_H - 50,
        )

    def _draw_settings(self, snap: Snapshot) -> None:
        self._surf.fill(COL_BASE)
        _blit_center(self._surf, self._f_big.render("SETTINGS", True, COL_BLUE), 40)
        _blit_center(
            self._surf,
            self._f_small.render("Speed increases automatically with score!", True, COL_YELLOW),
            100,
        )
        state = "ON" if snap.show_grid else "OFF"
        col = COL_GREEN if snap.show_grid else COL_YELLOW
        label = self._f_title.render("Show Grid   ", True, COL_TEXT)
        value = self._f_title.render(state, True, col)
        x = _cx(label.get_width() + value.get_width())
        self._surf.blit(label, (x, 200))
        self._surf.blit(value, (x + label.get_width(), 200))
        _blit_center(
            self._surf, self._f_small.render("Press Enter to toggle", True, COL_SUBTEXT), 236
        )
        _blit_center(
            self._surf,
            self._f_small.render("Q / Esc - Back to Menu", True, COL_OVERLAY0),
            WIN_H - 50,
        )

    # ── main loop ───────────────────────────────────────────────────────────

    def run_loop(self) -> None:
        _draw = {
            AppState.MENU: self._draw_menu,
            AppState.PLAYING: self._draw_game,
            AppState.PAUSED: self._draw_paused,
            AppState.GAME_OVER: self._draw_game_over,
            AppState.LEADERBOARD: self._draw_leaderboard,
            AppState.SETTINGS: self._draw_settings,
        }

        machine = self._machine
        try:
            while machine.running:
                for ev in pygame.event.get():
                    if ev.type == pygame.QUIT:
                        machine.running = False
                        break
                    if ev.type != pygame.KEYDOWN:
                        continue
                    intent = to_intent(_KEY_ACTIONS.get(ev.key), machine.state)
                    if intent is not None:
                        machine.handle(intent)

                dt = self._clock.tick(FPS) / 1000.0
                machine.update(dt)

                snap = machine.snapshot()
                _draw[snap.state](snap)
                pygame.display.flip()
        finally:
            pygame.quit()


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------
def run(player: str, data_dir: Path, seed: int | None = None) -> None:
    """Launch the Pygame window; flushes scores and settings on close."""
    machine = GameStateMachine(
        player, StorePaths.in_dir(data_dir), rng=random.Random(seed)
    )
    try:
        PygameApp(machine).run_loop()
    finally:
        machine.shutdown()
