"""Rich terminal frontend: the board as coloured text in a live panel.

Shares the game core with the pygame window.  Input comes from the
single-key reader; its short read timeout doubles as the frame clock.
"""

from __future__ import annotations

import random
import time
from pathlib import Path

import rich.box
from rich.align import Align
from rich.console import Console, Group, RenderableType
from rich.live import Live
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from backend.config import GRID_HEIGHT, GRID_WIDTH, MENU_ITEMS, StorePaths
from backend.engine.gamestate import GameStateMachine, Snapshot
from backend.models.highscore import ScoreEntry
from backend.models.intent import AppState
from frontend.cli.input_handler import get_key_timeout
from frontend.keymap import to_intent

console = Console()

FRAME_TIME = 1 / 30


# -- board rendering ----------------------------------------------------------


def _render_board(snap: Snapshot) -> Text:
    """Return the playfield as two characters per cell."""
    head = snap.snake[0] if snap.snake else None
    body = set(snap.snake[1:])
    blink = int(snap.animation_timer * 4) % 2 == 0
    empty = "· " if snap.show_grid else "  "

    text = Text()
    for y in range(GRID_HEIGHT):
        for x in range(GRID_WIDTH):
            cell = (x, y)
            if cell == head:
                text.append("██", style="bold bright_green")
            elif cell in body:
                text.append("██", style="green")
            elif cell == snap.food:
                text.append("● ", style="bold red" if blink else "red")
            elif cell in snap.obstacles:
                text.append("▓▓", style="grey50")
            else:
                text.append(empty, style="grey23")
        if y < GRID_HEIGHT - 1:
            text.append("\n")
    return text


def _sidebar(snap: Snapshot) -> Table:
    table = Table.grid(padding=(0, 1))
    table.add_column(style="dim")
    table.add_column(justify="right")
    table.add_row("Player", Text(snap.player, style="bold green"))
    table.add_row("Score", Text(str(snap.score), style="bold white"))
    table.add_row("Your best", Text(str(snap.personal_best), style="yellow"))
    table.add_row("Best overall", Text(str(snap.global_best), style="cyan"))
    table.add_row("Speed level", Text(str(snap.difficulty_level), style="yellow"))
    table.add_row("", "")
    for keys, label in (
        ("WASD / ←↑→↓", "move"),
        ("P / Space", "pause"),
        ("Q / Esc", "menu"),
    ):
        table.add_row(Text(keys, style="bold cyan"), Text(label, style="dim"))
    return table


def _overlay(snap: Snapshot) -> RenderableType | None:
    if snap.state is AppState.PAUSED:
        return Text(
            "PAUSED   P to continue   Q for menu", style="bold bright_blue"
        )
    if snap.state is AppState.GAME_OVER:
        lines = Text()
        lines.append("GAME OVER", style="bold yellow")
        lines.append(f"   Final score: {snap.score}\n", style="bold white")
        if snap.new_global_best:
            lines.append("NEW HIGHEST SCORE!\n", style="bold yellow")
        elif snap.new_personal_best:
            lines.append("NEW PERSONAL BEST!\n", style="bold green")
        lines.append("R", style="bold cyan")
        lines.append(" restart   ", style="dim")
        lines.append("L", style="bold cyan")
        lines.append(" leaderboard   ", style="dim")
        lines.append("Q", style="bold cyan")
        lines.append(" menu", style="dim")
        return lines
    return None


def _game_screen(snap: Snapshot) -> RenderableType:
    layout = Table.grid(padding=(0, 2))
    layout.add_column()
    layout.add_column()
    layout.add_row(_render_board(snap), _sidebar(snap))

    parts: list[RenderableType] = [layout]
    overlay = _overlay(snap)
    if overlay is not None:
        parts.append(Text(""))
        parts.append(Align.center(overlay))

    return Panel(
        Group(*parts),
        title="[bold bright_blue]S N A K E[/bold bright_blue]",
        border_style="bright_blue",
        padding=(0, 1),
    )


# -- other screens ------------------------------------------------------------


def _menu_screen(snap: Snapshot) -> RenderableType:
    header = Text()
    header.append(f"Welcome, {snap.player}!\n", style="bold green")
    header.append(f"Highest score: {snap.global_best}", style="yellow")
    header.append(f"    Your best: {snap.personal_best}", style="dim")

    items = Text()
    for i, label in enumerate(MENU_ITEMS):
        if i == snap.menu_index:
            items.append(f" > {label:<12}\n", style="bold black on bright_blue")
        else:
            items.append(f"   {label:<12}\n")

    hint = Text("W/S or ↑↓ to move, Enter to select", style="dim")

    return Panel(
        Group(
            Align.center(header),
            Text(""),
            Align.center(items),
            Align.center(hint),
        ),
        title="[bold]S N A K E   G A M E[/bold]",
        border_style="bright_blue",
        padding=(1, 4),
    )


def _scores_table(entries: tuple[ScoreEntry, ...], player: str) -> Table:
    table = Table(box=rich.box.ROUNDED, border_style="dim")
    table.add_column("#", justify="right", style="dim", width=3)
    table.add_column("Player")
    table.add_column("Score", justify="right", style="yellow")
    for i, entry in enumerate(entries, 1):
        style = "bold green" if entry.name == player else ""
        table.add_row(str(i), entry.display_name, str(entry.score), style=style)
    return table


def _leaderboard_screen(snap: Snapshot) -> RenderableType:
    if snap.leaderboard:
        body: RenderableType = _scores_table(snap.leaderboard, snap.player)
    else:
        body = Text("No scores yet. Be the first!", style="dim")
    return Panel(
        Group(
            Align.center(body),
            Text(""),
            Align.center(Text("Q / Esc / Enter to return", style="dim")),
        ),
        title="[bold]L E A D E R B O A R D[/bold]",
        border_style="bright_blue",
        padding=(1, 4),
    )


def _settings_screen(snap: Snapshot) -> RenderableType:
    row = Text()
    row.append("Show grid   ")
    if snap.show_grid:
        row.append("ON", style="bold green")
    else:
        row.append("OFF", style="bold yellow")
    return Panel(
        Group(
            Align.center(Text("Speed increases automatically with score!", style="yellow")),
            Text(""),
            Align.center(row),
            Align.center(Text("Enter to toggle   Q / Esc to go back", style="dim")),
        ),
        title="[bold]S E T T I N G S[/bold]",
        border_style="bright_blue",
        padding=(1, 4),
    )


_SCREENS = {
    AppState.MENU: _menu_screen,
    AppState.PLAYING: _game_screen,
    AppState.PAUSED: _game_screen,
    AppState.GAME_OVER: _game_screen,
    AppState.LEADERBOARD: _leaderboard_screen,
    AppState.SETTINGS: _settings_screen,
}


def render(snap: Snapshot) -> RenderableType:
    return Align.center(_SCREENS[snap.state](snap), vertical="middle")


def print_leaderboard(entries: list[ScoreEntry], player: str = "") -> None:
    """Print the leaderboard once, outside the live view."""
    if not entries:
        console.print("\n  No scores yet.\n", style="dim")
        return
    console.print()
    console.print(
        Panel(
            _scores_table(tuple(entries), player),
            title="[bold]L E A D E R B O A R D[/bold]",
            border_style="bright_blue",
            expand=False,
        )
    )


# -- main loop ----------------------------------------------------------------


def run_loop(machine: GameStateMachine) -> None:
    last = time.monotonic()
    with Live(
        render(machine.snapshot()),
        console=console,
        screen=True,
        auto_refresh=False,
    ) as live:
        while machine.running:
            key = get_key_timeout(FRAME_TIME)
            if key == "interrupt":
                break
            intent = to_intent(key, machine.state)
            if intent is not None:
                machine.handle(intent)

            now = time.monotonic()
            machine.update(now - last)
            last = now

            live.update(render(machine.snapshot()), refresh=True)


# -- public entry point -------------------------------------------------------


def run(player: str, data_dir: Path, seed: int | None = None) -> None:
    """Launch the terminal game; flushes scores and settings on the way out."""
    machine = GameStateMachine(
        player, StorePaths.in_dir(data_dir), rng=random.Random(seed)
    )
    try:
        run_loop(machine)
    finally:
        machine.shutdown()
