#!/usr/bin/env python3
"""Snake Game.

Usage::

    python main.py                 # asks for a name, opens the Pygame window
    python main.py -f rich         # play in the terminal
    python main.py -n ada --seed 7 # skip the prompt, fixed food sequence
    python main.py --scores        # print the leaderboard and exit
"""

import importlib
import logging
import re
import sys
from enum import StrEnum
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

ROOT = Path(__file__).resolve().parent  # python/
PROJECT_ROOT = ROOT.parent  # snake-game/
DATA_DIR = PROJECT_ROOT / "data"

if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from backend.config import DEFAULT_PLAYER_NAME  # noqa: E402

logger = logging.getLogger("snake")


# -- frontend registry -------------------------------------------------------


class Frontend(StrEnum):
    pygame = "pygame"
    rich = "rich"


_RUNNERS = {
    Frontend.pygame: "frontend.gui.pygame.app",
    Frontend.rich: "frontend.cli.rich.app",
}


# -- helpers ------------------------------------------------------------------


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
    )


def clean_name(raw: str) -> str:
    """Make *raw* safe for the whitespace-delimited score files."""
    name = re.sub(r"\s+", "_", raw.strip())
    return name or DEFAULT_PLAYER_NAME


def _ask_name() -> str:
    print("Welcome to Snake!")
    try:
        raw = input("Enter your name: ")
    except EOFError:
        raw = ""
    return clean_name(raw)


def _print_scores(data_dir: Path) -> None:
    from backend.config import StorePaths
    from backend.models.highscore import Leaderboard
    from frontend.cli.rich.app import print_leaderboard

    board = Leaderboard(StorePaths.in_dir(data_dir).leaderboard)
    print_leaderboard(board.entries)


# -- CLI entry point ----------------------------------------------------------

app = typer.Typer(add_completion=False)


@app.command()
def main(
    frontend: Frontend = typer.Option(
        Frontend.pygame, "-f", "--frontend",
        help="Frontend to launch.",
    ),
    name: Optional[str] = typer.Option(
        None, "-n", "--name",
        help="Player name. Omit to be asked on startup.",
    ),
    data_dir: Path = typer.Option(
        DATA_DIR, "--data-dir",
        file_okay=False,
        help="Directory holding obstacles, scores, and settings.",
    ),
    seed: Optional[int] = typer.Option(
        None, "--seed",
        help="Seed for food placement.",
    ),
    log_level: str = typer.Option(
        "WARNING", "--log-level",
        help="Logging level (DEBUG, INFO, WARNING, ERROR).",
    ),
    scores: bool = typer.Option(
        False, "--scores",
        help="Show the leaderboard and exit.",
    ),
) -> None:
    """Snake Game."""
    _setup_logging(log_level)

    if scores:
        _print_scores(data_dir)
        return

    player = clean_name(name) if name is not None else _ask_name()

    try:
        mod = importlib.import_module(_RUNNERS[frontend])
        mod.run(player=player, data_dir=data_dir, seed=seed)
    except Exception:
        logger.exception("An unhandled exception occurred")
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
