"""Flat-text persistence for obstacles, scores, and settings.

Every store is read fully on load and rewritten fully on save.  A missing
file reads as empty, unparsable tokens are skipped, and a failed write is
logged and reported through the return value.  Nothing here raises for
I/O trouble.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from pathlib import Path

from backend.models.grid import Position
from backend.models.settings import Settings

logger = logging.getLogger(__name__)

_TRUE_TOKENS = {"1", "true", "yes", "on"}
_FALSE_TOKENS = {"0", "false", "no", "off"}
_ERRORS = "surrogateescape"


# -- low-level readers / writers ----------------------------------------------


def _read_lines(path: Path) -> list[str]:
    """Read *path* as lines; undecodable bytes survive as surrogates."""
    if not path.exists():
        return []
    try:
        return path.read_text(encoding="utf-8", errors=_ERRORS).splitlines()
    except OSError as exc:
        logger.warning("Could not read %s: %s", path, exc)
        return []


def _pairs(lines: Iterable[str]) -> Iterator[tuple[str, str]]:
    """Yield whitespace-delimited tokens two at a time, line by line.

    A dangling token at the end of a line is dropped.
    """
    for line in lines:
        tokens = line.split()
        for i in range(0, len(tokens) - 1, 2):
            yield tokens[i], tokens[i + 1]


def _write_lines(path: Path, lines: Iterable[str]) -> bool:
    text = "".join(f"{line}\n" for line in lines)
    tmp = path.with_suffix(path.suffix + ".tmp")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp.write_text(text, encoding="utf-8", errors=_ERRORS)
        tmp.replace(path)
    except OSError as exc:
        logger.warning("Could not write %s: %s", path, exc)
        return False
    return True


# -- scores -------------------------------------------------------------------


def read_score_pairs(path: Path) -> list[tuple[str, int]]:
    """Return every ``(name, score)`` pair in file order.

    Duplicates are kept; callers decide how to merge them.
    """
    pairs: list[tuple[str, int]] = []
    for name, raw in _pairs(_read_lines(path)):
        try:
            pairs.append((name, int(raw)))
        except ValueError:
            logger.debug("Skipping malformed score record %r %r in %s", name, raw, path)
    logger.debug("Loaded %d score records from %s", len(pairs), path)
    return pairs


def write_score_pairs(path: Path, pairs: Iterable[tuple[str, int]]) -> bool:
    return _write_lines(path, (f"{name} {score}" for name, score in pairs))


def best_by_name(pairs: Iterable[tuple[str, int]]) -> dict[str, int]:
    """Collapse duplicate names, keeping each name's highest score."""
    best: dict[str, int] = {}
    for name, score in pairs:
        if name not in best or score > best[name]:
            best[name] = score
    return best


# -- obstacles ----------------------------------------------------------------


def load_obstacles(
    path: Path, width: int, height: int, limit: int
) -> frozenset[Position]:
    """Load up to *limit* in-bounds obstacle cells from ``x y`` pairs."""
    cells: list[Position] = []
    for raw_x, raw_y in _pairs(_read_lines(path)):
        if len(cells) >= limit:
            break
        try:
            pos = Position(int(raw_x), int(raw_y))
        except ValueError:
            logger.debug("Skipping malformed obstacle %r %r", raw_x, raw_y)
            continue
        if not pos.in_bounds(width, height):
            logger.debug("Skipping out-of-bounds obstacle %s", pos)
            continue
        cells.append(pos)
    logger.debug("Loaded %d obstacles from %s", len(cells), path)
    return frozenset(cells)


# -- settings -----------------------------------------------------------------


def load_settings(path: Path) -> Settings:
    settings = Settings()
    for line in _read_lines(path):
        tokens = line.split()
        if not tokens:
            continue
        token = tokens[0].lower()
        if token in _TRUE_TOKENS:
            settings.show_grid = True
        elif token in _FALSE_TOKENS:
            settings.show_grid = False
        else:
            logger.debug("Ignoring malformed settings token %r", tokens[0])
        break
    return settings


def save_settings(path: Path, settings: Settings) -> bool:
    return _write_lines(path, ["1" if settings.show_grid else "0"])
