"""Flat-text stores: tolerant reads, full rewrites."""

from __future__ import annotations

from pathlib import Path

import pytest

from backend.models.grid import Position
from backend.models.settings import Settings
from backend.storage.store import (
    best_by_name,
    load_obstacles,
    load_settings,
    read_score_pairs,
    save_settings,
    write_score_pairs,
)

# -- scores -------------------------------------------------------------------


def test_missing_score_file_reads_empty(tmp_path: Path) -> None:
    assert read_score_pairs(tmp_path / "nope.txt") == []


def test_malformed_score_records_are_skipped(tmp_path: Path) -> None:
    path = tmp_path / "scores.txt"
    path.write_text("alice 40\nbob lots\ncarol 15 dave 25\nerin\n\nfrank 5\n")
    assert read_score_pairs(path) == [
        ("alice", 40),
        ("carol", 15),
        ("dave", 25),
        ("frank", 5),
    ]


def test_undecodable_bytes_spoil_only_their_record(tmp_path: Path) -> None:
    path = tmp_path / "scores.txt"
    path.write_bytes(b"alice 90\nbob 80\nz\xff 5\nyan \xfe\n")
    pairs = read_score_pairs(path)
    assert pairs[:2] == [("alice", 90), ("bob", 80)]
    assert len(pairs) == 3

    assert write_score_pairs(path, pairs) is True
    assert path.read_bytes() == b"alice 90\nbob 80\nz\xff 5\n"


def test_write_replaces_whole_file(tmp_path: Path) -> None:
    path = tmp_path / "scores.txt"
    path.write_text("old 1\nstale 2\n")
    assert write_score_pairs(path, [("new", 3)]) is True
    assert path.read_text() == "new 3\n"
    assert not (tmp_path / "scores.txt.tmp").exists()


def test_write_failure_is_reported_not_raised(tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("")
    # A regular file where a directory is needed cannot be written through.
    assert write_score_pairs(blocker / "scores.txt", [("a", 1)]) is False


def test_best_by_name_keeps_maximum() -> None:
    assert best_by_name([("x", 10), ("y", 5), ("x", 20), ("x", 15)]) == {
        "x": 20,
        "y": 5,
    }


# -- obstacles ----------------------------------------------------------------


def test_obstacles_skip_bad_and_out_of_bounds(tmp_path: Path) -> None:
    path = tmp_path / "obstacles.txt"
    path.write_text("1 2\n-1 4\n30 0\nfoo 3\n29 19\n0 20\n")
    assert load_obstacles(path, 30, 20, 100) == frozenset(
        {Position(1, 2), Position(29, 19)}
    )


def test_obstacles_stop_at_limit(tmp_path: Path) -> None:
    path = tmp_path / "obstacles.txt"
    path.write_text("\n".join(f"{x} 0" for x in range(10)) + "\n")
    cells = load_obstacles(path, 30, 20, 4)
    assert cells == frozenset(Position(x, 0) for x in range(4))


def test_missing_obstacle_file_is_empty(tmp_path: Path) -> None:
    assert load_obstacles(tmp_path / "obstacles.txt", 30, 20, 100) == frozenset()


# -- settings -----------------------------------------------------------------


def test_settings_default_when_missing(tmp_path: Path) -> None:
    assert load_settings(tmp_path / "settings.txt").show_grid is True


@pytest.mark.parametrize("show_grid", [True, False])
def test_settings_round_trip(tmp_path: Path, show_grid: bool) -> None:
    path = tmp_path / "settings.txt"
    assert save_settings(path, Settings(show_grid=show_grid)) is True
    assert load_settings(path).show_grid is show_grid


@pytest.mark.parametrize(
    ("token", "expected"), [("0", False), ("false", False), ("TRUE", True), ("maybe", True)]
)
def test_settings_token_parsing(tmp_path: Path, token: str, expected: bool) -> None:
    path = tmp_path / "settings.txt"
    path.write_text(token)
    assert load_settings(path).show_grid is expected
