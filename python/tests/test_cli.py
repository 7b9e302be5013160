"""Command-line entry point."""

from __future__ import annotations

from pathlib import Path

import pytest
from typer.testing import CliRunner

from backend.storage.store import write_score_pairs
from main import app, clean_name

runner = CliRunner()


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("ada", "ada"), ("  ", "Player"), ("", "Player"), (" Ada  Lovelace ", "Ada_Lovelace")],
)
def test_clean_name(raw: str, expected: str) -> None:
    assert clean_name(raw) == expected


def test_scores_flag_with_no_scores(tmp_path: Path) -> None:
    result = runner.invoke(app, ["--scores", "--data-dir", str(tmp_path)])
    assert result.exit_code == 0
    assert "No scores yet" in result.output


def test_scores_flag_lists_leaderboard(tmp_path: Path) -> None:
    write_score_pairs(tmp_path / "scores.txt", [("bob", 20), ("amy", 70)])
    result = runner.invoke(app, ["--scores", "--data-dir", str(tmp_path)])
    assert result.exit_code == 0
    assert result.output.index("amy") < result.output.index("bob")
