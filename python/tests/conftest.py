"""Shared fixtures: every file-backed test gets its own data directory."""

from __future__ import annotations

import random
from pathlib import Path

import pytest

from backend.config import StorePaths
from backend.engine.gamestate import GameStateMachine


@pytest.fixture
def paths(tmp_path: Path) -> StorePaths:
    return StorePaths.in_dir(tmp_path)


@pytest.fixture
def machine(paths: StorePaths) -> GameStateMachine:
    return GameStateMachine("tester", paths, rng=random.Random(1234))
