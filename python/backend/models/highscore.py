"""Personal-best and leaderboard persistence and management."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from backend.config import MAX_LEADERBOARD_ENTRIES
from backend.storage.store import best_by_name, read_score_pairs, write_score_pairs

logger = logging.getLogger(__name__)


@dataclass
class ScoreEntry:
    name: str
    score: int

    @property
    def display_name(self) -> str:
        """The name with any undecodable bytes shown as U+FFFD."""
        return self.name.encode("utf-8", "surrogateescape").decode("utf-8", "replace")


def _ranked(best: dict[str, int]) -> list[ScoreEntry]:
    """Sort by score descending; equal scores fall back to name order."""
    return [
        ScoreEntry(name, score)
        for name, score in sorted(best.items(), key=lambda kv: (-kv[1], kv[0]))
    ]


class ScoreManager:
    """Tracks one player's best score and the best score of anyone.

    The backing file may list a name several times; only the maximum
    per name counts.
    """

    def __init__(self, filepath: Path, player: str) -> None:
        self.filepath = filepath
        self.player = player
        self.personal_best: int = 0
        self.global_best: int = 0
        self.load_personal_best()

    # -- persistence ----------------------------------------------------------

    def load_personal_best(self) -> tuple[int, int]:
        """Reload both maxima from disk and return ``(personal, global)``."""
        personal = 0
        overall = 0
        for name, score in read_score_pairs(self.filepath):
            overall = max(overall, score)
            if name == self.player:
                personal = max(personal, score)
        self.personal_best = personal
        self.global_best = overall
        return personal, overall

    def record_personal_best(self, score: int) -> bool:
        """Store *score* if it beats the player's best.  Returns True if it did."""
        if score <= self.personal_best:
            return False

        best = best_by_name(read_score_pairs(self.filepath))
        best[self.player] = score
        write_score_pairs(self.filepath, sorted(best.items()))

        self.personal_best = score
        self.global_best = max(self.global_best, score)
        logger.info("New personal best for %s: %d", self.player, score)
        return True

    def merge_session_best(self) -> None:
        """Rewrite the store with one line per player, keeping the maximum."""
        best = best_by_name(read_score_pairs(self.filepath))
        if best:
            write_score_pairs(self.filepath, sorted(best.items()))


class Leaderboard:
    """Top-N best-per-player scores, backed by a flat text file."""

    def __init__(
        self, filepath: Path, max_entries: int = MAX_LEADERBOARD_ENTRIES
    ) -> None:
        self.filepath = filepath
        self.max_entries = max_entries
        self._entries: list[ScoreEntry] = []
        self.load()

    # -- persistence ----------------------------------------------------------

    def load(self) -> list[ScoreEntry]:
        best = best_by_name(read_score_pairs(self.filepath))
        self._entries = _ranked(best)[: self.max_entries]
        return self.entries

    def save(self) -> bool:
        return write_score_pairs(
            self.filepath, ((e.name, e.score) for e in self._entries)
        )

    # -- updates --------------------------------------------------------------

    def record(self, player: str, score: int) -> bool:
        """Upsert *player* at *score*, keeping the higher of old and new.

        Non-positive scores are ignored.  Returns True if the board was
        rewritten.
        """
        if score <= 0:
            return False

        best = {e.name: e.score for e in self._entries}
        best[player] = max(score, best.get(player, 0))
        self._entries = _ranked(best)[: self.max_entries]
        self.save()
        return True

    # -- queries --------------------------------------------------------------

    @property
    def entries(self) -> list[ScoreEntry]:
        return list(self._entries)
