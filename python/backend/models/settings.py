"""Persisted user preferences."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Settings:
    show_grid: bool = True

    def toggle_grid(self) -> bool:
        self.show_grid = not self.show_grid
        return self.show_grid
