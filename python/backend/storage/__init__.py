from backend.storage.store import (
    load_obstacles,
    load_settings,
    read_score_pairs,
    save_settings,
    write_score_pairs,
)

__all__ = [
    "load_obstacles",
    "load_settings",
    "read_score_pairs",
    "save_settings",
    "write_score_pairs",
]
