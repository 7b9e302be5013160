from backend.models.grid import Direction, Position
from backend.models.intent import AppState, Intent
from backend.models.settings import Settings
from backend.models.snake import Snake

__all__ = ["AppState", "Direction", "Intent", "Position", "Settings", "Snake"]
