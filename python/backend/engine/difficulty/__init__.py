from backend.engine.difficulty.difficulty import difficulty_level, speed_interval

__all__ = ["difficulty_level", "speed_interval"]
