from backend.engine.gameplay.simulation import SnakeSimulation, TickResult

__all__ = ["SnakeSimulation", "TickResult"]
