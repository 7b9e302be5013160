from backend.engine.gamestate.machine import GameStateMachine
from backend.engine.gamestate.state import GameSession, Snapshot

__all__ = ["GameSession", "GameStateMachine", "Snapshot"]
