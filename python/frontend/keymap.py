"""Translate device-neutral action names into game intents.

Frontends reduce raw key events to the action strings below; this module
decides what each action means in the current screen.
"""

from __future__ import annotations

from backend.models.intent import AppState, Intent

_FIXED: dict[str, Intent] = {
    "up": Intent.UP,
    "down": Intent.DOWN,
    "left": Intent.LEFT,
    "right": Intent.RIGHT,
    "enter": Intent.CONFIRM,
    "pause": Intent.PAUSE,
    "quit": Intent.BACK,
    "restart": Intent.RESTART,
    "leaderboard": Intent.LEADERBOARD,
}

_IN_GAME = {AppState.PLAYING, AppState.PAUSED}


def to_intent(action: str | None, state: AppState) -> Intent | None:
    """Return the intent for *action* in *state*, or None if unbound.

    Space pauses during play and confirms everywhere else.
    """
    if not action:
        return None
    if action == "space":
        return Intent.PAUSE if state in _IN_GAME else Intent.CONFIRM
    return _FIXED.get(action)
