"""Cross-platform single-keypress reader for the terminal frontend.

Handles arrow keys, WASD, and special keys without requiring Enter.
Works on macOS / Linux (tty+termios) and Windows (msvcrt).
"""

from __future__ import annotations

import os
import sys
import time

# -- shared key mapping --------------------------------------------------------

_KEY_MAP: dict[str, str] = {
    "w": "up",
    "W": "up",
    "s": "down",
    "S": "down",
    "a": "left",
    "A": "left",
    "d": "right",
    "D": "right",
    "q": "quit",
    "Q": "quit",
    "\x03": "interrupt",  # Ctrl-C
    "r": "restart",
    "R": "restart",
    "p": "pause",
    "P": "pause",
    "l": "leaderboard",
    "L": "leaderboard",
    " ": "space",
    "\r": "enter",
    "\n": "enter",
}

_ARROW_MAP: dict[str, str] = {
    "A": "up",
    "B": "down",
    "C": "right",
    "D": "left",
}

# Windows reports arrows as a 0x00/0xE0 prefix followed by a scan code.
_WIN_ARROW_MAP: dict[str, str] = {
    "H": "up",
    "P": "down",
    "M": "right",
    "K": "left",
}


def _resolve(ch: str) -> str:
    """Map a raw character to its action string."""
    return _KEY_MAP.get(ch, "")


# -- public API ----------------------------------------------------------------


def get_key_timeout(timeout: float) -> str | None:
    """Read a single keypress, waiting at most *timeout* seconds.

    Returns ``None`` if no key arrived in time, otherwise one of:
        "up", "down", "left", "right"  (arrows / WASD)
        "enter", "space", "pause", "restart", "leaderboard"
        "quit"                          (q / bare Escape)
        "interrupt"                     (Ctrl-C)
        ""                              (unrecognised key)

    Uses ``os.read`` (unbuffered) so that ``select`` accurately
    reflects pending bytes, which multi-byte arrow sequences need.
    """
    if os.name == "nt":
        return _get_key_timeout_windows(timeout)

    import select
    import termios
    import tty

    fd = sys.stdin.fileno()
    old = termios.tcgetattr(fd)
    try:
        tty.setraw(fd)
        ready, _, _ = select.select([fd], [], [], timeout)
        if not ready:
            return None

        ch = os.read(fd, 1).decode("utf-8", errors="ignore")

        # Arrow keys: ESC [ A/B/C/D
        if ch == "\x1b":
            r2, _, _ = select.select([fd], [], [], 0.05)
            if not r2:
                return "quit"  # bare Escape
            ch2 = os.read(fd, 1).decode("utf-8", errors="ignore")
            if ch2 != "[":
                return "quit"
            r3, _, _ = select.select([fd], [], [], 0.05)
            if not r3:
                return ""
            ch3 = os.read(fd, 1).decode("utf-8", errors="ignore")
            return _ARROW_MAP.get(ch3, "")

        return _resolve(ch)
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, old)


def _get_key_timeout_windows(timeout: float) -> str | None:
    import msvcrt  # type: ignore[import-not-found]

    end = time.monotonic() + timeout
    while time.monotonic() < end:
        if msvcrt.kbhit():
            ch = msvcrt.getwch()
            if ch in ("\x00", "\xe0"):
                return _WIN_ARROW_MAP.get(msvcrt.getwch(), "")
            if ch == "\x1b":
                return "quit"
            return _resolve(ch)
        time.sleep(0.01)
    return None
