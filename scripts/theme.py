"""ANSI color helpers for terminal output.

Styling is disabled when stdout is not a TTY unless FORCE_COLOR is set,
and always disabled when NO_COLOR is present. Both are checked per call.
"""

from __future__ import annotations

import os
import sys


def _truthy_env(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() in {"1", "true", "yes", "on"}


def colors_enabled() -> bool:
    if os.environ.get("NO_COLOR") is not None:
        return False
    if _truthy_env("FORCE_COLOR"):
        return True
    return sys.stdout.isatty()


RESET = "0"
BOLD = "1"
DIM = "2"
GREEN = "32"
YELLOW = "33"
BRIGHT_RED = "91"
BRIGHT_GREEN = "92"
BRIGHT_YELLOW = "93"
BRIGHT_BLUE = "94"
BRIGHT_MAGENTA = "95"
BRIGHT_CYAN = "96"
BRIGHT_WHITE = "97"

DAY_COLORS = {
    'monday': BRIGHT_GREEN,
    'tuesday': BRIGHT_BLUE,
    'wednesday': BRIGHT_RED,
    'thursday': BRIGHT_YELLOW,
    'friday': BRIGHT_MAGENTA,
    'saturday': BRIGHT_CYAN,
    'sunday': BRIGHT_WHITE,
}


def color(text: str, *styles: str) -> str:
    """Wrap text in the given SGR codes, or return it untouched when disabled."""
    if not styles or not colors_enabled():
        return text
    return f"\033[{';'.join(styles)}m{text}\033[{RESET}m"


def day_color(day: str) -> str:
    return DAY_COLORS.get(day, BRIGHT_WHITE)
