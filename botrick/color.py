"""mIRC colour codes for outgoing chat messages."""

from __future__ import annotations

import re
from enum import Enum

COLOR_CHAR = "\x03"

_FORMATTING_RE = re.compile(r"\x03(?:\d{1,2}(?:,\d{1,2})?)?|[\x02\x0f\x11\x16\x1d\x1e\x1f]")


class Color(Enum):
    """Named mIRC colours; the value is the two-digit wire code."""

    WHITE = "00"
    BLACK = "01"
    BLUE = "02"
    GREEN = "03"
    RED = "04"
    BROWN = "05"
    MAGENTA = "06"
    ORANGE = "07"
    YELLOW = "08"
    LIGHT_GREEN = "09"
    CYAN = "10"
    LIGHT_CYAN = "11"
    LIGHT_BLUE = "12"
    PINK = "13"
    GRAY = "14"
    LIGHT_GRAY = "15"
    DEFAULT = "99"
    RESET = ""

    def __str__(self) -> str:
        return self.value


def color_code(color: Color | int) -> str:
    """Return the wire code for a named colour or a numeric colour (0-255)."""
    if isinstance(color, Color):
        return color.value
    if isinstance(color, bool) or not isinstance(color, int):
        raise TypeError(f"expected a Color or an int, got {type(color).__name__}")
    if not 0 <= color <= 255:
        raise ValueError(f"colour number out of range: {color}")
    return f"{color:02d}"


def colors(fg: Color | int, bg: Color | int | None = None) -> str:
    """Return the control sequence that switches to the given colours."""
    if fg is Color.RESET:
        return COLOR_CHAR
    if bg is not None:
        return f"{COLOR_CHAR}{color_code(fg)},{color_code(bg)}"
    return f"{COLOR_CHAR}{color_code(fg)}"


def colorize(fg: Color | int, bg: Color | int | None, message: str) -> str:
    """Wrap ``message`` in the given colours, resetting afterwards."""
    return f"{colors(fg, bg)}{message}{colors(Color.RESET)}"


def strip_formatting(text: str) -> str:
    """Remove IRC colour and formatting control codes from ``text``."""
    return _FORMATTING_RE.sub("", text)