"""On-screen keypad for entering amounts."""

import math


BACKSPACE = "⌫"
CLEAR = "C"

KEYPAD_ROWS: list[list[str]] = [
    ["1", "2", "3"],
    ["4", "5", "6"],
    ["7", "8", "9"],
    [".", "0", BACKSPACE],
]


def apply_key(text: str, key: str) -> str:
    """Return the amount text after pressing `key`."""
    if key == BACKSPACE:
        return text[:-1]
    if key == CLEAR:
        return ""
    if key == "." and "." in text:
        return text
    return text + key


def parse_amount(text: str) -> float | None:
    """Parse keypad text, None if empty or not a finite number."""
    if not text or text == ".":
        return None
    try:
        value = float(text)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value
