"""Keypad layout and keyboard-to-event mapping."""

from __future__ import annotations

from .config import KEYBOARD_ALIASES, OPERATORS

DIGIT = "digit"
DOT = "dot"
OPERATOR = "operator"
BACKSPACE = "backspace"
CLEAR = "clear"
PERCENT = "percent"
TOGGLE_SIGN = "toggle-sign"
EQUALS = "equals"

EVENT_KINDS = (DIGIT, DOT, OPERATOR, BACKSPACE, CLEAR, PERCENT, TOGGLE_SIGN, EQUALS)

# Button grid, row by row, as (label, kind)
KEYPAD = (
    (("C", CLEAR), ("⌫", BACKSPACE), ("%", PERCENT), ("÷", OPERATOR)),
    (("7", DIGIT), ("8", DIGIT), ("9", DIGIT), ("×", OPERATOR)),
    (("4", DIGIT), ("5", DIGIT), ("6", DIGIT), ("-", OPERATOR)),
    (("1", DIGIT), ("2", DIGIT), ("3", DIGIT), ("+", OPERATOR)),
    (("±", TOGGLE_SIGN), ("0", DIGIT), (".", DOT), ("=", EQUALS)),
)

_NAMED_KEYS = {
    "Enter": (EQUALS, None),
    "=": (EQUALS, None),
    "Backspace": (BACKSPACE, None),
    "Escape": (CLEAR, None),
}

# Keypad glyphs that have no keyboard counterpart
_GLYPH_KEYS = {
    "C": (CLEAR, None),
    "⌫": (BACKSPACE, None),
    "%": (PERCENT, None),
    "±": (TOGGLE_SIGN, None),
}


def map_key(key: str) -> tuple[str, str | None] | None:
    """Translate a key name or keypad label into an input event.

    Args:
        key: Key name as a front end reports it (e.g., "7", "*", "Enter")

    Returns:
        ``(kind, value)`` tuple, or None if the key has no meaning here

    Example:
        >>> map_key("*")
        ('operator', '×')
        >>> map_key("Escape")
        ('clear', None)
    """
    if len(key) == 1 and key.isdigit() and key.isascii():
        return DIGIT, key
    if key == ".":
        return DOT, None
    if key in KEYBOARD_ALIASES:
        return OPERATOR, KEYBOARD_ALIASES[key]
    if key in OPERATORS:
        return OPERATOR, key
    if key in _NAMED_KEYS:
        return _NAMED_KEYS[key]
    return _GLYPH_KEYS.get(key)
