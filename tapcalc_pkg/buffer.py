"""Edit operations on the expression string.

Each function takes the current expression and returns the new one. None of them
raise: an edit that does not apply returns the expression unchanged. Any edit made
while the display shows the error sentinel starts over from ``"0"``.
"""

from __future__ import annotations

from .config import DEFAULT_EXPRESSION, DIGIT_REGEX, ERROR_SENTINEL
from .parser import format_number, is_operator, parse_number, split_current_number
from .types import InvalidNumberError


def _reset_if_error(state: str) -> str:
    if not state or state == ERROR_SENTINEL:
        return DEFAULT_EXPRESSION
    return state


def append_digit(state: str, digit: str) -> str:
    if not DIGIT_REGEX.fullmatch(digit):
        return state
    if state in (DEFAULT_EXPRESSION, ERROR_SENTINEL):
        return digit
    return state + digit


def append_dot(state: str) -> str:
    """Start or continue a decimal fraction in the current number."""
    state = _reset_if_error(state)
    _, number = split_current_number(state)
    if "." in number:
        return state
    if is_operator(state[-1]):
        return state + "0."
    return state + "."


def append_operator(state: str, op: str) -> str:
    """Append ``op``, replacing a trailing operator instead of stacking a second one."""
    if not is_operator(op):
        return state
    state = _reset_if_error(state)
    if is_operator(state[-1]):
        return state[:-1] + op
    return state + op


def backspace(state: str) -> str:
    if state == ERROR_SENTINEL or len(state) <= 1:
        return DEFAULT_EXPRESSION
    return state[:-1]


def clear(state: str) -> str:
    return DEFAULT_EXPRESSION


def apply_percent(state: str) -> str:
    """Divide the trailing number by 100 in place.

    Example:
        >>> apply_percent("200+50")
        '200+0.5'
    """
    state = _reset_if_error(state)
    prefix, number = split_current_number(state)
    try:
        value = parse_number(number)
    except InvalidNumberError:
        return state
    return prefix + format_number(value / 100)


def toggle_sign(state: str) -> str:
    """Add or remove a leading ``-`` on the trailing number. Zero has no sign."""
    state = _reset_if_error(state)
    prefix, number = split_current_number(state)
    if number == "0":
        return state
    if number.startswith("-"):
        # a lone sign has nothing left once removed
        return prefix + number[1:] or DEFAULT_EXPRESSION
    if number.startswith("+"):
        return prefix + "-" + number[1:]
    return prefix + "-" + number
