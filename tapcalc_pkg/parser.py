"""Expression scanning and formatting module.

This module handles:
- Normalizing keyboard operators to their display symbols
- Deciding whether an operator is a unary sign or a binary operator
- Tokenizing an expression string and converting it to postfix order
- Locating the trailing numeric run that percent and sign toggle edit
- Formatting numbers for the display
"""

from __future__ import annotations

from decimal import Decimal

from .config import KEYBOARD_ALIASES, NUMBER_REGEX, OPERATORS, PRECEDENCE, SIGN_OPERATORS
from .types import NUMBER, OPERATOR, InvalidNumberError, Token


def is_operator(char: str | None) -> bool:
    """Return True if ``char`` is one of the four display operators."""
    return char is not None and char in OPERATORS


def is_unary_position(previous: str | None) -> bool:
    """Return True if an operator following ``previous`` acts as a sign.

    ``previous`` is whatever precedes the operator: the previous character of the
    expression string, or the text of the previous token while tokenizing. ``None``
    means the operator starts the expression. Both the tokenizer and
    :func:`split_current_number` go through this one check so that they agree on
    which operators separate operands.
    """
    return previous is None or is_operator(previous)


def normalize_expression(expression: str) -> str:
    """Replace ASCII keyboard operators (``*``, ``/``) with ``×`` and ``÷``."""
    for ascii_op, display_op in KEYBOARD_ALIASES.items():
        expression = expression.replace(ascii_op, display_op)
    return expression


def tokenize(expression: str) -> list[Token]:
    """Split an expression into number and operator tokens.

    A ``+`` or ``-`` in unary position is folded into the number that follows it.
    Characters that are neither operators nor whitespace are collected into the
    number buffer as-is; :func:`parse_number` rejects anything that is not a valid
    literal later on.

    Args:
        expression: Normalized expression (e.g., "2+3×4", "5×-3")

    Returns:
        List of tokens in infix order
    """
    tokens: list[Token] = []
    number_buffer = ""

    for char in expression:
        if char.isspace():
            if number_buffer:
                tokens.append(Token(NUMBER, number_buffer))
                number_buffer = ""
            continue

        if is_operator(char):
            if number_buffer:
                tokens.append(Token(NUMBER, number_buffer))
                number_buffer = ""
            previous = tokens[-1].text if tokens else None
            if char in SIGN_OPERATORS and is_unary_position(previous):
                number_buffer = char
            else:
                tokens.append(Token(OPERATOR, char))
            continue

        number_buffer += char

    if number_buffer:
        tokens.append(Token(NUMBER, number_buffer))

    return tokens


def to_postfix(tokens: list[Token]) -> list[Token]:
    """Convert infix tokens to postfix order (shunting-yard)."""
    output: list[Token] = []
    stack: list[Token] = []

    for token in tokens:
        if not token.is_operator:
            output.append(token)
            continue
        while stack and PRECEDENCE[stack[-1].text] >= PRECEDENCE[token.text]:
            output.append(stack.pop())
        stack.append(token)

    while stack:
        output.append(stack.pop())

    return output


def parse_number(text: str) -> float:
    """Parse a strict decimal literal.

    Raises:
        InvalidNumberError: If ``text`` is not digits with at most one dot and an
            optional leading sign. Exponents, ``inf`` and ``nan`` are rejected.
    """
    if not NUMBER_REGEX.fullmatch(text):
        raise InvalidNumberError(f"Invalid number: {text!r}")
    return float(text)


def split_current_number(expression: str) -> tuple[str, str]:
    """Split an expression into (prefix, trailing numeric run).

    The prefix ends with the last binary operator. An empty trailing run is
    reported as ``"0"``.

    Example:
        >>> split_current_number("200+50")
        ('200+', '50')
        >>> split_current_number("5×-3")
        ('5×', '-3')
    """
    last_binary = -1
    previous = None
    for index, char in enumerate(expression):
        if is_operator(char) and not is_unary_position(previous):
            last_binary = index
        previous = char
    prefix = expression[: last_binary + 1]
    number = expression[last_binary + 1 :] or "0"
    return prefix, number


def format_number(value: float) -> str:
    """Format a number for the calculator display.

    Uses the shortest digits that round-trip to the same float, written out in
    positional notation so the result can be edited and evaluated again.

    Args:
        value: Finite number to format

    Returns:
        Display string (e.g., "14", "0.5", "0.00000015")
    """
    if value == 0:
        return "0"
    text = format(Decimal(repr(float(value))), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text
