"""Expression evaluation: tokenize, convert to postfix, reduce on a value stack."""

from __future__ import annotations

import math
import operator
from typing import Any, Callable

from .logging_config import get_logger
from .parser import format_number, normalize_expression, parse_number, to_postfix, tokenize
from .types import (
    DivisionByZeroError,
    EvaluationError,
    MalformedExpressionError,
    NonFiniteResultError,
    Token,
)

logger = get_logger("evaluator")

_BINARY_OPS: dict[str, Callable[[float, float], float]] = {
    "+": operator.add,
    "-": operator.sub,
    "×": operator.mul,
    "÷": operator.truediv,
}


def evaluate_postfix(postfix: list[Token]) -> float:
    """Reduce a postfix token sequence to a single finite number.

    Raises:
        InvalidNumberError: A numeric token is not a valid literal.
        DivisionByZeroError: The right operand of ``÷`` is zero.
        MalformedExpressionError: The sequence does not reduce to one value.
        NonFiniteResultError: The result is infinite or NaN.
    """
    stack: list[float] = []

    for token in postfix:
        if not token.is_operator:
            stack.append(parse_number(token.text))
            continue
        if len(stack) < 2:
            raise MalformedExpressionError(f"Missing operand for '{token.text}'")
        b = stack.pop()
        a = stack.pop()
        if token.text == "÷" and b == 0:
            raise DivisionByZeroError("Division by zero")
        stack.append(_BINARY_OPS[token.text](a, b))

    if len(stack) != 1:
        raise MalformedExpressionError("Could not resolve expression")

    result = stack[0]
    if not math.isfinite(result):
        raise NonFiniteResultError(f"Result is not finite: {result}")
    return result


def evaluate(expression: str) -> float:
    """Evaluate an arithmetic expression over ``+ - × ÷``.

    ``*`` and ``/`` are accepted as aliases for ``×`` and ``÷``. Multiplication and
    division bind tighter than addition and subtraction; equal precedence groups
    left to right.

    Example:
        >>> evaluate("2+3×4")
        14.0
        >>> evaluate("5+-3")
        2.0

    Raises:
        EvaluationError: One of its subclasses, describing why the expression
            has no value.
    """
    tokens = tokenize(normalize_expression(expression))
    return evaluate_postfix(to_postfix(tokens))


def evaluate_safely(expression: str) -> dict[str, Any]:
    """Evaluate an expression and report the outcome as a dictionary.

    Never raises. On success the dictionary holds the display string under
    ``result`` and the float under ``value``; on failure it holds ``error`` and
    ``error_code``.
    """
    try:
        value = evaluate(expression)
    except EvaluationError as e:
        logger.debug("Evaluation of %r failed: %s (%s)", expression, e, e.code)
        return {"ok": False, "error": str(e), "error_code": e.code}
    return {"ok": True, "result": format_number(value), "value": value}
