"""Public API for TapCalc - returns structured objects without side effects."""

from __future__ import annotations

from typing import Iterable

from .controller import Calculator
from .evaluator import evaluate_safely
from .logging_config import get_logger
from .parser import normalize_expression, parse_number, to_postfix, tokenize
from .types import EvalResult, InvalidNumberError

logger = get_logger("api")


def evaluate(expression: str) -> EvalResult:
    """Evaluate an arithmetic expression.

    Args:
        expression: Expression string (e.g., "2+3×4", "7/2")

    Returns:
        EvalResult with the display string and float value, or an error code

    Example:
        >>> from tapcalc_pkg.api import evaluate
        >>> evaluate("2+3×4").result
        '14'
        >>> evaluate("5÷0").error_code
        'DIVISION_BY_ZERO'
    """
    data = evaluate_safely(expression)
    if not data.get("ok"):
        return EvalResult(
            ok=False,
            error=data.get("error") or "Unknown error",
            error_code=data.get("error_code"),
        )
    return EvalResult(ok=True, result=data.get("result"), value=data.get("value"))


def validate_expression(expression: str) -> tuple[bool, str | None]:
    """Check that an expression is well formed without computing it.

    Every number must be a valid literal and operators must alternate with
    operands. Division by zero and overflow are only detected by evaluating.

    Args:
        expression: Expression string to validate

    Returns:
        Tuple of (is_valid, error_message)

    Example:
        >>> from tapcalc_pkg.api import validate_expression
        >>> validate_expression("2+2")
        (True, None)
        >>> validate_expression("2+")
        (False, "Missing operand for '+'")
    """
    depth = 0
    try:
        for token in to_postfix(tokenize(normalize_expression(expression))):
            if not token.is_operator:
                parse_number(token.text)
                depth += 1
            elif depth < 2:
                return False, f"Missing operand for '{token.text}'"
            else:
                depth -= 1
    except InvalidNumberError as e:
        return False, str(e)
    if depth != 1:
        return False, "Could not resolve expression"
    return True, None


def run_keys(keys: Iterable[str], calculator: Calculator | None = None) -> Calculator:
    """Replay a sequence of keys through a calculator.

    Args:
        keys: Key names or single characters (e.g., "12+3=" or ["1", "Enter"])
        calculator: Calculator to drive (a fresh one is created if omitted)

    Returns:
        The calculator after the last key

    Example:
        >>> from tapcalc_pkg.api import run_keys
        >>> run_keys("2+3*4=").display
        '14'
    """
    if calculator is None:
        calculator = Calculator()
    for key in keys:
        if not calculator.handle_key(key):
            logger.debug("Skipping unmapped key %r", key)
    return calculator
