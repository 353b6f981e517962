"""Calculator state owned by a single controller object.

The front end forwards every button press or key press to a :class:`Calculator`
and renders ``display`` and ``history`` afterwards. The expression string only
ever changes through the edit functions in :mod:`tapcalc_pkg.buffer` and through
evaluation.
"""

from __future__ import annotations

from typing import Callable

from . import buffer
from .config import DEFAULT_EXPRESSION, ERROR_SENTINEL
from .evaluator import evaluate_safely
from .history import History
from .keymap import (
    BACKSPACE,
    CLEAR,
    DIGIT,
    DOT,
    EQUALS,
    OPERATOR,
    PERCENT,
    TOGGLE_SIGN,
    map_key,
)
from .logging_config import get_logger
from .types import EvalResult, HistoryEntry

logger = get_logger("controller")


class Calculator:
    """Expression buffer plus history for one calculator widget."""

    def __init__(self, history_size: int | None = None):
        self.expression = DEFAULT_EXPRESSION
        self.history = History(history_size)
        self._handlers: dict[str, Callable[[str | None], object]] = {
            DIGIT: lambda value: self.digit(value or ""),
            DOT: lambda value: self.dot(),
            OPERATOR: lambda value: self.operator(value or ""),
            BACKSPACE: lambda value: self.backspace(),
            CLEAR: lambda value: self.clear(),
            PERCENT: lambda value: self.percent(),
            TOGGLE_SIGN: lambda value: self.toggle_sign(),
            EQUALS: lambda value: self.evaluate(),
        }

    @property
    def display(self) -> str:
        return self.expression

    @property
    def is_error(self) -> bool:
        return self.expression == ERROR_SENTINEL

    def _apply(self, edit: Callable[..., str], *args: str) -> str:
        if self.is_error:
            logger.debug("Leaving error state on %s", edit.__name__)
        self.expression = edit(self.expression, *args)
        return self.expression

    def digit(self, digit: str) -> str:
        return self._apply(buffer.append_digit, digit)

    def dot(self) -> str:
        return self._apply(buffer.append_dot)

    def operator(self, op: str) -> str:
        return self._apply(buffer.append_operator, op)

    def backspace(self) -> str:
        return self._apply(buffer.backspace)

    def clear(self) -> str:
        return self._apply(buffer.clear)

    def percent(self) -> str:
        return self._apply(buffer.apply_percent)

    def toggle_sign(self) -> str:
        return self._apply(buffer.toggle_sign)

    def evaluate(self) -> EvalResult:
        """Evaluate the current expression and replace it with the result.

        On success the result becomes the new expression and a history entry is
        recorded. On failure the display switches to the error sentinel and the
        history is left untouched.
        """
        expression = self.expression
        data = evaluate_safely(expression)
        if not data["ok"]:
            logger.info("Evaluation failed for %r: %s", expression, data["error_code"])
            self.expression = ERROR_SENTINEL
            return EvalResult(ok=False, error=data["error"], error_code=data["error_code"])

        result = data["result"]
        self.history.add(expression, result)
        self.expression = result
        logger.debug("Evaluated %r = %s", expression, result)
        return EvalResult(ok=True, result=result, value=data["value"])

    def press(self, kind: str, value: str | None = None) -> str:
        """Dispatch one input event. Unknown kinds are ignored."""
        handler = self._handlers.get(kind)
        if handler is None:
            logger.debug("Ignoring unknown input kind %r", kind)
            return self.expression
        handler(value)
        return self.expression

    def handle_key(self, key: str) -> bool:
        """Dispatch a keyboard key. Returns False if the key has no meaning here."""
        event = map_key(key)
        if event is None:
            return False
        self.press(*event)
        return True

    def clear_history(self) -> None:
        self.history.clear()

    def history_entries(self) -> list[HistoryEntry]:
        return self.history.entries()

    def __repr__(self) -> str:
        return f"Calculator(expression={self.expression!r}, history={len(self.history)})"
