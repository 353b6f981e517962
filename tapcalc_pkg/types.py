"""Type definitions, result dataclasses and error classes for TapCalc."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

NUMBER = "number"
OPERATOR = "operator"


@dataclass(frozen=True)
class Token:
    """A single lexical unit of an expression: a numeric literal or an operator."""

    kind: str
    text: str

    @property
    def is_operator(self) -> bool:
        return self.kind == OPERATOR


@dataclass(frozen=True)
class HistoryEntry:
    """A successfully evaluated expression and the result shown for it."""

    expression: str
    result: str

    def to_dict(self) -> dict[str, str]:
        return {"expression": self.expression, "result": self.result}


@dataclass
class EvalResult:
    """Result of evaluating an expression."""

    ok: bool
    result: str | None = None
    value: float | None = None
    error: str | None = None
    error_code: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result_dict: dict[str, Any] = {"ok": self.ok}
        if self.result is not None:
            result_dict["result"] = self.result
        if self.value is not None:
            result_dict["value"] = self.value
        if self.error is not None:
            result_dict["error"] = self.error
        if self.error_code is not None:
            result_dict["error_code"] = self.error_code
        return result_dict

    def __repr__(self) -> str:
        if not self.ok:
            return f"EvalResult(ok=False, error={self.error!r}, error_code={self.error_code!r})"
        return f"EvalResult(ok=True, result={self.result!r})"


class EvaluationError(Exception):
    """Raised when an expression cannot be reduced to a finite number."""

    default_code = "EVALUATION_ERROR"

    def __init__(self, message: str, code: str | None = None):
        self.message = message
        self.code = code or self.default_code
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


class InvalidNumberError(EvaluationError):
    """A token fails to parse as a numeric literal."""

    default_code = "INVALID_NUMBER"


class DivisionByZeroError(EvaluationError):
    """The right operand of a division is zero."""

    default_code = "DIVISION_BY_ZERO"


class MalformedExpressionError(EvaluationError):
    """Postfix evaluation does not reduce to exactly one value."""

    default_code = "MALFORMED_EXPRESSION"


class NonFiniteResultError(EvaluationError):
    """Arithmetic produced infinity or NaN."""

    default_code = "NON_FINITE_RESULT"
