"""TapCalc package: expression buffer, evaluator, calculator controller and CLI."""

__all__ = [
    "config",
    "parser",
    "evaluator",
    "buffer",
    "history",
    "keymap",
    "controller",
    "cli",
    "types",
    "api",
    "logging_config",
]

# Public API exports

__api_exports__ = [
    "evaluate",
    "validate_expression",
    "run_keys",
]
