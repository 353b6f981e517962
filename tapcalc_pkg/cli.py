from __future__ import annotations

import argparse
import json
from typing import Any

from . import config as _config
from .api import evaluate, run_keys
from .config import VERSION
from .controller import Calculator
from .keymap import KEYPAD
from .logging_config import get_logger, setup_logging

logger = get_logger("cli")

# Commands recognised by the REPL; any other line is typed on the keypad
REPL_COMMANDS = {
    "help",
    "history",
    "clearhistory",
    "keypad",
    "quit",
    "exit",
}

# ASCII stand-ins for keypad glyphs that are awkward to type in a terminal
TERMINAL_KEY_ALIASES = {
    "c": "C",
    "<": "Backspace",
    "~": "±",
}


def expand_terminal_keys(line: str) -> list[str]:
    """Turn a typed line into key names, applying terminal aliases.

    Args:
        line: Characters as typed (e.g., "12+3=", "5~<")

    Returns:
        List of key names understood by :func:`tapcalc_pkg.keymap.map_key`
    """
    return [TERMINAL_KEY_ALIASES.get(char, char) for char in line if not char.isspace()]


def _health_check() -> int:
    """Run health check to verify basic operations.

    Returns:
        Exit code (0 for success, non-zero for failures)
    """
    checks_passed = 0
    checks_failed = 0

    print("Running TapCalc health check...")
    print("-" * 50)

    result = evaluate("2+3×4")
    if result.ok and result.result == "14":
        print("[OK] Operator precedence works")
        checks_passed += 1
    else:
        print(f"[FAIL] Precedence check failed: {result}")
        checks_failed += 1

    result = evaluate("5÷0")
    if not result.ok and result.error_code == "DIVISION_BY_ZERO":
        print("[OK] Division by zero is reported")
        checks_passed += 1
    else:
        print(f"[FAIL] Division check failed: {result}")
        checks_failed += 1

    calc = run_keys("200+50%=")
    if calc.display == "200.5" and len(calc.history) == 1:
        print("[OK] Keypad replay and history work")
        checks_passed += 1
    else:
        print(f"[FAIL] Keypad check failed: {calc}")
        checks_failed += 1

    print("-" * 50)
    print(f"Results: {checks_passed} passed, {checks_failed} failed")

    if checks_failed > 0:
        print("\n[WARN] Some health checks failed.")
        return 1

    print("\n[OK] All health checks passed!")
    return 0


def print_result_pretty(res: dict[str, Any], output_format: str = "human") -> None:
    """Print an evaluation result in the specified format.

    Args:
        res: Result dictionary
        output_format: "json" for JSON output, "human" for human-readable
    """
    if output_format == "json":
        print(json.dumps(res, indent=2, ensure_ascii=False))
        return
    if not res.get("ok"):
        print(f"Error: {res.get('error')} ({res.get('error_code')})")
        return
    print(res.get("result"))


def print_history(calc: Calculator, output_format: str = "human") -> None:
    entries = calc.history_entries()
    if output_format == "json":
        print(json.dumps([entry.to_dict() for entry in entries], indent=2, ensure_ascii=False))
        return
    if not entries:
        print("No calculations yet.")
        return
    for entry in entries:
        print(f"{entry.expression} = {entry.result}")


def print_keypad() -> None:
    for row in KEYPAD:
        print(" ".join(f"[{label:^3}]" for label, _ in row))


def print_help_text() -> None:
    print(
        """TapCalc - keypad calculator

Type keys and press Enter; the display is shown after each line.
  0-9 .          digits and decimal point
  + - * / × ÷    operators (* and / are shown as × and ÷)
  =              evaluate
  %              percent of the current number
  ~ or ±         toggle the sign of the current number
  < or ⌫         backspace
  c or C         clear

Commands:
  history        show recent calculations (newest first)
  clearhistory   forget all recent calculations
  keypad         show the button layout
  help           show this text
  quit, exit     leave"""
    )


def repl_loop(calc: Calculator | None = None) -> None:
    """Interactive REPL loop with graceful interrupt handling."""
    try:
        import readline  # noqa: F401
    except (ImportError, ModuleNotFoundError):
        # readline not available on Windows - that's fine
        pass

    if calc is None:
        calc = Calculator()

    print("TapCalc: type 'help' for commands, 'quit' to exit.")
    print(calc.display)

    while True:
        try:
            raw = input(">>> ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\nGoodbye.")
            break
        if not raw:
            continue

        command = raw.lower()
        if command in REPL_COMMANDS:
            if command in ("quit", "exit"):
                print("Goodbye.")
                break
            if command == "help":
                print_help_text()
            elif command == "history":
                print_history(calc)
            elif command == "clearhistory":
                calc.clear_history()
                print("History cleared.")
            elif command == "keypad":
                print_keypad()
            continue

        run_keys(expand_terminal_keys(raw), calc)
        print(calc.display)


def main_entry(argv: list[str] | None = None) -> int:
    """
    Main entry point for TapCalc CLI.

    Args:
        argv: Optional command-line arguments (defaults to sys.argv)

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    parser = argparse.ArgumentParser(prog="tapcalc")
    parser.add_argument(
        "-e",
        "--eval",
        type=str,
        help="Evaluate one expression and exit (non-interactive)",
        dest="eval_expr",
    )
    parser.add_argument(
        "-k",
        "--keys",
        type=str,
        help="Replay a sequence of keypad keys (e.g. '12+3=') and print the display",
    )
    parser.add_argument(
        "--format",
        type=str,
        choices=["json", "human"],
        default="human",
        help="Output format: json (machine-readable) or human (human-readable)",
    )
    parser.add_argument(
        "--history-size", type=int, help="Number of calculations kept in history (default: 8)"
    )
    parser.add_argument(
        "-v", "--version", action="store_true", help="Show program version"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Set logging level (default: TAPCALC_LOG_LEVEL or WARNING)",
    )
    parser.add_argument("--log-file", type=str, help="Write logs to file")
    parser.add_argument(
        "--health-check",
        action="store_true",
        help="Run health check and verify basic operations",
    )
    args = parser.parse_args(argv)
    output_format = args.format

    setup_logging(level=args.log_level, log_file=args.log_file)

    # Apply CLI configuration overrides
    if args.history_size and args.history_size > 0:
        _config.HISTORY_SIZE = int(args.history_size)
        logger.debug("History size set to %d", _config.HISTORY_SIZE)

    if args.version:
        print(VERSION)
        return 0
    if args.health_check:
        return _health_check()
    if args.eval_expr is not None:
        expr = args.eval_expr.strip()
        if not expr:
            print("Error: Empty input. Please enter an expression.")
            return 1
        result = evaluate(expr)
        print_result_pretty(result.to_dict(), output_format)
        return 0 if result.ok else 1
    if args.keys is not None:
        calc = run_keys(expand_terminal_keys(args.keys))
        if output_format == "json":
            payload = {
                "display": calc.display,
                "error": calc.is_error,
                "history": [entry.to_dict() for entry in calc.history_entries()],
            }
            print(json.dumps(payload, indent=2, ensure_ascii=False))
        else:
            print(calc.display)
            if len(calc.history):
                print("History:")
                print_history(calc)
        return 1 if calc.is_error else 0

    repl_loop()
    return 0


if __name__ == "__main__":
    """Allow running the CLI module directly with python -m tapcalc_pkg.cli"""
    import sys

    sys.exit(main_entry())
