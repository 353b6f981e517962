#!/usr/bin/env python3
"""
TapCalc - Keypad Calculator

Main entry point for the TapCalc calculator. This file is a thin wrapper that
delegates all functionality to the tapcalc_pkg package.

Usage:
    python tapcalc.py                    # Interactive REPL
    python tapcalc.py -e "2+3×4"         # Evaluate expression
    python tapcalc.py -k "200+50%="      # Replay keypad keys
    python tapcalc.py --help             # Show help
"""

from __future__ import annotations

import sys


def main() -> int:
    """
    Main entry point for TapCalc.

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    from tapcalc_pkg.cli import main_entry

    try:
        return main_entry(sys.argv[1:])
    except KeyboardInterrupt:
        print("\nInterrupted by user.")
        return 1


if __name__ == "__main__":
    sys.exit(main())
