"""Centralized configuration for TapCalc.

This module defines:
- The operator set, precedence table and keyboard aliases
- The error sentinel shown on the display after a failed evaluation
- History capacity and the default log level
- Regex patterns for parsing numeric literals

Configuration can be overridden via:
- CLI flags (see cli.py)
- Environment variables (prefixed with TAPCALC_)
"""

import os
import re

try:
    import importlib.metadata

    VERSION = importlib.metadata.version("tapcalc")
except Exception:
    # Fallback if package not installed
    VERSION = "1.0.0"

# Display state
DEFAULT_EXPRESSION = "0"
ERROR_SENTINEL = "Error"

# Operators as they appear in the expression string
OPERATORS = ("+", "-", "×", "÷")
SIGN_OPERATORS = ("+", "-")
PRECEDENCE = {"+": 1, "-": 1, "×": 2, "÷": 2}

# ASCII keyboard operators and their display equivalents
KEYBOARD_ALIASES = {"*": "×", "/": "÷"}

# History capacity (can be overridden via environment variables)
HISTORY_SIZE = int(os.getenv("TAPCALC_HISTORY_SIZE", "8"))

LOG_LEVEL = os.getenv("TAPCALC_LOG_LEVEL", "WARNING")

# Strict decimal literal: optional sign, digits with at most one dot
NUMBER_REGEX = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)")
DIGIT_REGEX = re.compile(r"[0-9]")
