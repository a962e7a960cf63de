"""
ActionResolver — Terminal Colors
ANSI color codes for CLI output
"""

import os
import sys

ELECTRIC_CYAN = "\033[38;5;51m"    # Headings / action names
MID_GRAY = "\033[38;5;250m"        # Muted labels
GLITCH_GREEN = "\033[38;5;46m"     # Success
GLITCH_RED = "\033[38;5;196m"      # Errors
AMBER = "\033[38;5;214m"           # Approval warnings

RED = GLITCH_RED
GREEN = GLITCH_GREEN
BOLD = "\033[1m"
RESET = "\033[0m"


def colors_enabled(stream=None) -> bool:
    """ANSI output only for terminals, and never when NO_COLOR is set."""
    stream = stream or sys.stdout
    if os.environ.get("NO_COLOR"):
        return False
    return hasattr(stream, "isatty") and stream.isatty()


def colorize(text: str, color: str, style: str = "") -> str:
    """Wrap text in color codes when the terminal supports them."""
    if not colors_enabled():
        return text
    return f"{style}{color}{text}{RESET}"
