"""
Strategy Priorities

Shared priority levels for matcher and extractor strategies (higher runs
first). Strategies may also declare a plain integer.
"""

from enum import Enum
from typing import Any


class StrategyPriority(Enum):
    """Priority levels for strategies (higher = tried first)."""
    CRITICAL = 100
    HIGH = 80
    NORMAL = 60
    LOW = 30
    FALLBACK = 0


def priority_value(strategy: Any) -> int:
    """Numeric priority of a strategy; missing priorities sort last."""
    priority = getattr(strategy, "priority", None)
    if priority is None:
        return 0
    return int(priority.value if hasattr(priority, "value") else priority)
