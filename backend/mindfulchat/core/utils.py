"""
Utility functions for the application.
"""
from datetime import datetime, timezone
from typing import Iterable, Optional


def utcnow() -> datetime:
    """Naive UTC timestamp, the form stored in DateTime columns."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def clamp(value: float, low: float, high: float) -> float:
    """Clamp value into the closed interval [low, high]."""
    return max(low, min(high, value))


def mean(values: Iterable[float]) -> Optional[float]:
    """Arithmetic mean, or None for an empty sequence."""
    items = list(values)
    if not items:
        return None
    return sum(items) / len(items)
