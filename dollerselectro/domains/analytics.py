"""Dashboard number formatting."""

from __future__ import annotations


def format_percentage(value: float, total: float) -> str:
    if total == 0:
        return "0%"
    return f"{value / total * 100:.1f}%"


def calculate_growth(current: float, previous: float) -> float:
    """Percent change from `previous` to `current`; 100 when growing from zero."""
    if previous == 0:
        return 100 if current > 0 else 0
    return (current - previous) / previous * 100
