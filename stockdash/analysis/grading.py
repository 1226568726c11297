"""Shared helpers for clamping scores and mapping them to labels."""
import math

NEUTRAL_LABEL = ("Neutral", "#6B7280")


def clamp(value: float, low: float = 0, high: float = 100) -> float:
    return max(low, min(high, value))


def is_number(value) -> bool:
    """True for finite ints/floats. Booleans are rejected."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return not (math.isnan(value) or math.isinf(value))


def bucket(value: float, thresholds: list[tuple[float, int]], floor: int) -> int:
    """Return the score of the first threshold that value strictly exceeds.

    thresholds must be ordered from highest to lowest.
    """
    for limit, score in thresholds:
        if value > limit:
            return score
    return floor


def technical_label(score: float) -> tuple[str, str]:
    if score >= 70:
        return "Strong", "#10B981"
    elif score >= 40:
        return "Moderate", "#F59E0B"
    else:
        return "Weak", "#EF4444"


def fundamental_label(score: float) -> tuple[str, str]:
    if score >= 75:
        return "Excellent", "#059669"
    elif score >= 60:
        return "Good", "#0891b2"
    elif score >= 40:
        return "Fair", "#d97706"
    else:
        return "Poor", "#dc2626"
