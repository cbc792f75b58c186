"""
Helpers for the gamification widgets (XP bar, level badge, streak counter).

Registered as template globals by ``levelup.routes.pages``.
"""


def xp_percent(current: float, maximum: float) -> float:
    """Fill percentage of the XP bar, clamped to 100."""
    if maximum <= 0:
        return 100.0
    return min(current / maximum * 100, 100.0)


def goal_percent(progress: float, total: float) -> float:
    """Fill percentage of a weekly goal bar, clamped to 100."""
    return xp_percent(progress, total)


def streak_label(streak: int) -> str:
    return f"{streak}-day streak"


def bar_height(score: int, max_score: int) -> float:
    """Height of a weekly-chart bar relative to the best day."""
    if max_score <= 0:
        return 0.0
    return score / max_score * 100
