"""
Server-rendered page helpers: navigation, widgets, page content and the
upload analysis.
"""

from .navigation import NAV_ITEMS, NavItem, build_nav
from .widgets import xp_percent, goal_percent, streak_label, bar_height
from .analysis import analyze_video, UPLOAD_XP_REWARD

__all__ = [
    "NAV_ITEMS",
    "NavItem",
    "build_nav",
    "xp_percent",
    "goal_percent",
    "streak_label",
    "bar_height",
    "analyze_video",
    "UPLOAD_XP_REWARD"
]
