"""
Static page content for the dashboard, stats and plan screens.

Progress, season statistics and the training plan are fixed demo data until
wrestler records are stored per account.
"""

from typing import Optional

from levelup.models.progress import ProgressState, QuickStat

INITIAL_PROGRESS = ProgressState(xp=1240, level=12, streak=7, xp_max=2000)

TODAYS_MISSION = {
    "title": "Upload your last match",
    "reward": "+150 XP • AI Analysis",
    "href": "/upload",
    "action": "UPLOAD NOW",
}

QUICK_STATS = [
    QuickStat(value="72%", label="WIN RATE"),
    QuickStat(value="84", label="AVG TECH SCORE"),
    QuickStat(value="11", label="DAYS TO STATE"),
]

# Stats page

STATS_TABS = {"overview": "Overview", "matches": "Match History"}
DEFAULT_STATS_TAB = "overview"

SEASON_STATS = [
    {"label": "RECORD", "value": "18-4", "trend": "82% win rate"},
    {"label": "AVG SCORE", "value": "84", "trend": "+6 this month"},
    {"label": "TAKEDOWNS/MATCH", "value": "3.2", "trend": "+0.8 vs last month"},
    {"label": "PIN RATE", "value": "28%", "trend": None},
]

WEEKLY_SCORES = [
    {"day": "Mon", "score": 72},
    {"day": "Tue", "score": 78},
    {"day": "Wed", "score": 65},
    {"day": "Thu", "score": 82},
    {"day": "Fri", "score": 88},
    {"day": "Sat", "score": 91},
    {"day": "Sun", "score": 85},
]

MATCH_HISTORY = [
    {"opponent": "Jake M.", "result": "W", "score": 88, "method": "Tech Fall", "date": "Feb 8"},
    {"opponent": "Ryan K.", "result": "W", "score": 76, "method": "Decision 8-4", "date": "Feb 5"},
    {"opponent": "Tyler S.", "result": "L", "score": 62, "method": "Decision 3-6", "date": "Feb 1"},
    {"opponent": "Alex P.", "result": "W", "score": 91, "method": "Pin 2:34", "date": "Jan 28"},
    {"opponent": "Sam R.", "result": "W", "score": 84, "method": "Decision 11-5", "date": "Jan 25"},
]

POSITION_BREAKDOWN = [
    {"position": "Standing", "score": 82, "trend": "up", "change": "+5"},
    {"position": "Top", "score": 78, "trend": "up", "change": "+3"},
    {"position": "Bottom", "score": 71, "trend": "down", "change": "-2"},
    {"position": "Scrambles", "score": 68, "trend": "up", "change": "+8"},
]

# Plan page

WEEK_DAYS = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
FIRST_DAY_OF_MONTH_SHOWN = 10
DEFAULT_PLAN_DAY = 3  # Thursday

TODAY_PLAN = [
    {
        "time": "3:30 PM",
        "title": "Pre-Practice Mobility",
        "duration": "15 min",
        "type": "warmup",
        "completed": True,
        "drills": ["Hip circles x20", "Band pull-aparts x15", "Sprawl series x10"],
    },
    {
        "time": "4:00 PM",
        "title": "Team Practice",
        "duration": "90 min",
        "type": "practice",
        "completed": False,
        "drills": ["Focus: Level changes from yesterday's analysis", "Partner drill: Snap-go series"],
    },
    {
        "time": "5:30 PM",
        "title": "AI Drill Circuit",
        "duration": "20 min",
        "type": "ai-drills",
        "completed": False,
        "drills": ["10x Chain wrestling shots", "5x30s Sprawl + shot reaction", "3x8 Tight-waist tilts from top"],
    },
    {
        "time": "6:00 PM",
        "title": "Film Review",
        "duration": "15 min",
        "type": "review",
        "completed": False,
        "drills": ["Review today's live wrestling clips", "Tag key moments for AI analysis"],
    },
]

WEEKLY_GOALS = [
    {"goal": "Upload 3 match videos", "progress": 1, "total": 3},
    {"goal": "Complete all AI drill circuits", "progress": 4, "total": 6},
    {"goal": "Hit 85+ average tech score", "progress": 82, "total": 85},
    {"goal": "Maintain 7-day streak", "progress": 7, "total": 7},
]

UPCOMING_EVENTS = [
    {"name": "Dual Meet vs Lincoln", "date": "Feb 15", "days_away": 3, "type": "competition"},
    {"name": "State Qualifier", "date": "Feb 22", "days_away": 10, "type": "tournament"},
    {"name": "State Championships", "date": "Mar 1", "days_away": 17, "type": "championship"},
]


def resolve_stats_tab(tab: str) -> str:
    return tab if tab in STATS_TABS else DEFAULT_STATS_TAB


def resolve_plan_day(day: Optional[str]) -> int:
    """Weekday index from a query value, or Thursday when missing or invalid."""
    if not day or not (day.isascii() and day.isdigit()):
        return DEFAULT_PLAN_DAY
    index = int(day)
    return index if index < len(WEEK_DAYS) else DEFAULT_PLAN_DAY
