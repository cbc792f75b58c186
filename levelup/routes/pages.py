"""
Server-rendered pages: dashboard, upload, stats and training plan.
"""

from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Depends, File, Query, Request, UploadFile, status
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from levelup import config
from levelup.auth import get_current_user_optional
from levelup.views import build_nav, xp_percent, goal_percent, streak_label, bar_height, analyze_video
from levelup.views import content

router = APIRouter(tags=["Pages"])

TEMPLATES = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))
TEMPLATES.env.globals.update(
    app_name=config.APP_NAME,
    xp_percent=xp_percent,
    goal_percent=goal_percent,
    streak_label=streak_label,
    bar_height=bar_height,
)

MAX_UPLOAD_BYTES = 500 * 1024 * 1024
UPLOAD_CHUNK_SIZE = 1024 * 1024


def render(request: Request, template: str, context: Optional[dict] = None, status_code: int = 200):
    """Render a page with the navigation bar for the request path."""
    page_context = {"nav_items": build_nav(request.url.path)}
    page_context.update(context or {})
    return TEMPLATES.TemplateResponse(request, template, page_context, status_code=status_code)


@router.get("/", response_class=HTMLResponse)
async def dashboard(request: Request, user: Optional[dict] = Depends(get_current_user_optional)):
    """Progress dashboard with XP, level, streak and today's mission."""
    return render(request, "dashboard.html", {
        "user": user,
        "progress": content.INITIAL_PROGRESS,
        "mission": content.TODAYS_MISSION,
        "quick_stats": content.QUICK_STATS,
    })


@router.get("/upload", response_class=HTMLResponse)
async def upload_page(request: Request):
    return render(request, "upload.html")


@router.post("/upload", response_class=HTMLResponse)
async def upload_match(request: Request, video: Optional[UploadFile] = File(None)):
    """
    Accept a match video, analyze it and show the results with the XP earned.
    """
    if video is None or not video.filename:
        return render(request, "upload.html", {"error": "Select a match video to upload"},
                      status_code=status.HTTP_400_BAD_REQUEST)

    if video.content_type and not video.content_type.startswith("video/"):
        return render(request, "upload.html", {"error": "Only video files can be analyzed"},
                      status_code=status.HTTP_400_BAD_REQUEST)

    size = 0
    while True:
        chunk = await video.read(UPLOAD_CHUNK_SIZE)
        if not chunk:
            break
        size += len(chunk)
        if size > MAX_UPLOAD_BYTES:
            return render(request, "upload.html", {"error": "Videos are limited to 500MB"},
                          status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE)

    result = await analyze_video(video.filename)
    progress = content.INITIAL_PROGRESS.model_copy(
        update={"xp": content.INITIAL_PROGRESS.xp + result.xp}
    )

    return render(request, "upload_result.html", {
        "filename": video.filename,
        "size_mb": round(size / 1024 / 1024, 1),
        "result": result,
        "progress": progress,
    })


@router.get("/stats", response_class=HTMLResponse)
async def stats_page(request: Request, tab: str = Query(content.DEFAULT_STATS_TAB)):
    """Season stats overview or match history."""
    return render(request, "stats.html", {
        "tab": content.resolve_stats_tab(tab),
        "tabs": content.STATS_TABS,
        "season_stats": content.SEASON_STATS,
        "weekly_scores": content.WEEKLY_SCORES,
        "max_weekly_score": max(d["score"] for d in content.WEEKLY_SCORES),
        "positions": content.POSITION_BREAKDOWN,
        "matches": content.MATCH_HISTORY,
    })


@router.get("/plan", response_class=HTMLResponse)
async def plan_page(request: Request, day: Optional[str] = Query(None)):
    """Training plan for the selected weekday."""
    return render(request, "plan.html", {
        "selected_day": content.resolve_plan_day(day),
        "week_days": content.WEEK_DAYS,
        "first_date": content.FIRST_DAY_OF_MONTH_SHOWN,
        "schedule": content.TODAY_PLAN,
        "goals": content.WEEKLY_GOALS,
        "events": content.UPCOMING_EVENTS,
    })
