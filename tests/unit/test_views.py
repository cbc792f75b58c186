"""
Unit tests for navigation, widget helpers and the upload analysis.
"""

import random

import pytest

from levelup import config
from levelup.views import build_nav, xp_percent, goal_percent, streak_label, bar_height, analyze_video
from levelup.views.content import resolve_stats_tab, resolve_plan_day, INITIAL_PROGRESS


@pytest.mark.unit
class TestNavigation:
    """Test active destination highlighting."""

    @pytest.mark.parametrize("path,expected", [
        ("/", "/"),
        ("/upload", "/upload"),
        ("/stats", "/stats"),
        ("/plan", "/plan"),
    ])
    def test_exact_match_is_active(self, path, expected):
        active = [item.href for item in build_nav(path) if item.active]
        assert active == [expected]

    @pytest.mark.parametrize("path", ["/stats/", "/uploads", "/plan/week", "/dashboard", ""])
    def test_no_prefix_matching(self, path):
        assert not any(item.active for item in build_nav(path))

    def test_order_and_labels(self):
        items = build_nav("/")
        assert [(i.href, i.label) for i in items] == [
            ("/", "Home"), ("/upload", "Upload"), ("/stats", "Stats"), ("/plan", "Plan")
        ]

    def test_shared_items_not_mutated(self):
        build_nav("/stats")
        assert not any(item.active for item in build_nav("/nowhere"))


@pytest.mark.unit
class TestWidgets:

    def test_xp_percent(self):
        assert xp_percent(1240, 2000) == pytest.approx(62.0)

    def test_xp_percent_clamped(self):
        assert xp_percent(2500, 2000) == 100.0

    def test_xp_percent_zero_max(self):
        assert xp_percent(10, 0) == 100.0

    def test_goal_percent(self):
        assert goal_percent(82, 85) == pytest.approx(96.47, rel=1e-3)
        assert goal_percent(7, 7) == 100.0

    def test_streak_label(self):
        assert streak_label(7) == "7-day streak"

    def test_bar_height(self):
        assert bar_height(91, 91) == 100.0
        assert bar_height(10, 0) == 0.0


@pytest.mark.unit
class TestPageContent:

    def test_initial_progress(self):
        assert (INITIAL_PROGRESS.xp, INITIAL_PROGRESS.level, INITIAL_PROGRESS.streak) == (1240, 12, 7)
        assert INITIAL_PROGRESS.xp_max == 2000

    def test_stats_tab_fallback(self):
        assert resolve_stats_tab("matches") == "matches"
        assert resolve_stats_tab("bogus") == "overview"

    @pytest.mark.parametrize("day,expected", [
        ("0", 0), ("6", 6), ("7", 3), ("-1", 3), ("abc", 3), ("", 3), (None, 3), ("²", 3)
    ])
    def test_plan_day_fallback(self, day, expected):
        assert resolve_plan_day(day) == expected


@pytest.mark.unit
class TestAnalyzeVideo:
    """Test the simulated match analysis."""

    async def test_scores_within_ranges(self, monkeypatch):
        monkeypatch.setattr(config, "ANALYSIS_DELAY_SECONDS", 0)
        rng = random.Random(7)

        for _ in range(25):
            result = await analyze_video("match.mp4", rng=rng)
            assert 68 <= result.overall_score <= 95
            assert 70 <= result.position_scores.standing <= 94
            assert 60 <= result.position_scores.top <= 89
            assert 75 <= result.position_scores.bottom <= 94

    async def test_awards_xp_and_drills(self, monkeypatch):
        monkeypatch.setattr(config, "ANALYSIS_DELAY_SECONDS", 0)

        result = await analyze_video("match.mp4")

        assert result.xp == 150
        assert len(result.drills) == 3
        assert result.strengths and result.weaknesses

    async def test_seeded_results_are_reproducible(self, monkeypatch):
        monkeypatch.setattr(config, "ANALYSIS_DELAY_SECONDS", 0)

        first = await analyze_video("a.mp4", rng=random.Random(42))
        second = await analyze_video("b.mp4", rng=random.Random(42))

        assert first == second
