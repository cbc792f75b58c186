"""
Pydantic models for wrestler progress and match analysis results.
"""

from typing import List
from pydantic import BaseModel, Field


class ProgressState(BaseModel):
    """Gamified progress shown on the dashboard."""
    xp: int = Field(..., ge=0)
    level: int = Field(..., ge=1)
    streak: int = Field(..., ge=0, description="Consecutive active days")
    xp_max: int = Field(..., gt=0, description="XP needed for the next level")


class QuickStat(BaseModel):
    value: str
    label: str


class PositionScores(BaseModel):
    standing: int = Field(..., ge=0, le=100)
    top: int = Field(..., ge=0, le=100)
    bottom: int = Field(..., ge=0, le=100)


class AnalysisResult(BaseModel):
    """Result of analyzing an uploaded match video."""
    overall_score: int = Field(..., ge=0, le=100)
    position_scores: PositionScores
    strengths: List[str]
    weaknesses: List[str]
    drills: List[str]
    xp: int = Field(..., ge=0, description="XP awarded for the upload")
