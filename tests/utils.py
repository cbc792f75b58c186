"""
Test utilities and helper functions.

Builders for database rows as returned by the annotation queries.
"""

import uuid
from datetime import datetime, timedelta, timezone
from typing import Dict, Optional

BASE_TIME = datetime(2025, 2, 8, 18, 30, tzinfo=timezone.utc)


def at(minutes: int) -> datetime:
    """A timestamp ``minutes`` after BASE_TIME."""
    return BASE_TIME + timedelta(minutes=minutes)


def make_annotation_row(
    annotation_id: Optional[str] = None,
    coach_id: Optional[str] = "c1",
    coach_name: Optional[str] = "Coach Rivera",
    created_at: Optional[datetime] = None,
    annotation_type: str = "text",
    **overrides
) -> Dict:
    """
    Build a frame_annotations row.

    Returns:
        Dictionary with every column selected by the loader
    """
    row = {
        "id": annotation_id or str(uuid.uuid4()),
        "analysis_id": "A1",
        "frame_index": 0,
        "coach_id": coach_id,
        "coach_name": coach_name,
        "annotation_type": annotation_type,
        "drawing_data": None,
        "text_content": "Keep your head up",
        "voice_url": None,
        "voice_duration_seconds": None,
        "position": {"x": 120, "y": 80},
        "timestamp": 12.5,
        "created_at": created_at or BASE_TIME,
        "updated_at": created_at or BASE_TIME,
    }
    row.update(overrides)
    return row


def make_shared_row(expires_at: Optional[datetime] = None, **overrides) -> Dict:
    """Build the joined shared_annotations/frame_annotations row."""
    row = make_annotation_row(annotation_id="a-shared", **overrides)
    row["analysis_id"] = uuid.UUID("5f1c9a52-8d34-4b7e-a0c1-3e2d9f6b7a10")
    row["expires_at"] = expires_at
    return row


def annotation_ids(group: Dict):
    return [a["id"] for a in group["annotations"]]


def auth_headers(token: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {token}"}
