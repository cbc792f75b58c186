"""
Frame annotation routes.

Coaches annotate individual frames of an analyzed match with drawings,
text and voice notes. These endpoints load a frame's annotations grouped
by coach, save new annotations, and share single annotations by token.
"""

import logging
import re
import uuid
from datetime import datetime, timezone
from typing import Iterable, List, Optional, Tuple

import asyncpg
from fastapi import APIRouter, Depends, HTTPException, Query, Request, status

from levelup.database import get_db_pool
from levelup.models.annotation import (
    FrameAnnotation,
    CoachAnnotationGroup,
    FrameAnnotationsResponse,
    SaveAnnotationsRequest,
    SaveAnnotationsResponse,
    ShareAnnotationRequest,
    ShareAnnotationResponse,
    SharedAnnotation,
    SharedAnnotationResponse
)
from levelup.utils.audit_log import log_annotations_saved, log_share_created, log_share_access

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/annotations", tags=["Frame Annotations"])

UNKNOWN_COACH_ID = "unknown"
DEFAULT_COACH_NAME = "Coach"

FRAME_KEY_ERROR = 'frameId must be in format "analysisId:frameIndex"'
FRAME_KEY_PATTERN = re.compile(r"([^:]+):(\d+)", re.ASCII)
# frame_index is a Postgres INTEGER column
MAX_FRAME_INDEX = 2**31 - 1

# Database errors that are reported to the client as a generic 500
DATABASE_ERRORS = (asyncpg.PostgresError, asyncpg.InterfaceError, OSError)


def parse_frame_key(frame_id: str) -> Tuple[str, int]:
    """
    Split a frame key into analysis id and frame index.

    Args:
        frame_id: Key in the form "analysisId:frameIndex"

    Returns:
        Tuple of (analysis_id, frame_index)

    Raises:
        ValueError: If the key is malformed
    """
    match = FRAME_KEY_PATTERN.fullmatch(frame_id or "")
    if not match:
        raise ValueError(FRAME_KEY_ERROR)
    frame_index = int(match.group(2))
    if frame_index > MAX_FRAME_INDEX:
        raise ValueError(FRAME_KEY_ERROR)
    return match.group(1), frame_index


def _str_or_none(value) -> Optional[str]:
    return str(value) if value is not None else None


def row_to_annotation(row) -> FrameAnnotation:
    """Map a frame_annotations row to its external shape."""
    return FrameAnnotation(
        id=str(row["id"]),
        annotation_type=row["annotation_type"],
        drawing_data=row.get("drawing_data"),
        text_content=row.get("text_content"),
        voice_url=row.get("voice_url"),
        voice_duration_seconds=row.get("voice_duration_seconds"),
        position=row.get("position"),
        timestamp=row.get("timestamp"),
        created_at=row["created_at"],
        updated_at=row.get("updated_at")
    )


def group_annotations_by_coach(rows: Iterable) -> List[CoachAnnotationGroup]:
    """
    Group annotation rows by coach.

    Rows must already be in creation order; that order is kept inside each
    group and groups are listed by each coach's first annotation. Rows
    without a coach go under "unknown".
    """
    groups = {}

    for row in rows:
        coach_id = _str_or_none(row.get("coach_id")) or UNKNOWN_COACH_ID
        if coach_id not in groups:
            groups[coach_id] = CoachAnnotationGroup(
                coach_id=coach_id,
                coach_name=row.get("coach_name") or DEFAULT_COACH_NAME,
                annotations=[]
            )
        groups[coach_id].annotations.append(row_to_annotation(row))

    return list(groups.values())


@router.get("/load/{frame_id}", response_model=FrameAnnotationsResponse)
async def load_frame_annotations(frame_id: str, pool=Depends(get_db_pool)):
    """
    Load every annotation on a frame, grouped by coach.

    The frame is identified by "analysisId:frameIndex".
    """
    try:
        analysis_id, frame_index = parse_frame_key(frame_id)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )

    try:
        async with pool.acquire() as conn:
            rows = await conn.fetch(
                """
                SELECT id, analysis_id, frame_index, coach_id, coach_name,
                       annotation_type, drawing_data, text_content, voice_url,
                       voice_duration_seconds, position, timestamp,
                       created_at, updated_at
                FROM frame_annotations
                WHERE analysis_id::text = $1 AND frame_index = $2
                ORDER BY created_at ASC
                """,
                analysis_id, frame_index
            )
    except DATABASE_ERRORS as e:
        logger.error("Annotation load error for %s: %s", frame_id, e, exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to load annotations"
        )

    return FrameAnnotationsResponse(
        analysis_id=analysis_id,
        frame_index=frame_index,
        total_annotations=len(rows),
        groups=group_annotations_by_coach(rows)
    )


@router.post("/save", response_model=SaveAnnotationsResponse)
async def save_frame_annotations(
    data: SaveAnnotationsRequest,
    request: Request,
    pool=Depends(get_db_pool)
):
    """
    Save a coach's annotations on a frame.

    All annotations are written in one transaction, after which the
    analysis' annotation count and annotator list are refreshed.
    """
    if not data.annotations:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="annotations must contain at least one annotation"
        )

    coach_name = data.coach_name or DEFAULT_COACH_NAME

    try:
        async with pool.acquire() as conn:
            async with conn.transaction():
                ids = []
                for annotation in data.annotations:
                    annotation_id = await conn.fetchval(
                        """
                        INSERT INTO frame_annotations (
                            analysis_id, frame_index, coach_id, coach_name,
                            annotation_type, drawing_data, text_content, voice_url,
                            voice_duration_seconds, position, timestamp
                        )
                        VALUES ($1::uuid, $2, $3, $4, $5, $6, $7, $8, $9, $10, $11)
                        RETURNING id
                        """,
                        data.analysis_id,
                        data.frame_index,
                        data.coach_id,
                        coach_name,
                        annotation.annotation_type.value,
                        annotation.drawing_data,
                        annotation.text_content,
                        annotation.voice_url,
                        annotation.voice_duration_seconds,
                        annotation.position,
                        annotation.timestamp
                    )
                    ids.append(str(annotation_id))

                await conn.execute(
                    """
                    UPDATE match_analyses
                    SET annotation_count = (
                            SELECT COUNT(*) FROM frame_annotations WHERE analysis_id = $1::uuid
                        ),
                        annotated_by = CASE
                            WHEN $2 = ANY(COALESCE(annotated_by, '{}')) THEN annotated_by
                            ELSE array_append(COALESCE(annotated_by, '{}'), $2)
                        END
                    WHERE id = $1::uuid
                    """,
                    data.analysis_id, coach_name
                )
    except asyncpg.DataError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid annotation data: {e}"
        )
    except DATABASE_ERRORS as e:
        logger.error("Annotation save error for analysis %s: %s", data.analysis_id, e, exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to save annotations"
        )

    logger.info(
        "Saved %d annotations for analysis %s frame %d",
        len(ids), data.analysis_id, data.frame_index
    )
    log_annotations_saved(data.analysis_id, data.frame_index, data.coach_id, len(ids), request)

    return SaveAnnotationsResponse(ids=ids, count=len(ids))


@router.post("/share", response_model=ShareAnnotationResponse)
async def share_annotation(
    data: ShareAnnotationRequest,
    request: Request,
    pool=Depends(get_db_pool)
):
    """
    Create a share link for an annotation.

    Only the coach who wrote the annotation can share it.
    """
    share_token = str(uuid.uuid4())

    try:
        async with pool.acquire() as conn:
            annotation = await conn.fetchrow(
                "SELECT id, coach_id FROM frame_annotations WHERE id::text = $1",
                data.annotation_id
            )

            if not annotation:
                raise HTTPException(
                    status_code=status.HTTP_404_NOT_FOUND,
                    detail="Annotation not found"
                )

            if _str_or_none(annotation["coach_id"]) != data.coach_id:
                raise HTTPException(
                    status_code=status.HTTP_403_FORBIDDEN,
                    detail="Only the annotation author can share it"
                )

            share = await conn.fetchrow(
                """
                INSERT INTO shared_annotations (annotation_id, shared_with_user_ids, share_token)
                VALUES ($1, $2::uuid[], $3)
                RETURNING id, share_token, created_at
                """,
                annotation["id"], data.shared_with_user_ids, share_token
            )
    except asyncpg.DataError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid share request: {e}"
        )
    except DATABASE_ERRORS as e:
        logger.error("Share annotation error for %s: %s", data.annotation_id, e, exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create share"
        )

    log_share_created(
        data.annotation_id, data.coach_id, share["share_token"],
        len(data.shared_with_user_ids), request
    )

    return ShareAnnotationResponse(
        share_id=str(share["id"]),
        share_token=share["share_token"],
        share_url=f"/shared/{share['share_token']}",
        created_at=share["created_at"]
    )


@router.get("/share", response_model=SharedAnnotationResponse)
async def get_shared_annotation(
    request: Request,
    token: Optional[str] = Query(None),
    pool=Depends(get_db_pool)
):
    """
    Resolve a share token to a read-only annotation.
    """
    if not token:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Share token is required"
        )

    try:
        async with pool.acquire() as conn:
            row = await conn.fetchrow(
                """
                SELECT s.expires_at,
                       a.id, a.analysis_id, a.frame_index, a.coach_name,
                       a.annotation_type, a.drawing_data, a.text_content,
                       a.voice_url, a.voice_duration_seconds, a.position,
                       a.timestamp, a.created_at
                FROM shared_annotations s
                JOIN frame_annotations a ON a.id = s.annotation_id
                WHERE s.share_token = $1
                """,
                token
            )
    except DATABASE_ERRORS as e:
        logger.error("Shared annotation lookup error: %s", e, exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to load shared annotation"
        )

    if not row:
        log_share_access(token, False, request, reason="not found")
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Shared annotation not found"
        )

    expires_at = row["expires_at"]
    if expires_at and expires_at < datetime.now(timezone.utc):
        log_share_access(token, False, request, reason="expired")
        raise HTTPException(
            status_code=status.HTTP_410_GONE,
            detail="Share link has expired"
        )

    log_share_access(token, True, request)

    return SharedAnnotationResponse(
        annotation=SharedAnnotation(
            id=str(row["id"]),
            analysis_id=str(row["analysis_id"]),
            frame_index=row["frame_index"],
            coach_name=row["coach_name"],
            annotation_type=row["annotation_type"],
            drawing_data=row["drawing_data"],
            text_content=row["text_content"],
            voice_url=row["voice_url"],
            voice_duration_seconds=row["voice_duration_seconds"],
            position=row["position"],
            timestamp=row["timestamp"],
            created_at=row["created_at"]
        )
    )
