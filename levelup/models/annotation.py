"""
Pydantic models for frame annotation requests and responses.

Fields are snake_case in Python and camelCase on the wire.
"""

from enum import Enum
from typing import Optional, Dict, Any, List
from datetime import datetime
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class AnnotationType(str, Enum):
    """Kinds of coach annotation."""
    DRAWING = "drawing"
    TEXT = "text"
    VOICE = "voice"


class CamelModel(BaseModel):
    """Base model serialized with camelCase keys."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


class FrameAnnotation(CamelModel):
    """A single coach annotation on a video frame."""
    id: str
    annotation_type: str
    drawing_data: Optional[Any] = Field(None, description="Drawing elements: [{type, points, color, width}, ...]")
    text_content: Optional[str] = None
    voice_url: Optional[str] = None
    voice_duration_seconds: Optional[int] = None
    position: Optional[Dict[str, Any]] = Field(None, description="{x, y} screen position of the text/voice icon")
    timestamp: Optional[float] = Field(None, description="Seconds into the video")
    created_at: datetime
    updated_at: Optional[datetime] = None


class CoachAnnotationGroup(CamelModel):
    """All annotations one coach left on a frame, oldest first."""
    coach_id: str
    coach_name: str
    annotations: List[FrameAnnotation] = []


class FrameAnnotationsResponse(CamelModel):
    """Response model for loading a frame's annotations."""
    analysis_id: str
    frame_index: int
    total_annotations: int
    groups: List[CoachAnnotationGroup]


class AnnotationInput(CamelModel):
    """One annotation in a save request."""
    annotation_type: AnnotationType
    drawing_data: Optional[Any] = None
    text_content: Optional[str] = None
    voice_url: Optional[str] = None
    voice_duration_seconds: Optional[int] = Field(None, ge=0)
    position: Optional[Dict[str, Any]] = None
    timestamp: Optional[float] = Field(None, ge=0)


class SaveAnnotationsRequest(CamelModel):
    """Request model for saving a coach's annotations on a frame."""
    analysis_id: str = Field(..., min_length=1)
    frame_index: int = Field(..., ge=0, le=2**31 - 1)
    coach_id: str = Field(..., min_length=1)
    coach_name: Optional[str] = Field(None, max_length=100)
    annotations: List[AnnotationInput]


class SaveAnnotationsResponse(CamelModel):
    success: bool = True
    ids: List[str]
    count: int


class ShareAnnotationRequest(CamelModel):
    """Request model for sharing an annotation."""
    annotation_id: str = Field(..., min_length=1)
    coach_id: str = Field(..., min_length=1)
    shared_with_user_ids: List[str] = []


class ShareAnnotationResponse(CamelModel):
    success: bool = True
    share_id: str
    share_token: str
    share_url: str
    created_at: datetime


class SharedAnnotation(CamelModel):
    """Read-only view of an annotation opened through a share link."""
    id: str
    analysis_id: str
    frame_index: int
    coach_name: Optional[str] = None
    annotation_type: str
    drawing_data: Optional[Any] = None
    text_content: Optional[str] = None
    voice_url: Optional[str] = None
    voice_duration_seconds: Optional[int] = None
    position: Optional[Dict[str, Any]] = None
    timestamp: Optional[float] = None
    created_at: datetime


class SharedAnnotationResponse(CamelModel):
    annotation: SharedAnnotation
    read_only: bool = True
