"""
Pydantic models for request/response validation.
"""

from .annotation import (
    AnnotationType,
    FrameAnnotation,
    CoachAnnotationGroup,
    FrameAnnotationsResponse,
    AnnotationInput,
    SaveAnnotationsRequest,
    SaveAnnotationsResponse,
    ShareAnnotationRequest,
    ShareAnnotationResponse,
    SharedAnnotation,
    SharedAnnotationResponse
)

from .progress import (
    ProgressState,
    QuickStat,
    PositionScores,
    AnalysisResult
)

__all__ = [
    # Annotation models
    "AnnotationType",
    "FrameAnnotation",
    "CoachAnnotationGroup",
    "FrameAnnotationsResponse",
    "AnnotationInput",
    "SaveAnnotationsRequest",
    "SaveAnnotationsResponse",
    "ShareAnnotationRequest",
    "ShareAnnotationResponse",
    "SharedAnnotation",
    "SharedAnnotationResponse",

    # Progress models
    "ProgressState",
    "QuickStat",
    "PositionScores",
    "AnalysisResult"
]
