"""
API and page route modules.
"""

from .annotations import router as annotations_router
from .pages import router as pages_router

__all__ = [
    "annotations_router",
    "pages_router"
]
