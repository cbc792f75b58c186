"""
Utility modules for LevelUp.
"""

from .audit_log import AuditLogger, log_annotations_saved, log_share_created, log_share_access

__all__ = [
    "AuditLogger",
    "log_annotations_saved",
    "log_share_created",
    "log_share_access"
]
