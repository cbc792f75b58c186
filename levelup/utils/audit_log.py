"""
Audit logging for annotation writes and share links.

Records who saved or shared coach annotations and when share links are
opened, to support review of what was published to athletes.
"""

import hashlib
import logging
from typing import Optional
from fastapi import Request

# Configure audit logger
audit_logger = logging.getLogger("audit")
audit_logger.setLevel(logging.INFO)

# Create handler if not already configured
if not audit_logger.handlers:
    handler = logging.StreamHandler()
    formatter = logging.Formatter(
        '%(asctime)s - AUDIT - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    handler.setFormatter(formatter)
    audit_logger.addHandler(handler)


class AuditLogger:
    """
    Centralized audit logging for annotation events.
    """

    @staticmethod
    def _get_client_ip(request: Optional[Request]) -> str:
        """Extract client IP from request."""
        if not request:
            return "unknown"

        # Check for forwarded IP (if behind proxy)
        forwarded = request.headers.get("X-Forwarded-For")
        if forwarded:
            return forwarded.split(",")[0].strip()

        return request.client.host if request.client else "unknown"

    @staticmethod
    def token_fingerprint(share_token: str) -> str:
        """Short SHA-256 digest of a share token; the token itself is a credential."""
        return hashlib.sha256(share_token.encode()).hexdigest()[:12]

    @staticmethod
    def log_annotations_saved(
        analysis_id: str,
        frame_index: int,
        coach_id: str,
        count: int,
        request: Optional[Request] = None
    ):
        """
        Log a batch of annotations written for one frame.

        Args:
            analysis_id: Analysis the frame belongs to
            frame_index: Zero-based frame index
            coach_id: Author of the annotations
            count: Number of annotations stored
            request: FastAPI request object for IP extraction
        """
        ip = AuditLogger._get_client_ip(request)

        audit_logger.info(
            f"ANNOTATIONS_SAVED | analysis={analysis_id} | frame={frame_index} | "
            f"coach_id={coach_id} | count={count} | ip={ip}"
        )

    @staticmethod
    def log_share_created(
        annotation_id: str,
        coach_id: str,
        share_token: str,
        recipients: int,
        request: Optional[Request] = None
    ):
        """Log creation of a share link for an annotation."""
        ip = AuditLogger._get_client_ip(request)
        token = AuditLogger.token_fingerprint(share_token)

        audit_logger.info(
            f"SHARE_CREATED | annotation={annotation_id} | coach_id={coach_id} | "
            f"token_sha256={token} | recipients={recipients} | ip={ip}"
        )

    @staticmethod
    def log_share_access(
        share_token: str,
        success: bool,
        request: Optional[Request] = None,
        reason: Optional[str] = None
    ):
        """
        Log an attempt to open a share link.

        Failed attempts (unknown or expired token) are logged as warnings.
        """
        ip = AuditLogger._get_client_ip(request)
        status = "SUCCESS" if success else "FAILURE"
        token = AuditLogger.token_fingerprint(share_token)

        message = f"SHARE_ACCESS | {status} | token_sha256={token} | ip={ip}"
        if reason:
            message += f" | reason={reason}"

        if success:
            audit_logger.info(message)
        else:
            audit_logger.warning(message)


# Convenience functions
def log_annotations_saved(
    analysis_id: str,
    frame_index: int,
    coach_id: str,
    count: int,
    request: Optional[Request] = None
):
    """Convenience wrapper for AuditLogger.log_annotations_saved."""
    AuditLogger.log_annotations_saved(analysis_id, frame_index, coach_id, count, request)


def log_share_created(
    annotation_id: str,
    coach_id: str,
    share_token: str,
    recipients: int,
    request: Optional[Request] = None
):
    """Convenience wrapper for AuditLogger.log_share_created."""
    AuditLogger.log_share_created(annotation_id, coach_id, share_token, recipients, request)


def log_share_access(
    share_token: str,
    success: bool,
    request: Optional[Request] = None,
    reason: Optional[str] = None
):
    """Convenience wrapper for AuditLogger.log_share_access."""
    AuditLogger.log_share_access(share_token, success, request, reason)
