"""
Middleware modules for LevelUp.
"""

from .security_headers import SecurityHeadersMiddleware

__all__ = [
    "SecurityHeadersMiddleware"
]
