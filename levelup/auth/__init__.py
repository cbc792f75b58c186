"""
Authentication helpers for LevelUp.

Provides:
- JWT token generation and validation
- FastAPI dependency resolving the (optional) current user
"""

from .jwt import create_access_token, decode_token
from .dependencies import get_current_user_optional

__all__ = [
    "create_access_token",
    "decode_token",
    "get_current_user_optional",
]
