"""
FastAPI dependencies for identifying the current user.

Pages look the user up on a best-effort basis: a missing or invalid token,
an unconfigured database or a failed lookup all yield None.
"""

import logging
import uuid
from typing import Optional

import asyncpg
from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jwt.exceptions import InvalidTokenError

from levelup import database
from .jwt import decode_token

logger = logging.getLogger(__name__)

# Browsers send the token as a cookie, API clients as a bearer header
ACCESS_TOKEN_COOKIE = "access_token"

# HTTP Bearer token scheme
security = HTTPBearer(auto_error=False)


def _extract_token(request: Request, credentials: Optional[HTTPAuthorizationCredentials]) -> Optional[str]:
    if credentials:
        return credentials.credentials
    return request.cookies.get(ACCESS_TOKEN_COOKIE)


async def get_current_user_optional(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> Optional[dict]:
    """
    Get the current authenticated user (optional).

    Returns None if no valid token is provided or the user cannot be
    loaded, otherwise returns a user dict.
    """
    token = _extract_token(request, credentials)
    if not token:
        return None

    pool = database.db_pool
    if pool is None:
        return None

    try:
        payload = decode_token(token)

        # Verify it's an access token
        if payload.get("type") != "access":
            return None

        user_id = payload.get("sub")
        if not user_id:
            return None

        async with pool.acquire() as conn:
            user = await conn.fetchrow(
                """
                SELECT id, email, display_name, role
                FROM users
                WHERE id = $1
                """,
                uuid.UUID(user_id)
            )

    except (InvalidTokenError, ValueError) as e:
        logger.debug("Ignoring unusable access token: %s", e)
        return None
    except (asyncpg.PostgresError, asyncpg.InterfaceError, OSError) as e:
        logger.warning("Current user lookup failed: %s", e)
        return None

    if not user:
        return None

    return {
        "id": str(user["id"]),
        "email": user["email"],
        "display_name": user["display_name"],
        "role": user["role"]
    }
