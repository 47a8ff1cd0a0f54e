"""
Request identity dependencies for FastAPI.

Authentication happens upstream: the gateway verifies the session and
forwards the user id in a header. Every query is scoped to that id.
"""

from typing import Optional
from fastapi import Request

from backend.app.core.config import settings
from backend.app.core.exceptions import AuthenticationError


async def get_current_user_id(request: Request) -> str:
    """
    FastAPI dependency returning the caller's user id.

    Raises:
        AuthenticationError: 401 if the identity header is missing or blank
    """
    user_id: Optional[str] = request.headers.get(settings.user_id_header)
    if not user_id or not user_id.strip():
        raise AuthenticationError(f"Missing {settings.user_id_header} header")
    return user_id.strip()
