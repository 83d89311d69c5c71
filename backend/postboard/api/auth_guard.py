"""Authorization Guard: turns the Authorization header into a RequestIdentity.

Invariants:
    - Runs once per request as a FastAPI dependency, before any resolver
    - NEVER rejects: missing, malformed, invalid or expired tokens yield ANONYMOUS
    - Operations that need a user call auth_check() on the identity themselves

Design Decisions:
    - HTTPBearer(auto_error=False): non-Bearer or malformed headers arrive as None
"""

import logging

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from postboard.core.errors import AuthError
from postboard.core.request_context import ANONYMOUS, RequestIdentity
from postboard.infrastructure.security import decode_token

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def identity_from_token(token: str | None) -> RequestIdentity:
    if not token:
        return ANONYMOUS
    try:
        claims = decode_token(token)
    except AuthError as e:
        logger.debug(f"Ignoring session token: {e.message}")
        return ANONYMOUS
    return RequestIdentity(user_id=claims.user_id, email=claims.email)


async def get_request_identity(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> RequestIdentity:
    """FastAPI dependency producing the caller's identity."""
    if credentials is None:
        return ANONYMOUS
    return identity_from_token(credentials.credentials)
