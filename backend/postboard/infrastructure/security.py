"""Credential Primitives: password hashing (passlib) and session tokens (PyJWT).

Invariants:
    - Plain passwords are never stored or logged; only CryptContext hashes persist
    - Tokens carry userId and email claims plus iat/exp; lifetime = token_ttl_minutes
    - decode_token raises AuthError for every invalid, tampered or expired token

Design Decisions:
    - pbkdf2_sha256 through CryptContext: salted, slow, pure-python backend
    - HS256 shared secret from settings: single service signs and verifies
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from uuid import UUID

import jwt
from passlib.context import CryptContext

from postboard.config import get_settings
from postboard.core.errors import AuthError

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


@dataclass(frozen=True)
class TokenClaims:
    """Decoded session token payload."""
    user_id: UUID
    email: str
    issued_at: datetime
    expires_at: datetime


def hash_password(plain_password: str) -> str:
    return pwd_context.hash(plain_password)


def verify_password(plain_password: str, password_hash: str) -> bool:
    try:
        return pwd_context.verify(plain_password, password_hash)
    except ValueError:
        # Unrecognized or corrupted hash format
        return False


def issue_token(
    user_id: UUID | str, email: str, now: datetime | None = None,
) -> str:
    """Create a signed session token for the given user."""
    settings = get_settings()
    issued = now or datetime.now(timezone.utc)
    payload = {
        "userId": str(user_id),
        "email": email,
        "iat": int(issued.timestamp()),
        "exp": int(
            (issued + timedelta(minutes=settings.token_ttl_minutes)).timestamp()
        ),
    }
    return jwt.encode(
        payload, settings.jwt_secret, algorithm=settings.jwt_algorithm,
    )


def decode_token(token: str) -> TokenClaims:
    """Verify signature and expiry, returning typed claims."""
    settings = get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["exp", "iat"]},
        )
    except jwt.ExpiredSignatureError:
        raise AuthError("Token has expired")
    except jwt.InvalidTokenError:
        raise AuthError("Invalid token")

    try:
        user_id = UUID(str(payload["userId"]))
        email = str(payload["email"])
    except (KeyError, ValueError):
        raise AuthError("Invalid token")

    return TokenClaims(
        user_id=user_id,
        email=email,
        issued_at=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
        expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
    )
