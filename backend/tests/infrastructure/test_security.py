"""Credential primitives: password hashing and session tokens.

Tests cover:
    - hashes are salted and verify only the right password
    - tokens carry userId/email and expire after the configured TTL
    - tampered, foreign-secret and expired tokens raise AuthError
"""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import jwt
import pytest

from postboard.config import get_settings
from postboard.core.errors import AuthError
from postboard.infrastructure.security import (
    decode_token, hash_password, issue_token, verify_password,
)


def test_hash_is_salted_and_not_plaintext():
    first = hash_password("secret-pw")
    second = hash_password("secret-pw")
    assert first != "secret-pw"
    assert first != second


def test_verify_password():
    hashed = hash_password("secret-pw")
    assert verify_password("secret-pw", hashed)
    assert not verify_password("wrong-pw", hashed)


def test_verify_password_with_garbage_hash_is_false():
    assert not verify_password("secret-pw", "not-a-hash")


def test_token_round_trip_claims():
    uid = uuid4()
    claims = decode_token(issue_token(uid, "ada@postboard.io"))
    assert claims.user_id == uid
    assert claims.email == "ada@postboard.io"
    assert claims.expires_at > datetime.now(timezone.utc)


def test_token_lifetime_matches_settings():
    claims = decode_token(issue_token(uuid4(), "ada@postboard.io"))
    ttl = claims.expires_at - claims.issued_at
    assert ttl == timedelta(minutes=get_settings().token_ttl_minutes)


def test_expired_token_rejected():
    issued = datetime.now(timezone.utc) - timedelta(hours=2)
    token = issue_token(uuid4(), "ada@postboard.io", now=issued)
    with pytest.raises(AuthError) as exc_info:
        decode_token(token)
    assert exc_info.value.message == "Token has expired"


def test_token_signed_with_other_secret_rejected():
    now = datetime.now(timezone.utc)
    token = jwt.encode(
        {
            "userId": str(uuid4()), "email": "x@postboard.io",
            "iat": int(now.timestamp()),
            "exp": int((now + timedelta(hours=1)).timestamp()),
        },
        "another-secret",
        algorithm="HS256",
    )
    with pytest.raises(AuthError):
        decode_token(token)


def test_garbage_token_rejected():
    with pytest.raises(AuthError):
        decode_token("not.a.token")
