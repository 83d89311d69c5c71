"""Credential Service: registration and login.

Invariants:
    - register() validates BEFORE any read or write; failures persist nothing
    - Duplicate email fails with ConflictError and leaves exactly one record
    - authenticate() fails with AuthError (401) for unknown email or wrong password
    - Issued tokens expire token_ttl_minutes after issuance
"""

import logging
from dataclasses import dataclass

from postboard.core.errors import AuthError, ConflictError
from postboard.core.repository_protocols import UserLike, UserRepository
from postboard.core.validation import collect_user_input_errors, raise_if_invalid
from postboard.infrastructure.security import (
    hash_password, issue_token, verify_password,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthPayload:
    token: str
    user_id: str


async def register(
    users: UserRepository, email: str, plain_password: str, name: str,
) -> UserLike:
    """Create a user account with a hashed password."""
    raise_if_invalid(collect_user_input_errors(email, plain_password))

    if await users.find_one(email=email):
        raise ConflictError("User exists already!")

    user = await users.create(
        email=email, password_hash=hash_password(plain_password), name=name,
    )
    logger.info("Registered user", extra={"user_id": user.id, "operation": "register"})
    return user


async def authenticate(
    users: UserRepository, email: str, plain_password: str,
) -> AuthPayload:
    """Verify credentials and issue a session token."""
    user = await users.find_one(email=email)
    if user is None:
        raise AuthError("User not found")
    if not verify_password(plain_password, user.password):
        raise AuthError("Wrong password")

    token = issue_token(user.id, user.email)
    logger.info("User logged in", extra={"user_id": user.id, "operation": "login"})
    return AuthPayload(token=token, user_id=str(user.id))
