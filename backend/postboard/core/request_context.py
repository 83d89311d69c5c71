"""Request Identity: the immutable authentication result for one request.

Invariants:
    - Built exactly once per request by the authorization guard (api/auth_guard.py)
    - Frozen: resolvers receive it by reference and can never flip it
    - ANONYMOUS is the only identity without a user_id

Design Decisions:
    - Soft gate: an anonymous identity is valid context; auth_check enforces per operation
"""

from dataclasses import dataclass
from uuid import UUID

from postboard.core.errors import AuthError


@dataclass(frozen=True)
class RequestIdentity:
    user_id: UUID | None = None
    email: str | None = None

    @property
    def is_authenticated(self) -> bool:
        return self.user_id is not None


ANONYMOUS = RequestIdentity()


def auth_check(identity: RequestIdentity) -> UUID:
    """Return the caller's user id or raise AuthError (401)."""
    if not identity.is_authenticated:
        raise AuthError("Not authenticated!")
    return identity.user_id
