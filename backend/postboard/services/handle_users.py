"""User Handlers: caller's own profile and status."""

import logging

from postboard.core.errors import NotFoundError
from postboard.core.repository_protocols import StoreLike, UserLike
from postboard.core.request_context import RequestIdentity, auth_check
from postboard.core.validation import collect_status_errors, raise_if_invalid

logger = logging.getLogger(__name__)


async def get_profile(identity: RequestIdentity, store: StoreLike) -> UserLike:
    user_id = auth_check(identity)
    user = await store.users.find_by_id(user_id)
    if user is None:
        raise NotFoundError("User", user_id)
    return user


async def update_status(
    identity: RequestIdentity, store: StoreLike, status: str,
) -> UserLike:
    """Set the caller's status text."""
    user_id = auth_check(identity)
    raise_if_invalid(collect_status_errors(status))

    user = await store.users.find_by_id(user_id)
    if user is None:
        raise NotFoundError("User", user_id)
    user.status = status
    user = await store.users.save(user)
    logger.info(
        "Status updated", extra={"user_id": user_id, "operation": "updateStatus"},
    )
    return user
