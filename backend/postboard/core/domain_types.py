"""Domain Types: identity types and shared constants for users, posts and media.

Invariants:
    - UserId and PostId wrap UUIDs; string ids from the API are parsed once at the edge
    - MIN_TEXT_LENGTH is the single source of truth for every minimum-length rule
    - IMAGE_EXTENSIONS keys are the only accepted upload media types

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
"""

from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", UUID)
PostId = NewType("PostId", UUID)


# ─── Constants ───────────────────────────────────────────────────

MIN_TEXT_LENGTH: int = 5
DEFAULT_USER_STATUS: str = "I am new!"

# Client sends this literal when the post keeps its current image
IMAGE_PLACEHOLDER: str = "undefined"

IMAGE_EXTENSIONS: dict[str, str] = {
    "image/png": ".png",
    "image/jpg": ".jpg",
    "image/jpeg": ".jpeg",
}


def parse_id(raw: str | UUID | None) -> UUID | None:
    """Parse an API id into a UUID. Returns None for anything malformed."""
    if raw is None:
        return None
    if isinstance(raw, UUID):
        return raw
    try:
        return UUID(str(raw))
    except ValueError:
        return None
