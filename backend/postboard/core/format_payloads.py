"""Payload Formatting: shapes stored entities into API payload dicts.

Invariants:
    - PURE: reads attributes, never triggers IO (relationships are eager-loaded by the store)
    - Ids rendered as strings, timestamps as ISO 8601 in UTC
    - Password hashes never appear in any payload
    - A user's nested posts reference a creator summary without posts (no cycles)
"""

from datetime import datetime, timezone

from postboard.core.repository_protocols import PostLike, UserLike


def format_timestamp(value: datetime) -> str:
    """ISO 8601 in UTC. Naive values (SQLite round-trips) are taken as UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat()


def format_user_summary(user: UserLike) -> dict:
    return {
        "id": str(user.id),
        "email": user.email,
        "name": user.name,
        "status": user.status,
        "posts": [],
    }


def format_post(post: PostLike, creator: dict | None = None) -> dict:
    return {
        "id": str(post.id),
        "title": post.title,
        "content": post.content,
        "image_url": post.image_url,
        "creator": creator or format_user_summary(post.creator),
        "created_at": format_timestamp(post.created_at),
        "updated_at": format_timestamp(post.updated_at),
    }


def format_user(user: UserLike) -> dict:
    summary = format_user_summary(user)
    return {
        **summary,
        "posts": [format_post(p, creator=summary) for p in user.posts],
    }


def format_post_page(posts, total_posts: int) -> dict:
    return {
        "posts": [format_post(p) for p in posts],
        "total_posts": total_posts,
    }
