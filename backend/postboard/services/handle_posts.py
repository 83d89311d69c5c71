"""Post Handlers: create, update, delete, fetch and list posts.

Invariants:
    - Fixed order: auth_check -> validate -> fetch (404) -> ownership (403) -> mutate
    - Ownership compares post.creator_id with the caller's id; the store never checks it
    - updatePost keeps the stored image when the input image is missing or IMAGE_PLACEHOLDER
    - deletePost releases the image only AFTER the delete commit succeeded
    - An image referenced by another user's post is never released on upload
    - Handlers return stored entities; shaping happens in core/format_payloads.py

Design Decisions:
    - Handlers raise typed errors only; the API boundary renders envelopes
    - Page numbers below 1 are treated as page 1
"""

import logging
from typing import Sequence

from postboard.core.domain_types import IMAGE_PLACEHOLDER
from postboard.core.errors import ForbiddenError, NotFoundError
from postboard.core.repository_protocols import PostLike, StoreLike
from postboard.core.request_context import RequestIdentity, auth_check
from postboard.core.validation import collect_post_input_errors, raise_if_invalid
from postboard.infrastructure.media_storage import MediaStorage

logger = logging.getLogger(__name__)


async def create_post(
    identity: RequestIdentity,
    store: StoreLike,
    title: str,
    content: str,
    image_url: str | None,
) -> PostLike:
    user_id = auth_check(identity)
    raise_if_invalid(collect_post_input_errors(title, content))

    creator = await store.users.find_by_id(user_id)
    if creator is None:
        raise NotFoundError("User", user_id)

    post = await store.posts.create(
        creator=creator, title=title, content=content,
        image_url=image_url or "",
    )
    logger.info(
        "Post created",
        extra={"user_id": user_id, "post_id": post.id, "operation": "createPost"},
    )
    return post


async def update_post(
    identity: RequestIdentity,
    store: StoreLike,
    post_id: str,
    title: str,
    content: str,
    image_url: str | None,
) -> PostLike:
    user_id = auth_check(identity)
    raise_if_invalid(collect_post_input_errors(title, content))

    post = await _get_owned_post(store, post_id, user_id)
    if image_url is not None and image_url != IMAGE_PLACEHOLDER:
        post.image_url = image_url
    post.title = title
    post.content = content
    post = await store.posts.save(post)
    logger.info(
        "Post updated",
        extra={"user_id": user_id, "post_id": post.id, "operation": "updatePost"},
    )
    return post


async def delete_post(
    identity: RequestIdentity,
    store: StoreLike,
    media: MediaStorage,
    post_id: str,
) -> bool:
    user_id = auth_check(identity)
    post = await _get_owned_post(store, post_id, user_id)
    image_url = post.image_url

    await store.posts.delete(post)
    await media.clear(image_url)
    logger.info(
        "Post deleted",
        extra={"user_id": user_id, "post_id": post_id, "operation": "deletePost"},
    )
    return True


async def get_post(
    identity: RequestIdentity, store: StoreLike, post_id: str,
) -> PostLike:
    auth_check(identity)
    post = await store.posts.find_by_id(post_id)
    if post is None:
        raise NotFoundError("Post", post_id)
    return post


async def list_posts(
    identity: RequestIdentity,
    store: StoreLike,
    page: int | None,
    page_size: int,
) -> tuple[Sequence[PostLike], int]:
    auth_check(identity)
    if not page or page < 1:
        page = 1
    return await store.posts.list(page=page, page_size=page_size)


async def _get_owned_post(store: StoreLike, post_id: str, user_id) -> PostLike:
    post = await store.posts.find_by_id(post_id)
    if post is None:
        raise NotFoundError("Post", post_id)
    if post.creator_id != user_id:
        logger.warning(
            "Ownership check failed",
            extra={"user_id": user_id, "post_id": post_id},
        )
        raise ForbiddenError("Not authorized!")
    return post


async def release_replaced_image(
    user_id, store: StoreLike, media: MediaStorage, path: str,
) -> bool:
    """Clear an image the caller is replacing, unless another user's post uses it."""
    holder = await store.posts.find_one(image_url=path)
    if holder is not None and holder.creator_id != user_id:
        logger.warning(
            "Refused to clear image of another user's post",
            extra={"user_id": user_id, "post_id": holder.id, "operation": "uploadImage"},
        )
        return False
    return await media.clear(path)
