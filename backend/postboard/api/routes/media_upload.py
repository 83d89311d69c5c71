"""Post Images: upload a post image, release the one it replaces, serve stored files.

Invariants:
    - Requires an authenticated identity (401 envelope otherwise)
    - Missing or unsupported file -> 200 "No file provided!", oldPath left untouched
    - Stored file -> 201 with filePath using forward slashes
    - Clearing oldPath is best-effort: a failed file delete never fails the upload
    - GET /images/<file> serves only files inside the images directory (404 otherwise)

Design Decisions:
    - Upload is decoupled from the post mutation: the client sends the returned
      filePath as imageUrl afterwards (an upload whose mutation fails stays orphaned)
    - oldPath is left alone when another user's post references it; an image no
      post references can still be cleared by any authenticated caller
"""

import logging

from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from fastapi.responses import FileResponse, JSONResponse

from postboard.api.auth_guard import get_request_identity
from postboard.config import get_settings
from postboard.core.errors import NotFoundError
from postboard.core.request_context import RequestIdentity, auth_check
from postboard.infrastructure.database import (
    DatabaseSessionManager, get_session_manager,
)
from postboard.infrastructure.media_storage import MediaStorage, get_media_storage
from postboard.repositories import open_store
from postboard.services import handle_posts

logger = logging.getLogger(__name__)
router = APIRouter(tags=["media"])


@router.put("/post-image")
async def upload_post_image(
    image: UploadFile | None = File(None),
    old_path: str | None = Form(None, alias="oldPath"),
    identity: RequestIdentity = Depends(get_request_identity),
    media: MediaStorage = Depends(get_media_storage),
    db_manager: DatabaseSessionManager = Depends(get_session_manager),
):
    """Store an uploaded post image."""
    user_id = auth_check(identity)

    file_path = await media.save(image)
    if file_path is None:
        return JSONResponse(
            status_code=status.HTTP_200_OK,
            content={"message": "No file provided!"},
        )

    if old_path:
        async with open_store(db_manager) as store:
            await handle_posts.release_replaced_image(user_id, store, media, old_path)

    logger.info(
        f"Stored image {file_path}",
        extra={"user_id": user_id, "operation": "uploadImage"},
    )
    return JSONResponse(
        status_code=status.HTTP_201_CREATED,
        content={"message": "File stored.", "filePath": file_path},
    )


@router.get(f"/{get_settings().images_dir}/{{filename}}")
async def get_post_image(
    filename: str,
    media: MediaStorage = Depends(get_media_storage),
):
    """Serve a stored post image."""
    path = media.locate(filename)
    if path is None:
        raise NotFoundError("Image", filename)
    return FileResponse(path)
