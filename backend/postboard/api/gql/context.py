"""GraphQL Context: carries the request identity and store access into resolvers.

Invariants:
    - Built once per request by FastAPI dependencies (guard runs before any resolver)
    - identity is the frozen RequestIdentity; resolvers never mutate the context
    - open_store() hands each resolver its own session
"""

from fastapi import Depends
from strawberry.fastapi import BaseContext

from postboard.api.auth_guard import get_request_identity
from postboard.config import Settings, get_settings
from postboard.core.request_context import RequestIdentity
from postboard.infrastructure.database import (
    DatabaseSessionManager, get_session_manager,
)
from postboard.infrastructure.media_storage import MediaStorage, get_media_storage
from postboard.repositories import open_store


class GraphQLContext(BaseContext):
    """Context passed to every GraphQL resolver."""

    def __init__(
        self,
        identity: RequestIdentity,
        db_manager: DatabaseSessionManager,
        media: MediaStorage,
        settings: Settings,
    ) -> None:
        super().__init__()
        self.identity = identity
        self.db_manager = db_manager
        self.media = media
        self.settings = settings

    def open_store(self):
        return open_store(self.db_manager)


async def get_context(
    identity: RequestIdentity = Depends(get_request_identity),
    db_manager: DatabaseSessionManager = Depends(get_session_manager),
    media: MediaStorage = Depends(get_media_storage),
    settings: Settings = Depends(get_settings),
) -> GraphQLContext:
    return GraphQLContext(identity, db_manager, media, settings)
