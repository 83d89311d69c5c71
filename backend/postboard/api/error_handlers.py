"""Error Handlers: the single boundary that renders typed errors as envelopes.

Invariants:
    - PostboardError -> {message, status, data?} with status == http_status
    - RequestValidationError -> 422 envelope, one {message} per field error
    - Any other exception -> InternalError (500), never leaks internal details
    - GraphQL errors use the same envelope; errors raised before execution
      (syntax, unknown fields) carry no original exception and map to 400

Design Decisions:
    - normalize_error is shared by the REST handlers and the GraphQL router
    - Client errors logged at WARNING, server errors at ERROR with traceback
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from graphql import GraphQLError

from postboard.core.errors import InternalError, PostboardError

logger = logging.getLogger(__name__)


def normalize_error(exc: BaseException) -> PostboardError:
    """Map any exception onto the typed hierarchy."""
    if isinstance(exc, PostboardError):
        return exc
    return InternalError()


def log_error(error: PostboardError, cause: BaseException, path: str) -> None:
    extra = {
        "error_code": error.error_code,
        "status": error.http_status,
        "path": path,
    }
    if error.is_client_error:
        logger.warning(f"{type(error).__name__}: {error.message}", extra=extra)
    else:
        logger.error(
            f"Unhandled exception on {path}: {cause}",
            extra=extra,
            exc_info=(type(cause), cause, cause.__traceback__),
        )


def format_graphql_error(error: GraphQLError) -> dict:
    """Render one GraphQL execution error as an envelope."""
    original = error.original_error
    if original is None:
        body: dict = {"message": error.message, "status": status.HTTP_400_BAD_REQUEST}
    else:
        body = normalize_error(original).to_response()
    if error.locations:
        body["locations"] = [
            {"line": loc.line, "column": loc.column} for loc in error.locations
        ]
    if error.path:
        body["path"] = list(error.path)
    return body


def log_graphql_error(error: GraphQLError) -> None:
    path = ".".join(str(p) for p in error.path) if error.path else "graphql"
    original = error.original_error
    if original is None:
        logger.warning(f"GraphQL request error: {error.message}", extra={"path": path})
        return
    log_error(normalize_error(original), original, path)


# ─── REST handlers ───────────────────────────────────────────────

def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_postboard_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_postboard_error_handler(app: FastAPI) -> None:

    @app.exception_handler(PostboardError)
    async def postboard_error_handler(request: Request, exc: PostboardError):
        log_error(exc, exc, request.url.path)
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        return JSONResponse(
            status_code=422,
            content=_build_validation_error_response(exc),
        )


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all: never leaks internal details."""
        error = normalize_error(exc)
        log_error(error, exc, request.url.path)
        return JSONResponse(
            status_code=error.http_status, content=error.to_response(),
        )


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    return {
        "message": "Invalid input!",
        "status": 422,
        "data": [
            {
                "message": (
                    f"{'.'.join(str(loc) for loc in e['loc'])}: {e['msg']}"
                ),
            }
            for e in exc.errors()
        ],
    }
