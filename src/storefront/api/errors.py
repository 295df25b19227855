"""Exception handlers mapping the error taxonomy onto HTTP responses.

Protean's own handlers cover ``ValidationError`` (400) and
``ObjectNotFoundError`` (404).
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.exceptions import ExpectedVersionError
from protean.integrations.fastapi import register_exception_handlers

from storefront.exceptions import StorefrontError, WriteConflict
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


async def storefront_error_handler(request: Request, exc: StorefrontError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("request_failed", path=request.url.path, code=exc.code, error=exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def version_conflict_handler(request: Request, exc: ExpectedVersionError) -> JSONResponse:
    # Reached only once the command handler's retries are spent.
    logger.warning("write_conflict", path=request.url.path, error=str(exc))
    conflict = WriteConflict()
    return JSONResponse(status_code=conflict.status_code, content=conflict.to_dict())


def register_error_handlers(app: FastAPI) -> None:
    register_exception_handlers(app)
    app.add_exception_handler(ExpectedVersionError, version_conflict_handler)
    app.add_exception_handler(StorefrontError, storefront_error_handler)
