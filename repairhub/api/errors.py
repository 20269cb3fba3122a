"""Exception handlers rendering the ``{success: false, error}`` envelope."""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from repairhub.core.exceptions import SearchError
from repairhub.core.logging import get_logger
from repairhub.schemas.search import SearchErrorResponse

logger = get_logger(__name__)


async def search_error_handler(request: Request, exc: SearchError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("search_request_failed", error=exc.message, error_type=type(exc).__name__)
    return JSONResponse(
        status_code=exc.status_code,
        content=SearchErrorResponse(error=exc.message).model_dump(),
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("search_request_invalid", errors=len(exc.errors()))
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=SearchErrorResponse(error="Invalid request body").model_dump(),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(SearchError, search_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
