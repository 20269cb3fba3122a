"""FastAPI middleware for request context and cross-origin headers."""

import uuid

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from repairhub.core.logging import get_logger, request_id_var

logger = get_logger(__name__)

CORS_HEADERS: dict[str, str] = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


class ObservabilityMiddleware(BaseHTTPMiddleware):
    """Injects request_id into context vars for structured logging."""

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        # Generate or propagate request ID
        request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
        request_id_var.set(request_id)

        logger.debug(
            "request_started",
            method=request.method,
            path=request.url.path,
        )

        response = await call_next(request)

        response.headers["x-request-id"] = request_id

        logger.debug(
            "request_finished",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
        )

        return response


class CorsHeadersMiddleware(BaseHTTPMiddleware):
    """Attaches the open CORS headers to every response under the given paths.

    Applied to error responses too, so browser clients can read the
    ``{success: false, error}`` body of a 400 or 500.
    """

    def __init__(self, app, path_prefixes: tuple[str, ...] = ("/search",)) -> None:
        super().__init__(app)
        self.path_prefixes = path_prefixes

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        response = await call_next(request)
        if request.url.path.startswith(self.path_prefixes):
            for key, value in CORS_HEADERS.items():
                response.headers.setdefault(key, value)
        return response
