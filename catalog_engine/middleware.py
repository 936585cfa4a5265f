"""API middleware.

Provides request ID correlation and request logging for catalog queries.
"""

import time
from typing import Callable
from uuid import uuid4

import structlog
from fastapi import FastAPI, Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = structlog.get_logger()

REQUEST_ID_HEADER = "X-Request-ID"


def get_request_id(request: Request) -> str | None:
    """Request ID assigned by RequestContextMiddleware, if any."""
    return getattr(request.state, "request_id", None)


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Binds per-request context for catalog logging.

    The request ID (taken from the X-Request-ID header or generated) is
    stored on request state, echoed in the response headers and bound to
    the structlog context together with the method, path and raw catalog
    query parameters. Every event logged while the request is handled,
    including "Catalog query executed", carries those fields.
    """

    async def dispatch(
        self, request: Request, call_next: Callable
    ) -> Response:
        """Handle a request inside its logging context.

        Args:
            request: Incoming request.
            call_next: Next middleware/handler.

        Returns:
            Response with request ID header.
        """
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid4())
        request.state.request_id = request_id

        context = {
            "request_id": request_id,
            "method": request.method,
            "path": request.url.path,
        }
        if request.query_params:
            context["query_params"] = dict(request.query_params)

        with structlog.contextvars.bound_contextvars(**context):
            start_time = time.perf_counter()
            response = None
            try:
                response = await call_next(request)
            finally:
                logger.info(
                    "Request completed",
                    status_code=getattr(response, "status_code", 500),
                    duration_ms=round((time.perf_counter() - start_time) * 1000, 2),
                )

        response.headers[REQUEST_ID_HEADER] = request_id
        return response


def setup_middleware(app: FastAPI) -> None:
    """Register middleware on the application.

    Args:
        app: FastAPI application.
    """
    app.add_middleware(RequestContextMiddleware)
