"""
FastAPI integration of the error pipeline.

Every route runs inside ErrorBoundaryMiddleware, the innermost stage of
the middleware pipeline, which hands failures to the responder. Request
validation failures raised by FastAPI before the route runs are routed
to the same responder so they share the VALIDATION_ERROR body.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response
from starlette.types import ASGIApp

from futureself.core.config import Environment
from futureself.shared.errors.boundary import async_boundary
from futureself.shared.errors.responder import respond

logger = logging.getLogger(__name__)


def error_json_response(failure: BaseException, mode: Environment) -> JSONResponse:
    """Render a failure as the standard JSON error response."""
    response = respond(failure, mode)
    return JSONResponse(status_code=response.status_code, content=response.body)


class ErrorBoundaryMiddleware(BaseHTTPMiddleware):
    """Routes every failure raised below it to the responder, once."""

    def __init__(self, app: ASGIApp, mode: Environment = Environment.PRODUCTION) -> None:
        super().__init__(app)
        self._mode = mode

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        guarded = async_boundary(call_next, self._on_failure)
        return await guarded(request)

    def _on_failure(self, exc: Exception) -> JSONResponse:
        return error_json_response(exc, self._mode)


def register_error_handlers(app: FastAPI, mode: Environment) -> None:
    """Register handlers for failures raised outside route bodies.

    Args:
        app: The FastAPI application instance.
        mode: Environment mode threaded into the responder.
    """

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(
        _request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Request body, path or header did not match its schema."""
        return error_json_response(exc, mode)

    @app.exception_handler(Exception)
    async def handle_unexpected(_request: Request, exc: Exception) -> JSONResponse:
        """Failures raised outside the error boundary (outer middleware)."""
        logger.exception("Failure outside the error boundary: %s", type(exc).__name__)
        return error_json_response(exc, mode)
