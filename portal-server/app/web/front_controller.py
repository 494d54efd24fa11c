"""Middleware every request passes through before dispatch."""

from __future__ import annotations

import logging

from fastapi import Request
from fastapi.exception_handlers import http_exception_handler
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response
from starlette.types import ASGIApp

from .errors import ErrorHandler
from .session import SessionManager

logger = logging.getLogger(__name__)


class FrontController(BaseHTTPMiddleware):
    """Starts the session, dispatches, and hands failures to the error handler."""

    def __init__(self, app: ASGIApp, *, session_manager: SessionManager, error_handler: ErrorHandler) -> None:
        super().__init__(app)
        self.session_manager = session_manager
        self.error_handler = error_handler

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        try:
            self.session_manager.start(request)
            return await call_next(request)
        except Exception as exc:  # pylint: disable=broad-except
            return self.error_handler.handle(request, exc)


def http_error_handler(error_handler: ErrorHandler, api_prefix: str):
    """Route HTTP errors raised by pages to the error handler, keep JSON for the API."""

    async def handler(request: Request, exc: StarletteHTTPException) -> Response:
        if api_prefix and request.url.path.startswith(api_prefix):
            return await http_exception_handler(request, exc)
        logger.debug("HTTP %s on %s", exc.status_code, request.url.path)
        response = error_handler.handle(request, exc)
        for name, value in (exc.headers or {}).items():
            response.headers.setdefault(name, value)
        return response

    return handler
