"""Error handling strategies, one per environment.

The front controller receives exactly one handler, picked at start-up by
:func:`select_error_handler`. A handler turns any exception raised while
dispatching a request into the response that is sent instead.
"""

from __future__ import annotations

import html
import linecache
import logging
import traceback
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Protocol

from fastapi import Request
from jinja2 import Environment
from starlette.responses import HTMLResponse, PlainTextResponse, Response

from app.core.config import Environment as AppEnvironment
from app.core.config import ErrorPageSettings

from .response import ErrorBlock, HeadBlock, PageResponse

logger = logging.getLogger(__name__)

DEFAULT_STATUS = 500
HANDLER_HEADER = "X-Error-Handler"
SOURCE_CONTEXT_LINES = 5


class ErrorHandler(Protocol):
    name: str

    def handle(self, request: Request, exc: BaseException) -> Response:
        ...


def resolve_error_code(exc: BaseException) -> Optional[int]:
    """Return the HTTP status carried by ``exc``, or None when it has none."""
    for attr in ("status_code", "code"):
        value = getattr(exc, attr, None)
        if isinstance(value, bool) or not isinstance(value, int):
            continue
        if value == 0:
            return None
        if 100 <= value <= 599:
            return value
        return None
    return None


def error_message(exc: BaseException) -> str:
    detail = getattr(exc, "detail", None)
    if isinstance(detail, str):
        return detail
    return _safe_message(exc)


def format_trace(exc: BaseException) -> str:
    return "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))


@dataclass(slots=True)
class ProductionErrorHandler:
    """Logs the failure and renders a generic error page without internals."""

    templates: Environment
    settings: ErrorPageSettings
    name: str = "production"

    def handle(self, request: Request, exc: BaseException) -> Response:
        try:
            logger.error("Error: %s Trace: %s", _safe_message(exc), format_trace(exc))
            code = resolve_error_code(exc)
            message = error_message(exc) if code else self.settings.fallback_message

            response = PageResponse(self.templates)
            response.set_status(code or DEFAULT_STATUS)
            response.append_content(HeadBlock(self.settings.title))
            response.append_content(ErrorBlock(code or DEFAULT_STATUS, message))
            sent = response.send()
        except Exception:  # pylint: disable=broad-except
            logger.exception("Failed to render error page for %s", request.url.path)
            sent = PlainTextResponse(self.settings.fallback_message, status_code=DEFAULT_STATUS)
        sent.headers[HANDLER_HEADER] = self.name
        return sent


@dataclass(slots=True)
class DebugErrorHandler:
    """Developer-facing page with the traceback and surrounding source lines."""

    templates: Environment
    template: str = "debug_error.html"
    name: str = "debug"

    def handle(self, request: Request, exc: BaseException) -> Response:
        status_code = resolve_error_code(exc) or DEFAULT_STATUS
        try:
            body = self.templates.get_template(self.template).render(
                exc_type=type(exc).__name__,
                exc_module=type(exc).__module__,
                message=_safe_message(exc),
                status_code=status_code,
                method=request.method,
                url=str(request.url),
                headers=dict(request.headers),
                frames=collect_frames(exc),
                trace=format_trace(exc),
            )
        except Exception:  # pylint: disable=broad-except
            logger.exception("Failed to render debug page for %s", request.url.path)
            body = f"<pre>{html.escape(format_trace(exc))}</pre>"
        response = HTMLResponse(content=body, status_code=status_code)
        response.headers[HANDLER_HEADER] = self.name
        return response


def collect_frames(exc: BaseException, context: int = SOURCE_CONTEXT_LINES) -> List[Dict[str, Any]]:
    frames: List[Dict[str, Any]] = []
    for frame in traceback.extract_tb(exc.__traceback__):
        lineno = frame.lineno or 0
        start = max(lineno - context, 1)
        lines = [
            {"lineno": number, "code": linecache.getline(frame.filename, number).rstrip("\n"), "current": number == lineno}
            for number in range(start, lineno + context + 1)
        ]
        frames.append(
            {
                "filename": frame.filename,
                "lineno": lineno,
                "function": frame.name,
                "lines": [line for line in lines if line["code"] or line["current"]],
            }
        )
    # innermost frame first
    frames.reverse()
    return frames


def select_error_handler(environment: AppEnvironment, templates: Environment, settings: ErrorPageSettings) -> ErrorHandler:
    if environment is AppEnvironment.PRODUCTION:
        return ProductionErrorHandler(templates=templates, settings=settings)
    if environment is AppEnvironment.DEVELOPMENT:
        return DebugErrorHandler(templates=templates)
    raise ValueError(f"unsupported environment: {environment!r}")


def _safe_message(exc: BaseException) -> str:
    try:
        return str(exc)
    except Exception:  # pylint: disable=broad-except
        return f"<unprintable {type(exc).__name__}>"
