"""HTTP plumbing: session, response, error handling and the front controller."""

from .errors import DebugErrorHandler, ErrorHandler, ProductionErrorHandler, select_error_handler
from .exceptions import HttpError, ResponseAlreadySentError, ResponseError
from .front_controller import FrontController
from .response import ErrorBlock, HeadBlock, PageResponse
from .session import SessionManager

__all__ = [
    "DebugErrorHandler",
    "ErrorBlock",
    "ErrorHandler",
    "FrontController",
    "HeadBlock",
    "HttpError",
    "PageResponse",
    "ProductionErrorHandler",
    "ResponseAlreadySentError",
    "ResponseError",
    "SessionManager",
    "select_error_handler",
]
