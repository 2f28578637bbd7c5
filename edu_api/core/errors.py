"""Error types raised by services and handlers, and their HTTP rendering.

Every failure leaves the API as ``{"error": message}`` with the status code
carried by the exception class.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = 'Internal server error.'

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class BadRequest(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = 'Bad request.'


class NotFound(ApiError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = 'Not found.'


class Conflict(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = 'Resource already exists.'


class Unauthorized(ApiError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = 'Invalid credentials.'


class StoreError(ApiError):
    default_message = 'Failed to query database.'


class UploadError(ApiError):
    default_message = 'Failed to upload file.'


class PersistenceError(ApiError):
    """The blob was stored but the row referencing it could not be written."""

    default_message = 'Failed to create attachment.'

    def __init__(self, message: str | None = None, object_key: str | None = None):
        super().__init__(message)
        self.object_key = object_key


class ConfigError(ApiError):
    default_message = 'Server is misconfigured.'


def _error_response(status_code: int, message) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={'error': message})


async def handle_api_error(request: Request, exc: ApiError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error('%s %s failed: %s', request.method, request.url.path, exc.message)
    return _error_response(exc.status_code, exc.message)


async def handle_http_exception(request: Request, exc: HTTPException) -> JSONResponse:
    return _error_response(exc.status_code, exc.detail)


async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    messages = []
    for error in exc.errors():
        location = '.'.join(str(part) for part in error.get('loc', ()) if part != 'body')
        messages.append(f"{location}: {error.get('msg')}" if location else error.get('msg'))
    return _error_response(status.HTTP_400_BAD_REQUEST, '; '.join(messages) or 'Invalid request.')


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception('Unhandled error on %s %s', request.method, request.url.path)
    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, ApiError.default_message)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, handle_api_error)
    app.add_exception_handler(HTTPException, handle_http_exception)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)
