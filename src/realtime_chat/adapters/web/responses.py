"""JSON error responses and the error-mapping wrapper for route handlers."""

from __future__ import annotations

import functools
import json
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from realtime_chat.domain.errors import (
    AuthenticationError,
    ChatError,
    ImageUploadError,
    InvalidCredentialsError,
    UserNotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)

Handler = Callable[[Request], Awaitable[Response]]


class BadRequestError(ChatError):
    """Raised when a request body cannot be parsed."""


def error_response(message: str, status_code: int) -> JSONResponse:
    """Build the `{"message": ...}` error body clients expect."""
    return JSONResponse({"message": message}, status_code=status_code)


def status_for(error: ChatError) -> int:
    """Map a domain error to an HTTP status code."""
    if isinstance(error, AuthenticationError):
        return 401
    if isinstance(error, UserNotFoundError):
        return 404
    if isinstance(error, (ValidationError, InvalidCredentialsError, BadRequestError)):
        return 400
    if isinstance(error, ImageUploadError):
        return 502
    return 500


async def read_json_object(request: Request) -> dict[str, Any]:
    """Parse the request body as a JSON object.

    Raises:
        BadRequestError: If the body is not a JSON object.
    """
    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise BadRequestError("Invalid JSON body") from e
    if not isinstance(body, dict):
        raise BadRequestError("Request body must be a JSON object")
    return body


def handle_errors(handler: Handler) -> Handler:
    """Turn domain errors into JSON error responses and log unexpected failures."""

    @functools.wraps(handler)
    async def wrapper(request: Request) -> Response:
        try:
            return await handler(request)
        except ChatError as e:
            status_code = status_for(e)
            if status_code >= 500:
                logger.error(f"Error in {handler.__name__}: {e}", exc_info=True)
                message = "Image upload failed" if status_code == 502 else "Internal Server Error"
                return error_response(message, status_code)
            logger.info(f"Rejected {request.method} {request.url.path}: {e}")
            return error_response(str(e), status_code)
        except Exception:
            logger.exception(f"Unexpected error in {handler.__name__}")
            return error_response("Internal Server Error", 500)

    return wrapper
