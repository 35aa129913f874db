"""
Single dispatch point from failure to error response.

Every failure, whatever its origin, leaves the service through
``respond``. The environment mode is passed in explicitly; nothing here
reads process-global state.

Production responses for unclassified failures never contain the
original message or a stack trace.
"""

import logging
import traceback
from dataclasses import dataclass
from typing import Any

from futureself.core.config import Environment
from futureself.shared.errors.normalizer import normalize

logger = logging.getLogger(__name__)

GENERIC_MESSAGE = "An unexpected error occurred"


@dataclass(frozen=True)
class ErrorResponse:
    """Status code and JSON body ready to be sent."""

    status_code: int
    body: dict[str, Any]


def format_stack(failure: BaseException) -> str:
    """Render the failure's traceback as a single string."""
    return "".join(
        traceback.format_exception(type(failure), failure, failure.__traceback__)
    )


def respond(failure: BaseException, mode: Environment) -> ErrorResponse:
    """Build the error response for a failure.

    Args:
        failure: The exception raised while handling the request.
        mode: Current environment; development exposes internals.

    Returns:
        An ErrorResponse with body
        ``{"success": False, "error": {"code", "message", "fields"?, "stack"?}}``.
    """
    is_development = mode is Environment.DEVELOPMENT
    normalized = normalize(failure)

    log = logger.error if normalized.status >= 500 else logger.warning
    log("Error: %s (%s)", str(failure) or type(failure).__name__, normalized.code)
    if normalized.provider:
        logger.error(
            "AI provider failure: status=%s message=%s",
            normalized.provider.get("status"),
            normalized.provider.get("message"),
        )
    if is_development:
        logger.error("Stack: %s", format_stack(failure))

    error: dict[str, Any] = {"code": normalized.code}
    if normalized.operational:
        error["message"] = normalized.message
        if normalized.fields:
            error["fields"] = normalized.fields
    else:
        error["message"] = normalized.message if is_development else GENERIC_MESSAGE
        if is_development:
            error["stack"] = format_stack(failure)

    return ErrorResponse(
        status_code=normalized.status,
        body={"success": False, "error": error},
    )
