"""
Failure normalization.

Turns any failure raised while handling a request into one
NormalizedError. Storage-layer failures are recognised by shape
(failure name, error code, attached collections) rather than by type,
so the document store does not need to know about AppError and this
module does not need to know which store is in use.

The checks run in a fixed order and the first match wins. Failure
shapes overlap (anything may carry a ``code`` attribute), so reordering
them changes behaviour.
"""

from dataclasses import dataclass, field
from typing import Any, Optional

from futureself.shared.errors.taxonomy import AppError, ErrorKind

VALIDATION_FAILURE_NAMES = frozenset({"ValidationError", "RequestValidationError"})
CAST_FAILURE_NAME = "CastError"
DUPLICATE_KEY_CODE = 11000

INVALID_ID_MESSAGE = "Invalid ID format"
DEFAULT_VALIDATION_MESSAGE = "Validation failed"
DEFAULT_CODE = "ERROR"


@dataclass(frozen=True)
class NormalizedError:
    """Canonical shape of a failure, before environment-specific masking.

    Attributes:
        status: HTTP status code.
        code: Machine-readable error code.
        message: Message as raised (may be internal for non-operational errors).
        fields: Per-field messages, if any.
        operational: False only for unclassified failures.
    """

    status: int
    code: str
    message: str
    fields: Optional[dict[str, str]] = None
    operational: bool = True
    provider: dict[str, Any] = field(default_factory=dict)


def failure_name(failure: BaseException) -> str:
    """Return the failure's declared name, falling back to its class name.

    Only a class-level ``name`` counts; builtins such as AttributeError
    carry an unrelated per-instance ``name``.
    """
    name = getattr(type(failure), "name", None)
    return name if isinstance(name, str) else type(failure).__name__


def leaf_field(path: Any) -> str:
    """Reduce a field path to its last named segment.

    ``"reflections.0.reflection"`` and ``("reflections", 0, "reflection")``
    both become ``"reflection"``. Positional indexes are skipped.
    """
    if isinstance(path, str):
        segments = path.split(".")
    else:
        segments = [str(part) for part in path if not isinstance(part, int)]
    segments = [segment for segment in segments if segment and not segment.isdigit()]
    return segments[-1] if segments else "__root__"


def extract_field_errors(failure: Any) -> dict[str, str]:
    """Map each offending field to its message, in the failure's own order.

    Fields sharing a leaf name (two goals' ``text``) keep the position of
    the first occurrence and the message of the last.
    """
    field_errors: dict[str, str] = {}
    for error in failure.errors():
        name = leaf_field(error.get("loc", ()))
        field_errors[name] = error.get("msg", DEFAULT_VALIDATION_MESSAGE)
    return field_errors


def _is_storage_validation(failure: BaseException) -> bool:
    return failure_name(failure) in VALIDATION_FAILURE_NAMES and callable(
        getattr(failure, "errors", None)
    )


def _is_storage_cast(failure: BaseException) -> bool:
    return failure_name(failure) == CAST_FAILURE_NAME


def _is_duplicate_key(failure: BaseException) -> bool:
    return getattr(failure, "code", None) == DUPLICATE_KEY_CODE and bool(
        getattr(failure, "key_value", None)
    )


def normalize(failure: BaseException) -> NormalizedError:
    """Classify a failure into exactly one (code, status) pair.

    Args:
        failure: Anything raised during request handling.

    Returns:
        The normalized error. Unrecognised failures become INTERNAL_ERROR.
    """
    if _is_storage_validation(failure):
        field_errors = extract_field_errors(failure)
        summary = next(iter(field_errors.values()), DEFAULT_VALIDATION_MESSAGE)
        return NormalizedError(
            status=ErrorKind.VALIDATION.http_status,
            code=ErrorKind.VALIDATION.code,
            message=summary,
            fields=field_errors,
        )

    if _is_storage_cast(failure):
        return NormalizedError(
            status=ErrorKind.INVALID_ID.http_status,
            code=ErrorKind.INVALID_ID.code,
            message=INVALID_ID_MESSAGE,
        )

    if _is_duplicate_key(failure):
        duplicate = AppError.duplicate(next(iter(failure.key_value)))
        return NormalizedError(
            status=duplicate.http_status,
            code=duplicate.code,
            message=duplicate.message,
            fields=duplicate.fields,
        )

    if isinstance(failure, AppError):
        provider = {}
        if failure.provider_status is not None:
            provider["status"] = failure.provider_status
        if failure.provider_message:
            provider["message"] = failure.provider_message
        return NormalizedError(
            status=failure.http_status,
            code=failure.code or DEFAULT_CODE,
            message=failure.message,
            fields=failure.fields or None,
            provider=provider,
        )

    return NormalizedError(
        status=ErrorKind.INTERNAL.http_status,
        code=ErrorKind.INTERNAL.code,
        message=str(failure) or type(failure).__name__,
        operational=False,
    )
