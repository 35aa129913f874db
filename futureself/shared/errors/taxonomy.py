"""
Classified application errors.

Every expected failure in the service is an AppError tagged with one
ErrorKind. The kind fixes the HTTP status and the machine-readable code;
there is no subclass per kind, so classification is a lookup on the
discriminant rather than an isinstance ladder.

No framework imports allowed.
"""

from enum import Enum
from typing import Any, Mapping, Optional


class ErrorKind(Enum):
    """Closed set of classified failures: (HTTP status, error code)."""

    VALIDATION = (400, "VALIDATION_ERROR")
    INVALID_ID = (400, "INVALID_ID")
    DUPLICATE = (400, "DUPLICATE_ERROR")
    UNAUTHORIZED = (401, "UNAUTHORIZED")
    FORBIDDEN = (403, "FORBIDDEN")
    NOT_FOUND = (404, "NOT_FOUND")
    INTERNAL = (500, "INTERNAL_ERROR")
    AI_SERVICE = (503, "AI_SERVICE_ERROR")

    @property
    def http_status(self) -> int:
        return self.value[0]

    @property
    def code(self) -> str:
        return self.value[1]


def _provider_details(original: Any) -> tuple[Optional[int], Optional[str]]:
    """Pull status and message out of an upstream failure without raising.

    Handles the shapes HTTP clients commonly use: a ``status`` or
    ``status_code`` attribute on the error itself, or a ``response``
    carrying ``status_code``.
    """
    status = None
    for attr in ("status", "status_code"):
        try:
            candidate = getattr(original, attr, None)
        except Exception:
            candidate = None
        if isinstance(candidate, int):
            status = candidate
            break
    if status is None:
        try:
            candidate = getattr(getattr(original, "response", None), "status_code", None)
        except Exception:
            candidate = None
        if isinstance(candidate, int):
            status = candidate

    message = None
    try:
        candidate = getattr(original, "message", None)
        if isinstance(candidate, str) and candidate:
            message = candidate
        elif isinstance(original, BaseException):
            message = str(original) or None
    except Exception:
        message = None

    return status, message


class AppError(Exception):
    """An operational error: expected, classified, safe to show the user.

    Attributes:
        kind: Discriminant selecting status and code.
        message: Human-readable message returned to the client as-is.
        fields: Optional mapping of field name to field-level message.
        provider_status: Upstream status code (AI_SERVICE only, never sent).
        provider_message: Upstream message (AI_SERVICE only, never sent).
    """

    is_operational = True

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        fields: Optional[Mapping[str, str]] = None,
        provider_status: Optional[int] = None,
        provider_message: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.fields = dict(fields) if fields else None
        self.provider_status = provider_status
        self.provider_message = provider_message

    @property
    def http_status(self) -> int:
        return self.kind.http_status

    @property
    def code(self) -> str:
        return self.kind.code

    def __repr__(self) -> str:
        return f"AppError({self.kind.name}, {self.message!r})"

    @classmethod
    def validation(
        cls, message: str, fields: Optional[Mapping[str, str]] = None
    ) -> "AppError":
        """Invalid user input, optionally with per-field messages."""
        return cls(ErrorKind.VALIDATION, message, fields=fields)

    @classmethod
    def not_found(cls, message: str = "Resource not found") -> "AppError":
        return cls(ErrorKind.NOT_FOUND, message)

    @classmethod
    def forbidden(
        cls, message: str = "You do not have permission to perform this action"
    ) -> "AppError":
        return cls(ErrorKind.FORBIDDEN, message)

    @classmethod
    def unauthorized(cls, message: str = "Authentication required") -> "AppError":
        return cls(ErrorKind.UNAUTHORIZED, message)

    @classmethod
    def invalid_id(cls, message: str = "Invalid ID format") -> "AppError":
        return cls(ErrorKind.INVALID_ID, message)

    @classmethod
    def duplicate(cls, field: str) -> "AppError":
        return cls(
            ErrorKind.DUPLICATE,
            f"A record with this {field} already exists",
            fields={field: f"This {field} is already in use"},
        )

    @classmethod
    def internal(
        cls, message: str, fields: Optional[Mapping[str, str]] = None
    ) -> "AppError":
        """A known server-side failure whose message is safe to expose."""
        return cls(ErrorKind.INTERNAL, message, fields=fields)

    @classmethod
    def ai_service(
        cls,
        message: str = "AI service encountered an error",
        original: Any = None,
    ) -> "AppError":
        """Upstream AI failure. Provider details are kept for logs only."""
        provider_status, provider_message = (
            _provider_details(original) if original is not None else (None, None)
        )
        error = cls(
            ErrorKind.AI_SERVICE,
            message,
            provider_status=provider_status,
            provider_message=provider_message,
        )
        if isinstance(original, BaseException):
            error.__cause__ = original
        return error
