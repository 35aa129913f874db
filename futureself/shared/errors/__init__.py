"""
Shared error handling package.

Centralizes error classification so that every failure, whatever
layer raised it, is turned into the same JSON error body.
"""

from futureself.shared.errors.taxonomy import AppError, ErrorKind

__all__ = ["AppError", "ErrorKind"]
