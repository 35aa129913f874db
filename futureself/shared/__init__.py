"""
Shared kernel: cross-cutting concerns used by every layer.

Errors, logging and security live here. Nothing in this package
knows about letters.
"""
