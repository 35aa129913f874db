"""Adapters for the letters bounded context."""
