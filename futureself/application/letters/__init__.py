"""Use cases for the letters bounded context."""
