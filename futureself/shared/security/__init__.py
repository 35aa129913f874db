"""HTTP security concerns (response headers)."""
