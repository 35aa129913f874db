"""HTTP interface for the letters bounded context."""
