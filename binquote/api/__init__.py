"""HTTP API for the quote engine."""
