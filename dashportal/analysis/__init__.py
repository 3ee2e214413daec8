"""Usage analytics."""
