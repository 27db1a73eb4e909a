"""Helper utilities for evned."""
