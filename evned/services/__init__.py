"""Service layer for evned workflows."""
