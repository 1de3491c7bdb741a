"""Boundary validation, serialization and session files."""
