"""Hierarchy-scoped read service for client groups."""

__version__ = "1.0.0"
