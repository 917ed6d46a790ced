"""Periodized obstacle-course-race training planner."""

__version__ = "0.1.0"
