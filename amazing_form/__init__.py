"""Courses, course assignments and forms, stored with SQLAlchemy and served over HTTP."""

__version__ = "0.1.0"
__all__ = ["__version__"]