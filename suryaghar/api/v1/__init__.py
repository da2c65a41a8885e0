"""
Public API v1 routes
"""
from . import applicants, auth, content, jobs, validate

__all__ = [
    "applicants",
    "auth",
    "content",
    "jobs",
    "validate",
]
