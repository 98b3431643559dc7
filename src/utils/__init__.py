"""Utility modules for the Law Firm AI Grader."""

from .config import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
]
