"""Utility modules for Content Planner."""

from .config import Settings, get_settings, make_random

__all__ = [
    "Settings",
    "get_settings",
    "make_random",
]
