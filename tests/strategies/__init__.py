"""Hypothesis strategies for locoexport property-based testing.

Usage:
    from tests.strategies import locale_tags, project_locales
"""

from .locales import locale_tags, project_locales

__all__ = [
    "locale_tags",
    "project_locales",
]
