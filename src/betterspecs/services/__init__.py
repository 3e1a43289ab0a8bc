"""
Services layer for the Better Specs knowledge base.

Formats knowledge store results for callers.
"""

from .guidance import GuidanceService
from .examples import ExampleService
from .validation import SpecValidator, render_report
from .resources import ResourceProvider

__all__ = [
    "GuidanceService",
    "ExampleService",
    "SpecValidator",
    "render_report",
    "ResourceProvider",
]
