"""
Better Specs knowledge base.

Curated RSpec guidelines, code examples, anti-patterns and configuration
templates with weighted fuzzy search.
"""

__version__ = "0.1.0"
