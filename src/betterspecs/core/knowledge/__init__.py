"""
Knowledge base core.

Public API:
    KnowledgeStore: Caller-owned store with lookup, filtering and search
    ContentLoader: Reads guideline documents and structured datasets
    DefaultContentProvider: Built-in fallback records
    FuzzyIndex: Weighted fuzzy index used by the store
    infer_category: Filename -> guideline category rule table
"""

from .categories import infer_category
from .defaults import DefaultContentProvider
from .loader import ContentLoader, LoadedContent
from .search import FuzzyIndex, SearchHit, build_indices
from .store import KnowledgeStore

__all__ = [
    'KnowledgeStore',
    'ContentLoader',
    'LoadedContent',
    'DefaultContentProvider',
    'FuzzyIndex',
    'SearchHit',
    'build_indices',
    'infer_category',
]
