"""
Domain layer for the Better Specs knowledge base.

Contains all domain models, closed value sets and exceptions with no
dependencies on the loading or search machinery.
"""

from .models import (
    Guideline,
    CodeExample,
    AntiPattern,
    ConfigurationTemplate,
    SearchOptions,
    ValidationIssue,
    ValidationResult,
    ResourceDefinition,
    ResourceContent,
)
from .exceptions import (
    KnowledgeBaseError,
    ContentSourceError,
    KnowledgeBaseLoadError,
    ResourceError,
    UnknownResourceError,
    ResourceNotFoundError,
)

__all__ = [
    # Models
    "Guideline",
    "CodeExample",
    "AntiPattern",
    "ConfigurationTemplate",
    "SearchOptions",
    "ValidationIssue",
    "ValidationResult",
    "ResourceDefinition",
    "ResourceContent",
    # Exceptions
    "KnowledgeBaseError",
    "ContentSourceError",
    "KnowledgeBaseLoadError",
    "ResourceError",
    "UnknownResourceError",
    "ResourceNotFoundError",
]
