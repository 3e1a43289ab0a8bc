"""
Knowledge base exceptions.

These separate recoverable per-dataset problems from fatal initialization
failures and from errors at the resource boundary.
"""


class KnowledgeBaseError(Exception):
    """Base class for all knowledge base errors."""
    pass


class ContentSourceError(KnowledgeBaseError):
    """
    Raised when a single content source cannot be used.

    This indicates issues such as:
    - Missing directory or data file
    - Unreadable file
    - Invalid YAML/JSON syntax
    - Wrong top-level structure (e.g., a mapping instead of a list)

    The loader catches it and falls back to the built-in defaults for that
    dataset only.
    """
    pass


class KnowledgeBaseLoadError(KnowledgeBaseError):
    """
    Raised when initialization fails outside the per-dataset recovery.

    The store must not be used after this error.
    """
    pass


class ResourceError(KnowledgeBaseError):
    """Base class for resource lookup errors."""
    pass


class UnknownResourceError(ResourceError):
    """Raised when a resource URI does not match any known pattern."""
    pass


class ResourceNotFoundError(ResourceError):
    """Raised when a parameterized resource URI names an unknown entity."""
    pass
