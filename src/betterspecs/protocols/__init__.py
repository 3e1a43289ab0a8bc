"""
Port interfaces (protocols) for the knowledge base.

These define the contracts that content providers and stores must implement.
"""

from typing import List, Optional, Protocol
from ..domain.models import AntiPattern, CodeExample, ConfigurationTemplate, Guideline


class DefaultContent(Protocol):
    """
    Source of the built-in records used when a dataset cannot be loaded.

    Every method must return at least one record.
    """

    def guidelines(self) -> List[Guideline]:
        ...

    def examples(self) -> List[CodeExample]:
        ...

    def anti_patterns(self) -> List[AntiPattern]:
        ...

    def configurations(self) -> List[ConfigurationTemplate]:
        ...


class KnowledgeQueries(Protocol):
    """Read-only query surface the services depend on."""

    def get_guideline(self, guideline_id: str) -> Optional[Guideline]:
        ...

    def get_all_guidelines(self) -> List[Guideline]:
        ...

    def get_guidelines_by_category(self, category: str) -> List[Guideline]:
        ...

    def search_guidelines(
        self,
        query: str,
        limit: int = 10,
        categories: Optional[List[str]] = None,
        tags: Optional[List[str]] = None,
    ) -> List[Guideline]:
        ...

    def get_example(self, example_id: str) -> Optional[CodeExample]:
        ...

    def get_all_examples(self) -> List[CodeExample]:
        ...

    def get_examples_by_type(self, spec_type: str) -> List[CodeExample]:
        ...

    def search_examples(
        self,
        query: str,
        limit: int = 10,
        complexity: Optional[str] = None,
        tags: Optional[List[str]] = None,
    ) -> List[CodeExample]:
        ...

    def get_anti_pattern(self, anti_pattern_id: str) -> Optional[AntiPattern]:
        ...

    def get_all_anti_patterns(self) -> List[AntiPattern]:
        ...

    def get_configuration(self, configuration_id: str) -> Optional[ConfigurationTemplate]:
        ...

    def get_all_configurations(self) -> List[ConfigurationTemplate]:
        ...

    def get_configurations_by_type(self, config_type: str) -> List[ConfigurationTemplate]:
        ...
