"""
The knowledge store.

Holds the four datasets and the two search indices. A store is created by
its owner, initialized once (asynchronously), and then only read.
"""

import asyncio
import logging
from pathlib import Path
from typing import Dict, List, Optional

from ...config import BUILTIN_CONTENT_DIR
from ...domain.constants import DEFAULT_SEARCH_LIMIT, DEFAULT_SEARCH_THRESHOLD
from ...domain.exceptions import KnowledgeBaseLoadError
from ...domain.models import (
    AntiPattern,
    CodeExample,
    ConfigurationTemplate,
    Guideline,
    SearchOptions,
)
from .loader import ContentLoader
from .search import FuzzyIndex, build_indices

logger = logging.getLogger(__name__)


class KnowledgeStore:
    """
    Read-only knowledge base with lookup, filtering and fuzzy search.

    Usage:
        store = KnowledgeStore(content_dir=Path("content"))
        await store.initialize()
        store.search_guidelines("let vs before", limit=5)

    Callers must await initialize() before querying. Queries made earlier
    see empty datasets and empty search results.
    """

    def __init__(
        self,
        content_dir: Optional[Path] = None,
        loader: Optional[ContentLoader] = None,
        threshold: float = DEFAULT_SEARCH_THRESHOLD,
    ):
        """
        Initialize an empty store.

        Args:
            content_dir: Content directory; defaults to the packaged content.
                Ignored when a loader is given.
            loader: Preconfigured content loader
            threshold: Fuzzy match threshold for both indices
        """
        self.loader = loader or ContentLoader(content_dir or BUILTIN_CONTENT_DIR)
        self.threshold = threshold

        self._guidelines: Dict[str, Guideline] = {}
        self._examples: Dict[str, CodeExample] = {}
        self._anti_patterns: Dict[str, AntiPattern] = {}
        self._configurations: Dict[str, ConfigurationTemplate] = {}

        self._guideline_index: Optional[FuzzyIndex[Guideline]] = None
        self._example_index: Optional[FuzzyIndex[CodeExample]] = None

        self._initialized = False

    def __repr__(self) -> str:
        return f"KnowledgeStore(loader={self.loader!r}, initialized={self._initialized})"

    @property
    def initialized(self) -> bool:
        return self._initialized

    async def initialize(self) -> None:
        """
        Load all content and build the search indices.

        Runs at most once; later calls return immediately.

        Raises:
            KnowledgeBaseLoadError: If loading fails beyond per-dataset
                recovery. The store stays uninitialized.
        """
        if self._initialized:
            return

        try:
            content = await asyncio.to_thread(self.loader.load)
            guideline_index, example_index = build_indices(
                list(content.guidelines.values()),
                list(content.examples.values()),
                threshold=self.threshold,
            )
        except Exception as e:
            logger.error("Failed to initialize knowledge base: %s", e)
            raise KnowledgeBaseLoadError(f"Failed to initialize knowledge base: {e}") from e

        self._guidelines = content.guidelines
        self._examples = content.examples
        self._anti_patterns = content.anti_patterns
        self._configurations = content.configurations
        self._guideline_index = guideline_index
        self._example_index = example_index
        self._initialized = True

        logger.info(
            "Knowledge base initialized with %d guidelines, %d examples, "
            "%d anti-patterns, %d configuration templates",
            len(self._guidelines),
            len(self._examples),
            len(self._anti_patterns),
            len(self._configurations),
        )

    def stats(self) -> Dict[str, int]:
        """Record counts per dataset."""
        return {
            "guidelines": len(self._guidelines),
            "examples": len(self._examples),
            "anti_patterns": len(self._anti_patterns),
            "configurations": len(self._configurations),
        }

    # --- Guidelines ---

    def get_guideline(self, guideline_id: str) -> Optional[Guideline]:
        return self._guidelines.get(guideline_id)

    def get_all_guidelines(self) -> List[Guideline]:
        return list(self._guidelines.values())

    def get_guidelines_by_category(self, category: str) -> List[Guideline]:
        return [g for g in self._guidelines.values() if g.category == category]

    def search_guidelines(
        self,
        query: str,
        limit: int = DEFAULT_SEARCH_LIMIT,
        categories: Optional[List[str]] = None,
        tags: Optional[List[str]] = None,
    ) -> List[Guideline]:
        """
        Fuzzy search over guideline title, body, tags and category.

        Args:
            query: Free text; blank queries match nothing
            limit: Maximum number of results (validated upstream to 1..50)
            categories: Keep only guidelines in one of these categories
            tags: Keep only guidelines sharing at least one of these tags

        Returns:
            Best matches first, at most `limit` of them
        """
        if self._guideline_index is None:
            return []

        results = []
        for hit in self._guideline_index.search(query):
            guideline = hit.item
            if categories and guideline.category not in categories:
                continue
            if tags and not _shares_tag(guideline.tags, tags):
                continue
            results.append(guideline)
            if len(results) >= limit:
                break
        return results

    def search(self, options: SearchOptions) -> List[Guideline]:
        """Guideline search driven by validated options."""
        return self.search_guidelines(
            options.query,
            limit=options.limit,
            categories=options.categories,
            tags=options.tags,
        )

    # --- Examples ---

    def get_example(self, example_id: str) -> Optional[CodeExample]:
        return self._examples.get(example_id)

    def get_all_examples(self) -> List[CodeExample]:
        return list(self._examples.values())

    def get_examples_by_type(self, spec_type: str) -> List[CodeExample]:
        return [e for e in self._examples.values() if e.spec_type == spec_type]

    def search_examples(
        self,
        query: str,
        limit: int = DEFAULT_SEARCH_LIMIT,
        complexity: Optional[str] = None,
        tags: Optional[List[str]] = None,
    ) -> List[CodeExample]:
        """
        Fuzzy search over example title, description, scenario and tags.

        Same contract as search_guidelines(), filtering on complexity instead
        of category.
        """
        if self._example_index is None:
            return []

        results = []
        for hit in self._example_index.search(query):
            example = hit.item
            if complexity and example.complexity != complexity:
                continue
            if tags and not _shares_tag(example.tags, tags):
                continue
            results.append(example)
            if len(results) >= limit:
                break
        return results

    def search_examples_with(self, options: SearchOptions) -> List[CodeExample]:
        """Example search driven by validated options."""
        return self.search_examples(
            options.query,
            limit=options.limit,
            complexity=options.complexity,
            tags=options.tags,
        )

    # --- Anti-patterns ---

    def get_anti_pattern(self, anti_pattern_id: str) -> Optional[AntiPattern]:
        return self._anti_patterns.get(anti_pattern_id)

    def get_all_anti_patterns(self) -> List[AntiPattern]:
        return list(self._anti_patterns.values())

    # --- Configurations ---

    def get_configuration(self, configuration_id: str) -> Optional[ConfigurationTemplate]:
        return self._configurations.get(configuration_id)

    def get_all_configurations(self) -> List[ConfigurationTemplate]:
        return list(self._configurations.values())

    def get_configurations_by_type(self, config_type: str) -> List[ConfigurationTemplate]:
        return [c for c in self._configurations.values() if c.type == config_type]


def _shares_tag(record_tags: List[str], wanted: List[str]) -> bool:
    wanted_lower = {t.lower() for t in wanted}
    return any(t.lower() in wanted_lower for t in record_tags)
