"""Tests for KnowledgeStore."""

import asyncio
from unittest.mock import Mock

import pytest
from pydantic import ValidationError

from betterspecs.core.knowledge import ContentLoader, KnowledgeStore
from betterspecs.domain.constants import GUIDELINE_CATEGORIES
from betterspecs.domain.exceptions import KnowledgeBaseLoadError
from betterspecs.domain.models import SearchOptions


class TestInitialization:
    """Tests for the one-shot initialization phase."""

    def test_uninitialized_store_is_empty(self, data_dir):
        store = KnowledgeStore(content_dir=data_dir)

        assert not store.initialized
        assert store.get_all_guidelines() == []
        assert store.search_guidelines("let") == []
        assert store.search_examples("validation") == []

    def test_initialize_populates_datasets(self, store):
        assert store.initialized
        assert store.stats() == {
            "guidelines": 5,
            "examples": 5,
            "anti_patterns": 3,
            "configurations": 2,
        }

    def test_initialize_runs_once(self, data_dir):
        """Test that a second initialize() does not reload content."""
        loader = ContentLoader(data_dir)
        loader.load = Mock(wraps=loader.load)
        store = KnowledgeStore(loader=loader)

        asyncio.run(store.initialize())
        asyncio.run(store.initialize())

        assert loader.load.call_count == 1

    def test_fatal_error_is_wrapped(self):
        """Test that unexpected loader failures propagate as KnowledgeBaseLoadError."""
        loader = Mock()
        loader.load.side_effect = RuntimeError("disk on fire")
        store = KnowledgeStore(loader=loader)

        with pytest.raises(KnowledgeBaseLoadError, match="disk on fire"):
            asyncio.run(store.initialize())

        assert not store.initialized

    def test_default_content_dir_is_bundled(self):
        """Test that the packaged content loads with no arguments."""
        store = KnowledgeStore()
        asyncio.run(store.initialize())

        assert len(store.get_all_guidelines()) >= 8
        assert store.get_guideline("06_mocks_and_http_stubs").category == "mocking"


class TestGuidelineQueries:
    """Tests for guideline lookups and search."""

    def test_get_guideline(self, store):
        assert store.get_guideline("03_mocking").title == "Mocking"

    def test_get_unknown_guideline(self, store):
        assert store.get_guideline("nope") is None

    def test_all_categories_valid(self, store):
        for guideline in store.get_all_guidelines():
            assert store.get_guideline(guideline.id).category in GUIDELINE_CATEGORIES

    def test_by_category_exact(self, store):
        """Test that the category filter is an exact match."""
        mocking = store.get_guidelines_by_category("mocking")

        assert [g.id for g in mocking] == ["03_mocking"]
        assert store.get_guidelines_by_category("mock") == []

    def test_by_category_preserves_order(self, store):
        organization = store.get_guidelines_by_category("organization")
        assert [g.id for g in organization] == ["02_contexts", "04_network_boundaries"]

    def test_empty_query(self, store):
        assert store.search_guidelines("") == []

    def test_unmatched_query(self, store):
        assert store.search_guidelines("xylophone") == []

    def test_title_match_ranks_above_tag_match(self, store):
        ids = [g.id for g in store.search_guidelines("mocking")]

        assert ids.index("03_mocking") < ids.index("04_network_boundaries")

    @pytest.mark.parametrize("limit", range(1, 51))
    def test_limit_respected(self, store, limit):
        assert len(store.search_guidelines("e", limit=limit)) <= limit

    def test_limit_truncates(self, store):
        assert len(store.search_guidelines("e", limit=2)) == 2

    def test_category_filter(self, store):
        results = store.search_guidelines("mocking", categories=["organization"])
        assert [g.id for g in results] == ["04_network_boundaries"]

    def test_tag_filter(self, store):
        results = store.search_guidelines("e", tags=["LET"])
        assert [g.id for g in results] == ["05_setup"]

    def test_search_with_options(self, store):
        options = SearchOptions(query="mocking", limit=1)
        assert [g.id for g in store.search(options)] == ["03_mocking"]

    @pytest.mark.parametrize("limit", [0, 51])
    def test_options_reject_out_of_range_limit(self, limit):
        with pytest.raises(ValidationError):
            SearchOptions(query="let", limit=limit)


class TestExampleQueries:
    """Tests for example lookups and search."""

    def test_get_example(self, store):
        assert store.get_example("ex-job-enqueue").spec_type == "job"

    def test_get_unknown_example(self, store):
        assert store.get_example("nope") is None

    def test_by_type(self, store):
        assert [e.id for e in store.get_examples_by_type("model")] == ["ex-model-validation"]
        assert store.get_examples_by_type("controller") == []

    def test_search_validation_scenario(self, store):
        """Test that only the two examples describing validation are returned."""
        results = store.search_examples("validation", limit=3)
        assert [e.id for e in results] == ["ex-model-validation", "ex-form-object"]

    def test_search_complexity_filter(self, store):
        results = store.search_examples("validation", complexity="beginner")
        assert [e.id for e in results] == ["ex-model-validation"]

    def test_search_with_options(self, store):
        options = SearchOptions(query="validation", limit=1)
        assert [e.id for e in store.search_examples_with(options)] == ["ex-model-validation"]

    def test_empty_query(self, store):
        assert store.search_examples("") == []


class TestAntiPatternAndConfigurationQueries:
    """Tests for the unindexed datasets."""

    def test_get_anti_pattern(self, store):
        assert store.get_anti_pattern("should-syntax").severity == "medium"

    def test_get_unknown_anti_pattern(self, store):
        assert store.get_anti_pattern("nope") is None

    def test_all_anti_patterns(self, store):
        assert [a.id for a in store.get_all_anti_patterns()] == [
            "should-syntax", "real-http-calls", "instance-variables",
        ]

    def test_get_configuration(self, store):
        assert store.get_configuration("test-guardfile").type == "guardfile"

    def test_get_unknown_configuration(self, store):
        assert store.get_configuration("nonexistent-id") is None

    def test_configurations_by_type(self, store):
        assert [c.id for c in store.get_configurations_by_type("spec_helper")] == ["test-spec-helper"]
        assert store.get_configurations_by_type("gemfile") == []

    def test_records_are_immutable(self, store):
        with pytest.raises(ValidationError):
            store.get_configuration("test-guardfile").name = "changed"
