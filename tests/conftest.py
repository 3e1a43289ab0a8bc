"""Shared pytest fixtures for all tests."""

import asyncio
import shutil
from pathlib import Path

import pytest

from betterspecs.core.knowledge import ContentLoader, KnowledgeStore


@pytest.fixture
def data_dir():
    """Get the path to the static test content directory."""
    return Path(__file__).parent / "knowledge" / "data"


@pytest.fixture
def content_dir(tmp_path, data_dir):
    """A writable copy of the test content."""
    target = tmp_path / "content"
    shutil.copytree(data_dir, target)
    return target


@pytest.fixture
def empty_content_dir(tmp_path):
    """A content directory with nothing in it."""
    target = tmp_path / "empty"
    target.mkdir()
    return target


@pytest.fixture
def write_guideline(content_dir):
    """Write a guideline document into the writable content copy."""
    def _write(filename: str, text: str) -> Path:
        path = content_dir / "guidelines" / filename
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def loader(data_dir):
    """Create a ContentLoader over the static test content."""
    return ContentLoader(data_dir)


@pytest.fixture
def store(data_dir):
    """An initialized KnowledgeStore over the static test content."""
    knowledge_store = KnowledgeStore(content_dir=data_dir)
    asyncio.run(knowledge_store.initialize())
    return knowledge_store
