"""
Content loading for the knowledge base.

Reads guideline documents (Markdown with YAML front matter) and the three
structured datasets from a content directory. Each dataset is loaded
independently; a dataset that cannot be loaded is replaced by the built-in
defaults and never blocks the others.
"""

import datetime
import logging
from pathlib import Path
from typing import Any, Callable, Dict, List, NamedTuple, Optional, Type, TypeVar

import frontmatter
import yaml
from pydantic import ValidationError

from ...domain.exceptions import ContentSourceError
from ...domain.models import (
    AntiPattern,
    CodeExample,
    ConfigurationTemplate,
    Guideline,
    KnowledgeRecord,
)
from ...protocols import DefaultContent
from .categories import infer_category, is_known_category
from .defaults import DefaultContentProvider

logger = logging.getLogger(__name__)

R = TypeVar("R", bound=KnowledgeRecord)

GUIDELINES_DIRNAME = "guidelines"
DATA_FILE_SUFFIXES = (".yaml", ".yml", ".json")


class LoadedContent(NamedTuple):
    """The four datasets keyed by id, in load order."""
    guidelines: Dict[str, Guideline]
    examples: Dict[str, CodeExample]
    anti_patterns: Dict[str, AntiPattern]
    configurations: Dict[str, ConfigurationTemplate]


class ContentLoader:
    """
    Loads all knowledge base content from a directory.

    Layout:
        <content_dir>/
        ├── guidelines/*.md         # One guideline per document
        ├── examples.yaml           # List of code examples
        ├── antipatterns.yaml       # List of anti-patterns
        └── configurations.yaml     # List of configuration templates

    Structured files may also use the .yml or .json extension.
    """

    def __init__(self, content_dir: Path, defaults: Optional[DefaultContent] = None):
        self.content_dir = Path(content_dir)
        self.defaults = defaults or DefaultContentProvider()

    def __repr__(self) -> str:
        return f"ContentLoader(content_dir={self.content_dir!r})"

    def load(self) -> LoadedContent:
        """
        Load every dataset.

        Returns:
            LoadedContent with all four id -> record maps populated. No map is
            ever empty: unusable sources are replaced by defaults.
        """
        return LoadedContent(
            guidelines=self.load_guidelines(),
            examples=self._load_dataset("examples", CodeExample, self.defaults.examples),
            anti_patterns=self._load_dataset("antipatterns", AntiPattern, self.defaults.anti_patterns),
            configurations=self._load_dataset(
                "configurations", ConfigurationTemplate, self.defaults.configurations
            ),
        )

    # --- Guidelines ---

    def load_guidelines(self) -> Dict[str, Guideline]:
        """Load guideline documents, falling back to defaults if none load."""
        try:
            paths = self._scan_guideline_files()
        except ContentSourceError as e:
            logger.warning("%s; using built-in default guidelines", e)
            return self._index(self.defaults.guidelines(), "guidelines")

        guidelines: Dict[str, Guideline] = {}
        for path in paths:
            try:
                guideline = self.parse_guideline(path)
            except (OSError, UnicodeDecodeError, yaml.YAMLError, ValidationError) as e:
                logger.warning("Skipping guideline %s: %s", path.name, e)
                continue
            guidelines[guideline.id] = guideline

        if not guidelines:
            logger.warning(
                "No guidelines could be loaded from %s; using built-in defaults",
                self.content_dir / GUIDELINES_DIRNAME,
            )
            return self._index(self.defaults.guidelines(), "guidelines")

        logger.info("Loaded %d guidelines", len(guidelines))
        return guidelines

    def _scan_guideline_files(self) -> List[Path]:
        """
        List guideline documents in a stable order.

        Raises:
            ContentSourceError: If the guidelines directory does not exist
        """
        guidelines_dir = self.content_dir / GUIDELINES_DIRNAME
        if not guidelines_dir.is_dir():
            raise ContentSourceError(f"Guidelines directory not found: {guidelines_dir}")
        return sorted(guidelines_dir.glob("*.md"))

    def parse_guideline(self, path: Path) -> Guideline:
        """
        Parse one guideline document.

        Explicit front matter always wins; missing title and category are
        derived from the body and the filename respectively.

        Raises:
            OSError, UnicodeDecodeError: If the file cannot be read
            yaml.YAMLError: If the front matter is not valid YAML
            pydantic.ValidationError: If the resulting record is invalid
        """
        post = frontmatter.load(str(path), encoding="utf-8")
        metadata = post.metadata
        body = post.content

        category = metadata.get("category")
        if category is not None and not is_known_category(category):
            logger.warning(
                "Guideline %s has unknown category %r; inferring from filename",
                path.name, category,
            )
            category = None

        return Guideline(
            id=path.stem,
            title=metadata.get("title") or extract_title(body),
            category=category or infer_category(path.name),
            content=body,
            examples=_as_list(metadata.get("examples")),
            tags=_as_list(metadata.get("tags")),
            related_guidelines=_as_list(metadata.get("relatedGuidelines", metadata.get("related_guidelines"))),
            priority=metadata.get("priority") or "medium",
            last_updated=_as_text(metadata.get("lastUpdated", metadata.get("last_updated"))),
        )

    # --- Structured datasets ---

    def _load_dataset(
        self,
        stem: str,
        model: Type[R],
        fallback: Callable[[], List[R]],
    ) -> Dict[str, R]:
        """
        Load one structured dataset, substituting defaults on failure.

        Args:
            stem: File name without extension (e.g. 'examples')
            model: Record model to validate each entry against
            fallback: Provider of the default records

        Returns:
            Dict mapping record id to record, never empty
        """
        try:
            raw_records = self._read_data_file(stem)
        except ContentSourceError as e:
            logger.warning("%s; using built-in default %s", e, stem)
            return self._index(fallback(), stem)

        records: Dict[str, R] = {}
        for position, raw in enumerate(raw_records):
            try:
                record = model.model_validate(raw)
            except ValidationError as e:
                logger.warning("Skipping invalid %s entry #%d: %s", stem, position, e)
                continue
            if record.id in records:
                logger.warning("Duplicate %s id '%s'; keeping the last definition", stem, record.id)
            records[record.id] = record

        if not records:
            logger.warning("No valid %s found; using built-in defaults", stem)
            return self._index(fallback(), stem)

        logger.info("Loaded %d %s", len(records), stem)
        return records

    def _find_data_file(self, stem: str) -> Path:
        for suffix in DATA_FILE_SUFFIXES:
            candidate = self.content_dir / f"{stem}{suffix}"
            if candidate.is_file():
                return candidate
        raise ContentSourceError(f"No {stem} data file found in {self.content_dir}")

    def _read_data_file(self, stem: str) -> List[Any]:
        """
        Read and parse a structured data file.

        Raises:
            ContentSourceError: If the file is missing, unreadable, not valid
                YAML/JSON, or its top level is not a list
        """
        path = self._find_data_file(stem)
        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError) as e:
            raise ContentSourceError(f"Cannot read {path.name}: {e}") from e
        except yaml.YAMLError as e:
            raise ContentSourceError(f"Syntax error in {path.name}: {e}") from e

        if not isinstance(data, list):
            raise ContentSourceError(
                f"{path.name} must contain a list of records, got {type(data).__name__}"
            )
        return data

    @staticmethod
    def _index(records: List[R], label: str) -> Dict[str, R]:
        if not records:
            raise ValueError(f"Default content provider returned no {label}")
        return {record.id: record for record in records}


def extract_title(body: str) -> str:
    """Return the first non-blank line of a body without its heading marks."""
    for line in body.splitlines():
        if line.strip():
            return line.strip().lstrip("#").strip()
    return ""


def _as_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return [str(item) for item in value]
    return [str(value)]


def _as_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, (datetime.date, datetime.datetime)):
        return value.isoformat()
    return str(value)
