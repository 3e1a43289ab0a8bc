"""
Domain models for the Better Specs knowledge base.

Contains all core data structures used across the application.
"""

from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from .constants import (
    Complexity,
    ConfigurationType,
    DEFAULT_SEARCH_LIMIT,
    GuidelineCategory,
    Priority,
    SEARCH_LIMIT_MAX,
    SEARCH_LIMIT_MIN,
    Severity,
    SpecType,
)


class KnowledgeRecord(BaseModel):
    """
    Base for every knowledge base entity.

    Records are immutable once loaded. Structured sources may use either the
    snake_case field names or their camelCase spelling (e.g. 'specType').
    """
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: str = Field(..., min_length=1, description="Unique, stable identifier")

    @field_validator('id')
    @classmethod
    def validate_id(cls, v: str) -> str:
        """Reject blank identifiers"""
        if not v.strip():
            raise ValueError("ID must be a non-empty string")
        return v.strip()


# --- Knowledge Domain Models ---

class Guideline(KnowledgeRecord):
    """
    A curated Better Specs best-practice document.

    Examples:
    - "Use contexts to group conditions"
    - "Prefer let over instance variables"
    """
    title: str
    category: GuidelineCategory
    content: str = Field(..., description="Freeform Markdown body of the guideline")
    examples: List[str] = Field(default_factory=list, description="IDs of related code examples")
    tags: List[str] = Field(default_factory=list)
    related_guidelines: List[str] = Field(default_factory=list)
    priority: Priority = "medium"
    last_updated: Optional[str] = None

    @property
    def summary(self) -> str:
        """First paragraph of the body."""
        return self.content.strip().split("\n\n")[0]


class CodeExample(KnowledgeRecord):
    """
    A before/after code pair demonstrating one kind of spec.
    """
    title: str
    description: str
    spec_type: SpecType
    scenario: str
    bad_code: Optional[str] = Field(None, description="The 'before' sample, if any")
    good_code: str = Field(..., description="The 'after' sample")
    explanation: str
    tags: List[str] = Field(default_factory=list)
    related_guidelines: List[str] = Field(default_factory=list)
    complexity: Complexity = "intermediate"


class AntiPattern(KnowledgeRecord):
    """
    A named RSpec mistake with a problematic and an improved version.
    """
    name: str
    description: str
    problematic_code: str
    improved_code: str
    explanation: str
    category: str
    severity: Severity
    tags: List[str] = Field(default_factory=list)


class ConfigurationTemplate(KnowledgeRecord):
    """
    A ready-to-use setup file (spec_helper.rb, Guardfile, ...).
    """
    name: str
    description: str
    type: ConfigurationType
    content: str
    dependencies: List[str] = Field(default_factory=list)
    notes: Optional[str] = None


# --- Query Models ---

class SearchOptions(BaseModel):
    """
    Validated search request.

    The store trusts its inputs; this model is how a request boundary checks
    the limit range before calling it.
    """
    query: str
    categories: Optional[List[str]] = None
    tags: Optional[List[str]] = None
    complexity: Optional[Complexity] = None
    limit: int = Field(DEFAULT_SEARCH_LIMIT, ge=SEARCH_LIMIT_MIN, le=SEARCH_LIMIT_MAX)


# --- Validation Domain Models ---

class ValidationIssue(BaseModel):
    """
    A single problem found in a piece of spec code.
    """
    type: str = Field(..., pattern="^(error|warning|suggestion)$")
    message: str
    line: Optional[int] = None
    column: Optional[int] = None
    rule: str
    suggestion: Optional[str] = None


class ValidationResult(BaseModel):
    """
    Outcome of validating spec code against the Better Specs rules.
    """
    is_valid: bool
    score: int = Field(..., ge=0, le=100)
    issues: List[ValidationIssue] = Field(default_factory=list)
    suggestions: List[str] = Field(default_factory=list)
    summary: str

    def issues_of_type(self, issue_type: str) -> List[ValidationIssue]:
        return [i for i in self.issues if i.type == issue_type]


# --- Resource Models ---

class ResourceDefinition(BaseModel):
    """Describes one URI-addressable resource."""
    uri: str
    name: str
    description: str
    mime_type: str


class ResourceContent(BaseModel):
    """Text payload returned when a resource is read."""
    uri: str
    mime_type: str
    text: str
