"""
Closed value sets shared across the knowledge base.
"""

from typing import List, Literal, Tuple, get_args

GuidelineCategory = Literal[
    "naming",
    "organization",
    "expectations",
    "data-setup",
    "mocking",
    "shared-examples",
    "performance",
    "configuration",
]

SpecType = Literal["model", "request", "system", "service", "job", "controller", "helper"]
Priority = Literal["high", "medium", "low"]
Complexity = Literal["beginner", "intermediate", "advanced"]
Severity = Literal["low", "medium", "high", "critical"]
ConfigurationType = Literal["spec_helper", "rails_helper", "guardfile", "gemfile", "rspec_config"]

GUIDELINE_CATEGORIES: Tuple[str, ...] = get_args(GuidelineCategory)
SPEC_TYPES: Tuple[str, ...] = get_args(SpecType)
COMPLEXITIES: Tuple[str, ...] = get_args(Complexity)
SEVERITIES: Tuple[str, ...] = get_args(Severity)
CONFIGURATION_TYPES: Tuple[str, ...] = get_args(ConfigurationType)

DEFAULT_CATEGORY = "organization"

# Filename keyword -> category, evaluated top to bottom, first hit wins.
CATEGORY_RULES: List[Tuple[Tuple[str, ...], str]] = [
    (("describe", "naming"), "naming"),
    (("context", "organization"), "organization"),
    (("expect", "subject"), "expectations"),
    (("let", "factories"), "data-setup"),
    (("mock", "stub"), "mocking"),
    (("shared", "matcher"), "shared-examples"),
    (("speed", "tooling"), "performance"),
    (("config",), "configuration"),
]

SEARCH_LIMIT_MIN = 1
SEARCH_LIMIT_MAX = 50
DEFAULT_SEARCH_LIMIT = 10
DEFAULT_SEARCH_THRESHOLD = 0.3

GUIDELINE_FIELD_WEIGHTS = {
    "title": 0.4,
    "content": 0.3,
    "tags": 0.2,
    "category": 0.1,
}

EXAMPLE_FIELD_WEIGHTS = {
    "title": 0.3,
    "description": 0.3,
    "scenario": 0.2,
    "tags": 0.2,
}
