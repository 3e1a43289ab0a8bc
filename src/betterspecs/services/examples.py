"""
Example, anti-pattern and configuration lookups.
"""

from typing import List, Optional

from ..domain.constants import SEVERITIES
from ..domain.models import AntiPattern, CodeExample
from ..protocols import KnowledgeQueries
from .guidance import format_example_pair


class ExampleService:
    """Finds curated examples and renders examples, anti-patterns and templates."""

    def __init__(self, store: KnowledgeQueries):
        self.store = store

    def find_example(self, spec_type: str, scenario: str) -> Optional[CodeExample]:
        """
        Find the curated example closest to a spec type and scenario.

        An example of the requested type matches directly when its scenario
        contains the requested one or when one of its tags appears in the
        requested scenario. Otherwise the best fuzzy hit of that type is used.

        Returns:
            The matching example, or None if the type has no suitable example
        """
        wanted = scenario.strip().lower()
        candidates = self.store.get_examples_by_type(spec_type)

        for example in candidates:
            if wanted and wanted in example.scenario.lower():
                return example
            if any(tag.lower() in wanted for tag in example.tags):
                return example

        for example in self.store.search_examples(scenario, limit=50):
            if example.spec_type == spec_type:
                return example
        return None

    def render_example(self, spec_type: str, scenario: str) -> str:
        example = self.find_example(spec_type, scenario)
        if example is None:
            return (
                f'No curated {spec_type} spec example found for "{scenario}". '
                "Browse all examples with the 'better-specs://examples' resource."
            )

        response = f"# {spec_type.capitalize()} Spec Example\n\n"
        response += f"**Scenario:** {example.scenario}\n"
        response += f"**Complexity:** {example.complexity}\n\n"
        response += f"{example.description}\n\n"
        response += format_example_pair(example)
        if example.related_guidelines:
            titles = []
            for guideline_id in example.related_guidelines:
                guideline = self.store.get_guideline(guideline_id)
                if guideline:
                    titles.append(guideline.title)
            if titles:
                response += "## Better Specs Guidelines Applied\n\n"
                response += "".join(f"- {title}\n" for title in titles)
        return response

    def list_anti_patterns(self, min_severity: Optional[str] = None) -> List[AntiPattern]:
        """
        Anti-patterns at or above a severity, most severe first.

        Ties keep load order.
        """
        floor = SEVERITIES.index(min_severity) if min_severity else 0
        selected = [
            a for a in self.store.get_all_anti_patterns()
            if SEVERITIES.index(a.severity) >= floor
        ]
        return sorted(selected, key=lambda a: SEVERITIES.index(a.severity), reverse=True)

    def render_anti_patterns(self, min_severity: Optional[str] = None) -> str:
        anti_patterns = self.list_anti_patterns(min_severity)
        if not anti_patterns:
            return "No anti-patterns found."

        response = "# RSpec Anti-patterns\n\n"
        for anti_pattern in anti_patterns:
            response += f"## {anti_pattern.name} ({anti_pattern.severity})\n\n"
            response += f"{anti_pattern.description}\n\n"
            response += f"❌ **Problematic:**\n```ruby\n{anti_pattern.problematic_code}\n```\n\n"
            response += f"✅ **Improved:**\n```ruby\n{anti_pattern.improved_code}\n```\n\n"
            response += f"{anti_pattern.explanation}\n\n"
            response += "---\n\n"
        return response

    def render_configuration(self, config_type: str) -> str:
        templates = self.store.get_configurations_by_type(config_type)
        if not templates:
            return f'No configuration templates found for type "{config_type}".'

        response = f"# {config_type} Templates\n\n"
        for template in templates:
            response += f"## {template.name}\n\n"
            response += f"{template.description}\n\n"
            response += f"```ruby\n{template.content}\n```\n\n"
            if template.dependencies:
                response += f"**Dependencies:** {', '.join(template.dependencies)}\n\n"
            if template.notes:
                response += f"**Notes:** {template.notes}\n\n"
        return response
