"""
Guidance rendering service.

Turns knowledge store queries into Markdown answers for a calling agent or
the CLI.
"""

from typing import List, Optional

from ..domain.models import CodeExample, Guideline
from ..protocols import KnowledgeQueries

GENERAL_PRINCIPLES = """\
1. **Be clear about what you're testing** - Use descriptive test names
2. **One expectation per test** - Keep tests focused
3. **Test behavior, not implementation** - Focus on what the code does
4. **Use proper test structure** - describe/context/it hierarchy
5. **Keep tests DRY** - Use let, subject, and shared examples appropriately"""


class GuidanceService:
    """Builds guidance, search and category overview answers."""

    # Guidelines searched / rendered for a guidance request
    SEARCH_LIMIT = 5
    MAX_GUIDELINES = 3
    MAX_EXAMPLES_PER_GUIDELINE = 2
    MAX_RELATED = 3

    def __init__(self, store: KnowledgeQueries):
        self.store = store

    def get_guidance(
        self,
        topic: str,
        category: Optional[str] = None,
        include_examples: bool = True,
    ) -> str:
        """
        Render guidance on a topic.

        Args:
            topic: Free-text topic (e.g. "let vs before", "mocking")
            category: Only keep guidelines from this category
            include_examples: Render the examples each guideline references

        Returns:
            Markdown text. When nothing matches, general Better Specs
            principles are returned instead.
        """
        results = self.store.search_guidelines(topic, limit=self.SEARCH_LIMIT)
        if category:
            results = [g for g in results if g.category == category]

        if not results:
            return (
                f'No specific guidance found for "{topic}". '
                "Here are some general Better Specs principles:\n\n"
                f"{GENERAL_PRINCIPLES}\n\n"
                "Try searching for more specific terms or browse by category."
            )

        response = f"# Better Specs Guidance: {topic}\n\n"

        for guideline in results[:self.MAX_GUIDELINES]:
            response += f"## {guideline.title}\n\n"
            response += f"**Category:** {guideline.category}\n\n"
            response += f"{guideline.content.strip()}\n\n"

            if include_examples and guideline.examples:
                examples = self._resolve_examples(guideline)
                if examples:
                    response += "### Examples\n\n"
                    for example in examples:
                        response += format_example_pair(example)

            if guideline.tags:
                response += f"**Tags:** {', '.join(guideline.tags)}\n\n"

            response += "---\n\n"

        related = self._resolve_related(results)
        if related:
            response += "## Related Guidelines\n\n"
            for guideline in related:
                response += f"- **{guideline.title}** ({guideline.category})\n"

        return response

    def search_guidelines(
        self,
        query: str,
        categories: Optional[List[str]] = None,
        limit: int = 5,
    ) -> str:
        """Render a short listing of guidelines matching a query."""
        results = self.store.search_guidelines(query, limit=limit, categories=categories)

        if not results:
            return (
                f'No guidelines found matching "{query}". '
                "Try different keywords or browse by category."
            )

        response = f'# Search Results for "{query}"\n\n'
        response += f"Found {len(results)} guideline(s):\n\n"

        for guideline in results:
            response += f"## {guideline.title}\n\n"
            response += f"**Category:** {guideline.category}\n"
            response += f"**Tags:** {', '.join(guideline.tags)}\n\n"
            response += f"{guideline.summary}\n\n"
            response += "---\n\n"

        return response

    def get_category_overview(self, category: str, include_details: bool = False) -> str:
        """Render every guideline of a category, briefly or in full."""
        guidelines = self.store.get_guidelines_by_category(category)

        if not guidelines:
            return f'No guidelines found for category "{category}".'

        response = f"# {category.capitalize()} Guidelines\n\n"
        response += f"{len(guidelines)} guideline(s) in this category:\n\n"

        for guideline in guidelines:
            response += f"## {guideline.title}\n\n"
            if include_details:
                response += f"{guideline.content.strip()}\n\n"
            else:
                response += f"{first_sentence(guideline.content)}\n\n"

            if guideline.tags:
                response += f"**Tags:** {', '.join(guideline.tags)}\n\n"

            response += "---\n\n"

        return response

    def _resolve_examples(self, guideline: Guideline) -> List[CodeExample]:
        # Dangling references are silently skipped
        found = []
        for example_id in guideline.examples[:self.MAX_EXAMPLES_PER_GUIDELINE]:
            example = self.store.get_example(example_id)
            if example:
                found.append(example)
        return found

    def _resolve_related(self, guidelines: List[Guideline]) -> List[Guideline]:
        related_ids: List[str] = []
        for guideline in guidelines:
            for related_id in guideline.related_guidelines:
                if related_id not in related_ids:
                    related_ids.append(related_id)

        related = []
        for related_id in related_ids[:self.MAX_RELATED]:
            guideline = self.store.get_guideline(related_id)
            if guideline:
                related.append(guideline)
        return related


def format_example_pair(example: CodeExample) -> str:
    """Render an example as bad/good Ruby code blocks with its explanation."""
    text = f"**{example.title}**\n\n"
    if example.bad_code:
        text += f"❌ **Bad:**\n```ruby\n{example.bad_code}\n```\n\n"
    text += f"✅ **Good:**\n```ruby\n{example.good_code}\n```\n\n"
    text += f"{example.explanation}\n\n"
    return text


def first_sentence(content: str) -> str:
    return content.strip().split(".")[0] + "."
