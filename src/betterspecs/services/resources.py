"""
URI-addressed read access to the knowledge base.

Resources return JSON summaries of the datasets, full records by id or
type, and a Markdown cheatsheet.
"""

import json
from typing import Any, List

from ..domain.exceptions import ResourceNotFoundError, UnknownResourceError
from ..domain.models import ResourceContent, ResourceDefinition
from ..protocols import KnowledgeQueries

SCHEME = "better-specs://"
GUIDELINES_URI = f"{SCHEME}guidelines"
EXAMPLES_URI = f"{SCHEME}examples"
ANTIPATTERNS_URI = f"{SCHEME}antipatterns"
CONFIGURATIONS_URI = f"{SCHEME}configurations"
CHEATSHEET_URI = f"{SCHEME}cheatsheet"

JSON_MIME = "application/json"
MARKDOWN_MIME = "text/markdown"

CHEATSHEET = """\
# Better Specs Cheatsheet

## Quick Reference

### Naming & Structure
- **Class methods**: `describe '.method_name'`
- **Instance methods**: `describe '#method_name'`
- **Contexts**: Start with "when", "with", or "without"
- **Short descriptions**: Keep under 40 characters

### Expectations
- **Modern syntax**: `expect(object).to matcher` (not `should`)
- **One per test**: Each `it` block should have one expectation
- **Use `is_expected`**: For one-liner tests with subject

### Data Setup
- **Use `let`**: Instead of instance variables
- **Use `let!`**: When you need eager evaluation
- **FactoryBot**: Prefer over fixtures
- **Subject**: For the main object under test

### Test Organization
- **describe**: For methods or classes
- **context**: For different conditions
- **it**: For specific behaviors
- **Test all paths**: Happy, edge, and failure cases

### Mocking & Stubbing
- **Mock sparingly**: Prefer real objects when possible
- **Stub boundaries**: HTTP, time, randomness, file system
- **WebMock**: For HTTP requests
- **Timecop**: For time-dependent tests

### Performance
- **Guard**: For automatic test running
- **Transactional fixtures**: For speed
- **Database Cleaner**: For complex scenarios
- **Parallel tests**: For large suites

### Configuration
```ruby
# .rspec
--require spec_helper
--format documentation
--color
--order random

# spec_helper.rb
RSpec.configure do |config|
  config.expect_with :rspec do |c|
    c.syntax = :expect
  end
  config.order = :random
  config.disable_monkey_patching!
end
```

### Common Matchers
```ruby
expect(actual).to eq(expected)
expect(actual).to be_nil
expect(array).to include(item)
expect(array).to contain_exactly(item1, item2)
expect { action }.to change(Model, :count).by(1)
expect { action }.to raise_error(ErrorClass)
expect(response).to have_http_status(:ok)
```

### Anti-patterns to Avoid
- ❌ Using `should` syntax
- ❌ Multiple expectations per test (in unit tests)
- ❌ Testing implementation details
- ❌ Over-mocking
- ❌ Instance variables instead of `let`
- ❌ Fixtures instead of factories

### Best Practices
- ✅ Test behavior, not implementation
- ✅ Use descriptive test names
- ✅ Group related tests with contexts
- ✅ Keep tests DRY with shared examples
"""


class ResourceProvider:
    """Resolves better-specs:// URIs against a knowledge store."""

    def __init__(self, store: KnowledgeQueries):
        self.store = store

    def list_resources(self) -> List[ResourceDefinition]:
        return [
            ResourceDefinition(
                uri=GUIDELINES_URI,
                name="Better Specs Guidelines",
                description="Complete collection of Better Specs guidelines",
                mime_type=JSON_MIME,
            ),
            ResourceDefinition(
                uri=EXAMPLES_URI,
                name="RSpec Code Examples",
                description="Comprehensive RSpec examples following Better Specs",
                mime_type=JSON_MIME,
            ),
            ResourceDefinition(
                uri=ANTIPATTERNS_URI,
                name="RSpec Anti-patterns",
                description="Common RSpec mistakes and how to avoid them",
                mime_type=JSON_MIME,
            ),
            ResourceDefinition(
                uri=CONFIGURATIONS_URI,
                name="RSpec Configuration Templates",
                description="Ready-to-use RSpec configuration templates",
                mime_type=JSON_MIME,
            ),
            ResourceDefinition(
                uri=CHEATSHEET_URI,
                name="Better Specs Cheatsheet",
                description="Quick reference for Better Specs guidelines",
                mime_type=MARKDOWN_MIME,
            ),
        ]

    def read_resource(self, uri: str) -> ResourceContent:
        """
        Read one resource.

        Raises:
            UnknownResourceError: If the URI matches no resource
            ResourceNotFoundError: If a guideline URI names an unknown id
        """
        if uri == GUIDELINES_URI:
            return self._json(uri, self._guidelines_summary())
        if uri == EXAMPLES_URI:
            return self._json(uri, self._examples_summary())
        if uri == ANTIPATTERNS_URI:
            return self._json(uri, self._anti_patterns_summary())
        if uri == CONFIGURATIONS_URI:
            return self._json(uri, self._configurations_summary())
        if uri == CHEATSHEET_URI:
            return ResourceContent(uri=uri, mime_type=MARKDOWN_MIME, text=CHEATSHEET)

        if uri.startswith(GUIDELINES_URI + "/"):
            guideline_id = uri[len(GUIDELINES_URI) + 1:]
            guideline = self.store.get_guideline(guideline_id)
            if guideline is None:
                raise ResourceNotFoundError(f"Guideline not found: {guideline_id}")
            return self._json(uri, guideline.model_dump(by_alias=True))

        if uri.startswith(EXAMPLES_URI + "/"):
            spec_type = uri[len(EXAMPLES_URI) + 1:]
            examples = self.store.get_examples_by_type(spec_type)
            return self._json(uri, {
                "specType": spec_type,
                "total": len(examples),
                "examples": [e.model_dump(by_alias=True) for e in examples],
            })

        raise UnknownResourceError(f"Unknown resource URI: {uri}")

    def _guidelines_summary(self) -> dict:
        guidelines = self.store.get_all_guidelines()
        return {
            "total": len(guidelines),
            "guidelines": [
                {
                    "id": g.id,
                    "title": g.title,
                    "category": g.category,
                    "tags": g.tags,
                    "priority": g.priority,
                    "summary": g.summary,
                }
                for g in guidelines
            ],
        }

    def _examples_summary(self) -> dict:
        examples = self.store.get_all_examples()
        return {
            "total": len(examples),
            "examples": [
                {
                    "id": e.id,
                    "title": e.title,
                    "specType": e.spec_type,
                    "scenario": e.scenario,
                    "complexity": e.complexity,
                    "tags": e.tags,
                    "hasGoodCode": bool(e.good_code),
                    "hasBadCode": bool(e.bad_code),
                }
                for e in examples
            ],
        }

    def _anti_patterns_summary(self) -> dict:
        anti_patterns = self.store.get_all_anti_patterns()
        return {
            "total": len(anti_patterns),
            "antiPatterns": [
                {
                    "id": a.id,
                    "name": a.name,
                    "category": a.category,
                    "severity": a.severity,
                    "description": a.description,
                    "tags": a.tags,
                }
                for a in anti_patterns
            ],
        }

    def _configurations_summary(self) -> dict:
        configurations = self.store.get_all_configurations()
        return {
            "total": len(configurations),
            "configurations": [
                {
                    "id": c.id,
                    "name": c.name,
                    "type": c.type,
                    "description": c.description,
                    "dependencies": c.dependencies,
                }
                for c in configurations
            ],
        }

    @staticmethod
    def _json(uri: str, payload: Any) -> ResourceContent:
        return ResourceContent(uri=uri, mime_type=JSON_MIME, text=json.dumps(payload, indent=2))
