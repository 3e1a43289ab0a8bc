"""
Built-in fallback content.

Used by the loader when a dataset source is missing or unusable, so no
dataset is ever left empty.
"""

from typing import List

from ...domain.models import AntiPattern, CodeExample, ConfigurationTemplate, Guideline


class DefaultContentProvider:
    """
    Provides a minimal representative record set per dataset.

    Each call returns fresh lists; the records themselves are immutable.
    """

    def guidelines(self) -> List[Guideline]:
        return [
            Guideline(
                id="describe-your-methods",
                title="Describe your methods",
                category="naming",
                content=(
                    "Be clear about what method you are describing. Use the Ruby "
                    "documentation convention of `.` when referring to a class "
                    "method's name and `#` when referring to an instance method's "
                    "name.\n\n"
                    "```ruby\n"
                    "describe '.authenticate' do\n"
                    "describe '#admin?' do\n"
                    "```"
                ),
                tags=["describe", "naming", "methods"],
                priority="high",
            )
        ]

    def examples(self) -> List[CodeExample]:
        return [
            CodeExample(
                id="model-basic",
                title="Basic Model Spec",
                description="Simple model validation spec",
                spec_type="model",
                scenario="Testing model validations",
                good_code=(
                    "RSpec.describe User do\n"
                    "  subject(:user) { build(:user) }\n"
                    "\n"
                    "  it { is_expected.to be_valid }\n"
                    "  it { is_expected.to validate_presence_of(:email) }\n"
                    "end"
                ),
                explanation="Uses subject for DRY code and one expectation per test",
                tags=["model", "validation", "subject"],
                complexity="beginner",
            )
        ]

    def anti_patterns(self) -> List[AntiPattern]:
        return [
            AntiPattern(
                id="should-syntax",
                name="Using should syntax",
                description="Using deprecated should syntax instead of expect",
                problematic_code="user.should be_valid",
                improved_code="expect(user).to be_valid",
                explanation=(
                    "The should syntax is deprecated. Use expect syntax for better "
                    "readability and future compatibility."
                ),
                category="expectations",
                severity="medium",
                tags=["syntax", "deprecated"],
            )
        ]

    def configurations(self) -> List[ConfigurationTemplate]:
        return [
            ConfigurationTemplate(
                id="basic-spec-helper",
                name="Basic spec_helper.rb",
                description="Basic RSpec configuration following Better Specs guidelines",
                type="spec_helper",
                content=(
                    "RSpec.configure do |config|\n"
                    "  config.expect_with :rspec do |c|\n"
                    "    c.syntax = :expect\n"
                    "  end\n"
                    "\n"
                    "  config.disable_monkey_patching!\n"
                    "  config.order = :random\n"
                    "  Kernel.srand config.seed\n"
                    "end"
                ),
                dependencies=["rspec"],
                notes="Enforces expect syntax and random test order",
            )
        ]
