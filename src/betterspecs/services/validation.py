"""
Rule-based validation of RSpec code against Better Specs conventions.

The checks are line-oriented heuristics, not a Ruby parser.
"""

import re
from typing import Callable, Dict, List, Optional

from ..domain.models import ValidationIssue, ValidationResult

CheckFn = Callable[[List[str]], List[ValidationIssue]]

ISSUE_PENALTIES = {"error": 20, "warning": 10, "suggestion": 5}

DESCRIBE_PATTERN = re.compile(r"describe\s+['\"](.+?)['\"]")
CONTEXT_PATTERN = re.compile(r"context\s+['\"](.+?)['\"]")
CONTEXT_PREFIX_PATTERN = re.compile(r"^(when|with|without)\s", re.IGNORECASE)
EXPECT_TARGET_PATTERN = re.compile(r"expect\(([^)]+)\)")
MODEL_CREATE_PATTERN = re.compile(r"\w+\.create\(")

MAX_DESCRIPTION_LENGTH = 40


class SpecValidator:
    """
    Validates spec source text and scores it out of 100.

    Each error costs 20 points, each warning 10 and each suggestion 5. Code
    is valid when no errors are found.
    """

    def __init__(self):
        self.rules: Dict[str, CheckFn] = {
            "should_syntax": self.check_should_syntax,
            "describe_naming": self.check_describe_naming,
            "context_usage": self.check_context_usage,
            "expectation_count": self.check_expectation_count,
            "test_structure": self.check_test_structure,
            "let_usage": self.check_let_usage,
            "subject_usage": self.check_subject_usage,
            "factory_usage": self.check_factory_usage,
        }

    @property
    def rule_names(self) -> List[str]:
        return list(self.rules)

    def validate(
        self,
        code: str,
        check_all: bool = True,
        specific_checks: Optional[List[str]] = None,
    ) -> ValidationResult:
        """
        Run the selected checks.

        Args:
            code: RSpec source text
            check_all: Run every rule
            specific_checks: Rule names to run when check_all is False

        Returns:
            ValidationResult with score, issues, suggestions and a summary
        """
        lines = code.split("\n")
        issues: List[ValidationIssue] = []

        for name, check in self.rules.items():
            if check_all or (specific_checks and name in specific_checks):
                issues.extend(check(lines))

        counts = {kind: sum(1 for i in issues if i.type == kind) for kind in ISSUE_PENALTIES}
        penalty = sum(ISSUE_PENALTIES[kind] * count for kind, count in counts.items())
        score = max(0, 100 - penalty)

        suggestions = []
        if counts["error"]:
            suggestions.append("Fix critical errors first - they violate core Better Specs principles")
        if counts["warning"]:
            suggestions.append("Address warnings to improve test maintainability")
        if any(i.rule == "should_syntax" for i in issues):
            suggestions.append("Migrate from should syntax to expect syntax using the transpec gem")
        if any(i.rule == "expectation_count" for i in issues):
            suggestions.append("Consider splitting tests with multiple expectations into separate examples")

        return ValidationResult(
            is_valid=counts["error"] == 0,
            score=score,
            issues=issues,
            suggestions=suggestions,
            summary=summarize(score),
        )

    # --- Rules ---

    def check_should_syntax(self, lines: List[str]) -> List[ValidationIssue]:
        return [
            ValidationIssue(
                type="error",
                message="Using deprecated should syntax",
                line=number,
                rule="should_syntax",
                suggestion="Use expect syntax: expect(object).to matcher",
            )
            for number, line in enumerate(lines, start=1)
            if ".should " in line or ".should_not " in line
        ]

    def check_describe_naming(self, lines: List[str]) -> List[ValidationIssue]:
        issues = []
        for number, line in enumerate(lines, start=1):
            match = DESCRIBE_PATTERN.search(line)
            if not match:
                continue
            description = match.group(1)

            if "method" in description and not description.startswith((".", "#")):
                issues.append(ValidationIssue(
                    type="warning",
                    message="Method descriptions should use . for class methods or # for instance methods",
                    line=number,
                    rule="describe_naming",
                    suggestion='Use ".method_name" for class methods or "#method_name" for instance methods',
                ))

            if len(description) > MAX_DESCRIPTION_LENGTH:
                issues.append(ValidationIssue(
                    type="suggestion",
                    message="Description is quite long, consider using context blocks",
                    line=number,
                    rule="describe_naming",
                    suggestion="Split long descriptions using context blocks",
                ))
        return issues

    def check_context_usage(self, lines: List[str]) -> List[ValidationIssue]:
        issues = []
        for number, line in enumerate(lines, start=1):
            match = CONTEXT_PATTERN.search(line)
            if match and not CONTEXT_PREFIX_PATTERN.match(match.group(1)):
                issues.append(ValidationIssue(
                    type="suggestion",
                    message='Context descriptions should start with "when", "with", or "without"',
                    line=number,
                    rule="context_usage",
                    suggestion='Start context with "when", "with", or "without" to clarify conditions',
                ))
        return issues

    def check_expectation_count(self, lines: List[str]) -> List[ValidationIssue]:
        issues = []
        in_it_block = False
        expectation_count = 0
        it_start_line = 0

        for number, line in enumerate(lines, start=1):
            stripped = line.strip()
            if stripped.startswith("it "):
                in_it_block = True
                expectation_count = 0
                it_start_line = number
            elif stripped == "end" and in_it_block:
                if expectation_count > 1:
                    issues.append(ValidationIssue(
                        type="warning",
                        message=(
                            f"Test has {expectation_count} expectations - "
                            "consider splitting into separate tests"
                        ),
                        line=it_start_line,
                        rule="expectation_count",
                        suggestion="Split into separate tests with one expectation each for better failure isolation",
                    ))
                in_it_block = False
            elif in_it_block and ("expect(" in line or "is_expected" in line):
                expectation_count += 1
        return issues

    def check_test_structure(self, lines: List[str]) -> List[ValidationIssue]:
        issues = []
        has_describe = False
        for number, line in enumerate(lines, start=1):
            if "describe " in line:
                has_describe = True
            if "it " in line and not has_describe:
                issues.append(ValidationIssue(
                    type="error",
                    message="Test found outside of describe block",
                    line=number,
                    rule="test_structure",
                    suggestion="Wrap tests in describe blocks to organize them properly",
                ))
        return issues

    def check_let_usage(self, lines: List[str]) -> List[ValidationIssue]:
        return [
            ValidationIssue(
                type="suggestion",
                message="Consider using let instead of instance variables",
                line=number,
                rule="let_usage",
                suggestion="Use let for lazy-loaded test data instead of instance variables",
            )
            for number, line in enumerate(lines, start=1)
            if "@" in line and "=" in line and "let" not in line
        ]

    def check_subject_usage(self, lines: List[str]) -> List[ValidationIssue]:
        references: Dict[str, List[int]] = {}
        for number, line in enumerate(lines, start=1):
            match = EXPECT_TARGET_PATTERN.search(line)
            if match:
                references.setdefault(match.group(1), []).append(number)

        issues = []
        for target, line_numbers in references.items():
            if len(line_numbers) > 2 and "subject" not in target:
                issues.append(ValidationIssue(
                    type="suggestion",
                    message=f'Object "{target}" is referenced {len(line_numbers)} times - consider using subject',
                    line=line_numbers[0],
                    rule="subject_usage",
                    suggestion=f"Define subject {{ {target} }} and use is_expected.to for cleaner tests",
                ))
        return issues

    def check_factory_usage(self, lines: List[str]) -> List[ValidationIssue]:
        return [
            ValidationIssue(
                type="suggestion",
                message="Consider using FactoryBot instead of Model.create",
                line=number,
                rule="factory_usage",
                suggestion="Use create(:model) or build(:model) from FactoryBot for better test data management",
            )
            for number, line in enumerate(lines, start=1)
            if MODEL_CREATE_PATTERN.search(line)
        ]


def summarize(score: int) -> str:
    if score >= 90:
        return "Excellent! Your code follows Better Specs guidelines very well."
    if score >= 70:
        return "Good adherence to Better Specs guidelines with some room for improvement."
    if score >= 50:
        return "Moderate adherence to Better Specs guidelines. Several improvements recommended."
    return "Significant improvements needed to align with Better Specs guidelines."


def render_report(result: ValidationResult, include_suggestions: bool = True) -> str:
    """Render a validation result as a Markdown report."""
    response = "# RSpec Code Validation Results\n\n"
    response += f"**Overall Score:** {result.score}/100\n"
    response += f"**Status:** {'✅ Passes' if result.is_valid else '❌ Issues Found'}\n\n"
    response += f"## Summary\n\n{result.summary}\n\n"

    if result.issues:
        response += f"## Issues Found ({len(result.issues)})\n\n"
        sections = [
            ("error", "❌ Errors"),
            ("warning", "⚠️ Warnings"),
            ("suggestion", "💡 Suggestions"),
        ]
        for issue_type, heading in sections:
            issues = result.issues_of_type(issue_type)
            if not issues:
                continue
            response += f"### {heading} ({len(issues)})\n\n"
            for index, issue in enumerate(issues, start=1):
                response += f"{index}. **{issue.rule}**\n"
                response += f"   {issue.message}\n"
                if issue.line:
                    response += f"   Line: {issue.line}\n"
                if issue.suggestion:
                    response += f"   💡 Suggestion: {issue.suggestion}\n"
                response += "\n"
    else:
        response += "## ✅ No Issues Found\n\nYour code follows Better Specs guidelines well!\n\n"

    if include_suggestions and result.suggestions:
        response += "## 🚀 Improvement Suggestions\n\n"
        for index, suggestion in enumerate(result.suggestions, start=1):
            response += f"{index}. {suggestion}\n"
        response += "\n"

    return response
