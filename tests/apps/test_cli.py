"""Tests for the betterspecs CLI."""

import pytest
from click.testing import CliRunner

from betterspecs import __version__
from betterspecs.apps.cli.main import main
from betterspecs.config import reset_settings


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch, tmp_path):
    """Isolate each invocation from the developer's environment."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("BETTERSPECS_CONTENT_DIR", raising=False)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def run(data_dir):
    """Invoke the CLI in plain mode over the test content."""
    runner = CliRunner()

    def _run(*args):
        return runner.invoke(main, ["--content-dir", str(data_dir), "--plain", *args])

    return _run


class TestCli:
    """Tests for the betterspecs command group."""

    def test_version(self):
        result = CliRunner().invoke(main, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output

    def test_stats(self, run):
        result = run("stats")

        assert result.exit_code == 0
        assert "guidelines: 5" in result.output
        assert "anti_patterns: 3" in result.output

    def test_empty_content_dir_uses_defaults(self, empty_content_dir):
        result = CliRunner().invoke(main, ["--content-dir", str(empty_content_dir), "stats"])

        assert result.exit_code == 0
        assert "guidelines: 1" in result.output

    def test_content_dir_from_environment(self, monkeypatch, data_dir):
        monkeypatch.setenv("BETTERSPECS_CONTENT_DIR", str(data_dir))
        result = CliRunner().invoke(main, ["stats"])

        assert "examples: 5" in result.output

    def test_guidance(self, run):
        result = run("guidance", "describe", "--no-examples")

        assert result.exit_code == 0
        assert "## Describe your methods" in result.output
        assert "### Examples" not in result.output

    def test_guidance_fallback(self, run):
        result = run("guidance", "xylophone")
        assert 'No specific guidance found for "xylophone"' in result.output

    def test_search(self, run):
        result = run("search", "mocking", "--limit", "1")

        assert result.exit_code == 0
        assert "## Mocking" in result.output
        assert "Stub the network" not in result.output

    def test_search_category(self, run):
        result = run("search", "mocking", "--category", "organization")
        assert "## Stub the network" in result.output

    @pytest.mark.parametrize("limit", ["0", "51"])
    def test_search_rejects_limit(self, run, limit):
        result = run("search", "mocking", "--limit", limit)

        assert result.exit_code == 2
        assert "must be between 1 and 50" in result.output

    def test_search_renders_markdown(self, data_dir):
        result = CliRunner().invoke(main, ["--content-dir", str(data_dir), "search", "mocking"])

        assert result.exit_code == 0
        assert "Mocking" in result.output

    def test_category(self, run):
        result = run("category", "organization")

        assert result.exit_code == 0
        assert "# Organization Guidelines" in result.output

    def test_category_rejects_unknown_name(self, run):
        assert run("category", "magic").exit_code == 2

    def test_example(self, run):
        result = run("example", "model", "user model")
        assert "Model validation spec" in result.output

    def test_antipatterns(self, run):
        result = run("antipatterns", "--min-severity", "critical")

        assert "Real HTTP calls in specs" in result.output
        assert "Using should syntax" not in result.output

    def test_config(self, run):
        result = run("config", "guardfile")
        assert "## Test Guardfile" in result.output


class TestValidateCommand:
    """Tests for `betterspecs validate`."""

    def test_clean_file(self, run, tmp_path):
        spec = tmp_path / "user_spec.rb"
        spec.write_text("describe User do\n  it { is_expected.to be_valid }\nend\n")

        result = run("validate", str(spec))

        assert result.exit_code == 0
        assert "**Overall Score:** 100/100" in result.output

    def test_errors_exit_nonzero(self, run, tmp_path):
        spec = tmp_path / "user_spec.rb"
        spec.write_text("describe User do\n  user.should be_valid\nend\n")

        result = run("validate", str(spec))

        assert result.exit_code == 1
        assert "should_syntax" in result.output

    def test_selected_checks(self, run, tmp_path):
        spec = tmp_path / "user_spec.rb"
        spec.write_text("describe User do\n  before { @user = build(:user) }\nend\n")

        result = run("validate", str(spec), "--check", "should_syntax")

        assert result.exit_code == 0
        assert "let_usage" not in result.output

    def test_unknown_check(self, run, tmp_path):
        spec = tmp_path / "user_spec.rb"
        spec.write_text("describe User do\nend\n")

        result = run("validate", str(spec), "--check", "bogus")

        assert result.exit_code == 2
        assert "unknown rule(s): bogus" in result.output

    def test_missing_file(self, run, tmp_path):
        assert run("validate", str(tmp_path / "missing_spec.rb")).exit_code == 2


class TestResourceCommand:
    """Tests for `betterspecs resource`."""

    def test_list(self, run):
        result = run("resource")

        assert result.exit_code == 0
        assert "better-specs://cheatsheet\ttext/markdown" in result.output

    def test_read(self, run):
        result = run("resource", "better-specs://guidelines/03_mocking")

        assert result.exit_code == 0
        assert '"title": "Mocking"' in result.output

    def test_unknown_uri(self, run):
        result = run("resource", "better-specs://nothing")

        assert result.exit_code == 1
        assert "Unknown resource URI" in result.output

    def test_missing_guideline(self, run):
        result = run("resource", "better-specs://guidelines/nope")

        assert result.exit_code == 1
        assert "Guideline not found: nope" in result.output
