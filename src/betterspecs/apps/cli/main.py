"""
CLI for the Better Specs knowledge base.

Usage:
    betterspecs guidance "let vs before"      # Guidance on a topic
    betterspecs search mocking --limit 3      # Search guidelines
    betterspecs category data-setup           # Category overview
    betterspecs example model "validation"    # Curated example
    betterspecs validate spec/user_spec.rb    # Check a spec file
    betterspecs resource better-specs://cheatsheet
"""

import asyncio
import logging
import sys
from pathlib import Path

import click
from pydantic import ValidationError
from rich.logging import RichHandler
from rich.markdown import Markdown

from ... import __version__
from ...config import get_settings
from ...core.knowledge import KnowledgeStore
from ...domain.constants import (
    CONFIGURATION_TYPES,
    GUIDELINE_CATEGORIES,
    SEARCH_LIMIT_MAX,
    SEARCH_LIMIT_MIN,
    SEVERITIES,
    SPEC_TYPES,
)
from ...domain.exceptions import KnowledgeBaseLoadError, ResourceError
from ...domain.models import SearchOptions
from ...services import (
    ExampleService,
    GuidanceService,
    ResourceProvider,
    SpecValidator,
    render_report,
)
from ...ui.console import console, err_console


def configure_logging(verbose: bool) -> None:
    """Send library logs to stderr through Rich."""
    level = logging.DEBUG if verbose else get_settings().BETTERSPECS_LOG_LEVEL.upper()
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def get_store(ctx: click.Context) -> KnowledgeStore:
    """Create and initialize the store once per invocation."""
    store = ctx.obj.get("store")
    if store is not None:
        return store

    settings = get_settings()
    store = KnowledgeStore(
        content_dir=ctx.obj["content_dir"] or settings.content_dir,
        threshold=settings.BETTERSPECS_SEARCH_THRESHOLD,
    )
    try:
        asyncio.run(store.initialize())
    except KnowledgeBaseLoadError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    ctx.obj["store"] = store
    return store


def emit(ctx: click.Context, text: str) -> None:
    if ctx.obj["plain"]:
        click.echo(text)
    else:
        console.print(Markdown(text))


@click.group()
@click.version_option(version=__version__, prog_name="betterspecs")
@click.option(
    "--content-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Content directory. Defaults to BETTERSPECS_CONTENT_DIR or the bundled content.",
)
@click.option("--plain", is_flag=True, help="Print raw Markdown instead of rendering it.")
@click.option("-v", "--verbose", is_flag=True, help="Show debug logs.")
@click.pass_context
def main(ctx: click.Context, content_dir: Path | None, plain: bool, verbose: bool):
    """Better Specs - RSpec guidelines, examples and anti-patterns."""
    configure_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["content_dir"] = content_dir
    ctx.obj["plain"] = plain


@main.command()
@click.argument("topic")
@click.option("--category", type=click.Choice(GUIDELINE_CATEGORIES), default=None)
@click.option("--examples/--no-examples", "include_examples", default=True, help="Include referenced code examples.")
@click.pass_context
def guidance(ctx: click.Context, topic: str, category: str | None, include_examples: bool):
    """Get Better Specs guidance on TOPIC."""
    service = GuidanceService(get_store(ctx))
    emit(ctx, service.get_guidance(topic, category=category, include_examples=include_examples))


@main.command()
@click.argument("query")
@click.option("--category", "categories", multiple=True, type=click.Choice(GUIDELINE_CATEGORIES))
@click.option("--limit", type=int, default=5, show_default=True)
@click.pass_context
def search(ctx: click.Context, query: str, categories: tuple, limit: int):
    """Search guidelines for QUERY."""
    try:
        options = SearchOptions(query=query, categories=list(categories) or None, limit=limit)
    except ValidationError:
        raise click.BadParameter(
            f"must be between {SEARCH_LIMIT_MIN} and {SEARCH_LIMIT_MAX}", param_hint="--limit"
        )

    service = GuidanceService(get_store(ctx))
    emit(ctx, service.search_guidelines(options.query, categories=options.categories, limit=options.limit))


@main.command()
@click.argument("name", type=click.Choice(GUIDELINE_CATEGORIES))
@click.option("--details", is_flag=True, help="Show full guideline bodies.")
@click.pass_context
def category(ctx: click.Context, name: str, details: bool):
    """Overview of all guidelines in category NAME."""
    service = GuidanceService(get_store(ctx))
    emit(ctx, service.get_category_overview(name, include_details=details))


@main.command()
@click.argument("spec_type", type=click.Choice(SPEC_TYPES))
@click.argument("scenario")
@click.pass_context
def example(ctx: click.Context, spec_type: str, scenario: str):
    """Show the curated SPEC_TYPE example closest to SCENARIO."""
    service = ExampleService(get_store(ctx))
    emit(ctx, service.render_example(spec_type, scenario))


@main.command()
@click.option("--min-severity", type=click.Choice(SEVERITIES), default=None)
@click.pass_context
def antipatterns(ctx: click.Context, min_severity: str | None):
    """List common RSpec anti-patterns."""
    service = ExampleService(get_store(ctx))
    emit(ctx, service.render_anti_patterns(min_severity))


@main.command()
@click.argument("config_type", type=click.Choice(CONFIGURATION_TYPES))
@click.pass_context
def config(ctx: click.Context, config_type: str):
    """Show configuration templates of CONFIG_TYPE."""
    service = ExampleService(get_store(ctx))
    emit(ctx, service.render_configuration(config_type))


@main.command()
@click.argument("spec_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--check", "checks", multiple=True, help="Run only these rules (repeatable).")
@click.option("--suggestions/--no-suggestions", default=True)
@click.pass_context
def validate(ctx: click.Context, spec_file: Path, checks: tuple, suggestions: bool):
    """Validate SPEC_FILE against Better Specs guidelines.

    Exits with status 1 when errors are found.
    """
    validator = SpecValidator()
    unknown = [c for c in checks if c not in validator.rule_names]
    if unknown:
        raise click.BadParameter(
            f"unknown rule(s): {', '.join(unknown)}. Available: {', '.join(validator.rule_names)}",
            param_hint="--check",
        )

    result = validator.validate(
        spec_file.read_text(encoding="utf-8"),
        check_all=not checks,
        specific_checks=list(checks) or None,
    )
    emit(ctx, render_report(result, include_suggestions=suggestions))
    if not result.is_valid:
        sys.exit(1)


@main.command()
@click.argument("uri", required=False)
@click.pass_context
def resource(ctx: click.Context, uri: str | None):
    """Read resource URI, or list resources when no URI is given."""
    provider = ResourceProvider(get_store(ctx))

    if uri is None:
        for definition in provider.list_resources():
            click.echo(f"{definition.uri}\t{definition.mime_type}\t{definition.name}")
        return

    try:
        content = provider.read_resource(uri)
    except ResourceError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(content.text)


@main.command()
@click.pass_context
def stats(ctx: click.Context):
    """Show how many records of each kind are loaded."""
    store = get_store(ctx)
    for name, count in store.stats().items():
        click.echo(f"{name}: {count}")


if __name__ == "__main__":
    main()
