"""Command-line interface for nighthawk."""

from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from nighthawk.config import Settings

app = typer.Typer(
    name="nighthawk",
    help="Declarative rule engine",
    no_args_is_help=True,
)
console = Console()

rules_app = typer.Typer(help="Manage rule definitions")
app.add_typer(rules_app, name="rules")

EXAMPLE_RULES = """# Nighthawk Rules Configuration
# A rule fires when all of its conditions hold; its actions then run in order.

rules:
  - name: bad_source_for_backlink
    description: "Check for a known bad source for a backlink"
    conditions:
      - fact: backlink
        type: equals
        value: "http://some-bad-place.com/some-bad-path/some-bad-file.html"
    actions:
      - action: report
        message: "found bad backlink"

  - name: not_enough_backlinks
    description: "Check for meeting a minimum number of backlinks"
    conditions:
      - fact: backlink_count
        type: less_than
        value: 17
    actions:
      - action: report
        message: "not enough backlinks"

  - name: not_enough_internal_links
    description: "Check for meeting a minimum number of internal links"
    conditions:
      - fact: internal_link_count
        type: less_than
        value: 37
    actions:
      - action: report
        message: "not enough internal links"

  - name: weak_link_profile
    description: "Few backlinks and few internal links"
    enabled: false
    conditions:
      - fact: backlink_count
        type: less_than
        value: 17
      - fact: internal_link_count
        type: less_than
        value: 37
    actions:
      - action: report
        message: "weak link profile"
      - action: log
        message: "weak link profile detected"
        level: warning
"""

EXAMPLE_FACTS = """# Nighthawk Facts
# Static fact values read by rule conditions.

facts:
  backlink: "http://some-bad-place.com/some-bad-path/some-bad-file.html"
  backlink_count: 13
  internal_link_count: 23
"""

STATUS_STYLES = {
    "fired": "[green]fired[/green]",
    "not_fired": "[dim]not fired[/dim]",
    "failed": "[red]failed[/red]",
}


def get_settings() -> Settings:
    """Load application settings."""
    return Settings()


def _setup_logging(settings: Settings) -> None:
    from nighthawk.logging import setup_logging

    setup_logging(
        log_dir=settings.log_dir,
        log_level=settings.log_level,
        max_bytes=settings.log_rotation_size_mb * 1024 * 1024,
        backup_count=settings.log_backup_count,
    )


@app.command()
def version() -> None:
    """Show version information."""
    from nighthawk import __version__

    console.print(f"nighthawk v{__version__}")


@app.command()
def init(
    config_dir: Annotated[
        Path | None,
        typer.Option("--config-dir", "-c", help="Configuration directory"),
    ] = None,
) -> None:
    """Initialize configuration directory with example files."""
    settings = get_settings()
    if config_dir:
        settings.config_dir = config_dir

    settings.ensure_config_dir()

    for path, content in (
        (settings.rules_path, EXAMPLE_RULES),
        (settings.facts_path, EXAMPLE_FACTS),
    ):
        if path.exists():
            console.print(f"[dim]Exists[/dim] {path}")
            continue
        path.write_text(content)
        console.print(f"[green]Created[/green] {path}")


@rules_app.command("list")
def rules_list(
    rules_file: Annotated[
        Path | None,
        typer.Option("--rules", "-r", help="Rules file (default from settings)"),
    ] = None,
) -> None:
    """List all configured rules."""
    from nighthawk.config import load_rules
    from nighthawk.errors import ConfigFileError, RuleError
    from nighthawk.rules.engine import RuleDefinition

    settings = get_settings()
    try:
        rules = load_rules(rules_file or settings.rules_path)
    except ConfigFileError as e:
        console.print(f"[red]Invalid rules file:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    if not rules:
        console.print("[yellow]No rules configured[/yellow]")
        console.print("Run [bold]nighthawk init[/bold] to create example rules")
        return

    table = Table(title="Rules")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Condition")
    table.add_column("Actions", justify="right", width=7)
    table.add_column("Enabled", width=7)

    for raw in rules:
        try:
            definition = RuleDefinition.model_validate(raw)
            condition = str(definition.compile().condition)
        except (ValidationError, RuleError) as e:
            name = str(raw.get("name", "unnamed"))
            table.add_row(name, f"[red]{escape(str(e))}[/red]", "", "")
            continue
        table.add_row(
            definition.name,
            escape(condition),
            str(len(definition.actions)),
            "✓" if definition.enabled else "✗",
        )

    console.print(table)


@app.command()
def run(
    rules_file: Annotated[
        Path | None,
        typer.Option("--rules", "-r", help="Rules file (default from settings)"),
    ] = None,
    facts_file: Annotated[
        Path | None,
        typer.Option("--facts", "-f", help="Facts file (default from settings)"),
    ] = None,
    demo: Annotated[
        bool, typer.Option("--demo", help="Run the built-in SEO example rules")
    ] = False,
) -> None:
    """Evaluate every rule once against the current facts."""
    from nighthawk.config import load_facts, load_rules
    from nighthawk.errors import ConfigFileError, RuleError
    from nighthawk.facts import FactSource, MappingFactSource, SeoFactSource
    from nighthawk.rules.engine import RuleEngine
    from nighthawk.seo import INTRO, seo_engine

    settings = get_settings()
    _setup_logging(settings)

    facts: FactSource
    if demo:
        console.print(INTRO, markup=False)
        engine = seo_engine(console=console)
        facts = SeoFactSource()
    else:
        rules_path = rules_file or settings.rules_path
        facts_path = facts_file or settings.facts_path
        try:
            definitions = load_rules(rules_path)
            fact_values = load_facts(facts_path) if facts_path.exists() else None
        except ConfigFileError as e:
            console.print(f"[red]Invalid file:[/red] {escape(str(e))}")
            raise typer.Exit(1)

        if not definitions:
            console.print(f"[yellow]No rules found in {rules_path}[/yellow]")
            console.print("Run [bold]nighthawk init[/bold] or use [bold]--demo[/bold]")
            raise typer.Exit(1)

        try:
            engine = RuleEngine.from_definitions(definitions, console=console)
        except (ValidationError, RuleError) as e:
            console.print(f"[red]Invalid rules:[/red] {escape(str(e))}")
            raise typer.Exit(1)

        if fact_values is not None:
            facts = MappingFactSource(fact_values)
        else:
            console.print("[dim]No facts file, using stand-in SEO facts[/dim]")
            facts = SeoFactSource()

    results = engine.run_all(facts)

    table = Table(title="Results")
    table.add_column("Rule", style="cyan", no_wrap=True)
    table.add_column("Status")
    table.add_column("Error", style="red")
    for result in results:
        table.add_row(
            result.name,
            STATUS_STYLES[result.status.value],
            escape(str(result.error)) if result.error else "",
        )
    console.print(table)

    if any(r.failed for r in results):
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
