"""
FundingOS CLI - Score, rank and triage funding opportunities

Examples:
    # Score one opportunity against one project
    fundingos score opportunity.json project.json --profile org.json

    # Ranked table of matches
    fundingos rank opportunities.json project.json -f table --min-score 50

    # CSV for a spreadsheet
    fundingos rank opportunities.json project.json -f csv > matches.csv

    # Portfolio analysis across several projects
    fundingos analyze projects.json opportunities.json

    # Which handler should answer a chat message?
    fundingos intent "yes" --history history.json

    # Check configuration
    fundingos check --config fundingos.yaml
"""

import csv
import io
import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Optional

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from . import __version__
from .api import OpportunityMatch, analyze_opportunities, classify_message, rank_opportunities, score_opportunity
from .config import ConfigError, Settings, load_config
from .scoring import generate_match_notes

# Progress to stderr, data to stdout
console = Console(stderr=True)
logger = logging.getLogger(__name__)


def setup_logging(verbose: bool, quiet: bool, debug: bool) -> None:
    """Configure logging based on CLI flags."""
    if quiet:
        level = logging.ERROR
    elif debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def _settings(config_path: Optional[str]) -> Settings:
    try:
        return load_config(config_path)
    except ConfigError as e:
        console.print(f"[red]Config error:[/red] {e}")
        sys.exit(1)


def load_json(path: str, param: str):
    """Read a JSON document from a file, or stdin when path is '-'."""
    try:
        if path == "-":
            return json.load(sys.stdin)
        with open(path) as f:
            return json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise click.BadParameter(f"cannot read JSON from {path}: {e}", param_hint=param)


def _records(data, key: str, param: str) -> list:
    """Accept a bare JSON list or an object wrapping one under `key`."""
    if isinstance(data, dict) and key in data:
        data = data[key]
    if isinstance(data, dict):
        return [data]
    if not isinstance(data, list):
        raise click.BadParameter(f"expected a list of {key}", param_hint=param)
    return data


def _record(data, param: str) -> Optional[dict]:
    if data is not None and not isinstance(data, dict):
        raise click.BadParameter("expected a JSON object", param_hint=param)
    return data


def format_output(
    matches: list[OpportunityMatch],
    output_format: str,
    no_headers: bool = False,
) -> str:
    """Format ranked matches for output."""
    if output_format == "json":
        return json.dumps([m.to_dict() for m in matches], indent=2, default=str)

    elif output_format == "jsonl":
        return "\n".join(json.dumps(m.to_dict(), default=str) for m in matches)

    elif output_format == "csv":
        output = io.StringIO()
        fieldnames = [
            "opportunity_id", "opportunity_title", "sponsor", "fit_score",
            "eligible", "confidence", "days_until_deadline", "recommendation", "notes",
        ]
        writer = csv.DictWriter(output, fieldnames=fieldnames, extrasaction="ignore")
        if not no_headers:
            writer.writeheader()
        for m in matches:
            row = m.to_dict()
            row["eligible"] = "1" if m.result.eligible else "0"
            row["days_until_deadline"] = "" if m.days_until_deadline is None else m.days_until_deadline
            writer.writerow(row)
        return output.getvalue()

    else:
        raise ValueError(f"Unknown format: {output_format}")


def _score_color(score: int) -> str:
    return "green" if score >= 70 else "yellow" if score >= 40 else "red"


def display_matches(matches: list[OpportunityMatch], title: str = "Ranked Opportunities") -> None:
    """Display a summary table of ranked matches."""
    table = Table(title=title, show_header=True, header_style="bold magenta")

    table.add_column("Opportunity", style="cyan", max_width=34)
    table.add_column("Fit", justify="right")
    table.add_column("Elig", justify="center")
    table.add_column("Days", justify="right")
    table.add_column("Recommendation", max_width=22)
    table.add_column("Key Note", max_width=40)

    for m in matches:
        color = _score_color(m.score)
        days = "-" if m.days_until_deadline is None else str(m.days_until_deadline)
        note = (m.result.strengths or m.result.weaknesses or ["-"])[0]
        table.add_row(
            (m.opportunity.title or m.opportunity.id or "?")[:34],
            f"[{color}]{m.score}[/{color}]",
            "[green]Y[/green]" if m.result.eligible else "[red]N[/red]",
            days,
            m.recommendation,
            note[:40],
        )

    console.print(table)


# ============================================================================
# CLI Group
# ============================================================================

@click.group(invoke_without_command=True)
@click.pass_context
@click.version_option(version=__version__)
def cli(ctx):
    """Funding opportunity matching: fit scores, rankings and chat intents."""
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


# ============================================================================
# Score Command
# ============================================================================

@cli.command()
@click.argument("opportunity_file", type=click.Path(allow_dash=True))
@click.argument("project_file", type=click.Path(allow_dash=True))
@click.option("--profile", "profile_file", type=click.Path(exists=True), help="Organization profile JSON")
@click.option("-f", "--format", "output_format",
              type=click.Choice(["json", "text"]), default="json", help="Output format")
@click.option("--config", type=click.Path(exists=True), help="YAML config file")
@click.option("-q", "--quiet", is_flag=True, help="Only errors on stderr")
@click.option("--debug", is_flag=True, help="Enable debug logging")
def score(
    opportunity_file: str,
    project_file: str,
    profile_file: Optional[str],
    output_format: str,
    config: Optional[str],
    quiet: bool,
    debug: bool,
):
    """Score one opportunity against one project."""
    setup_logging(False, quiet, debug)
    settings = _settings(config)

    opportunity = _record(load_json(opportunity_file, "OPPORTUNITY_FILE"), "OPPORTUNITY_FILE")
    project = _record(load_json(project_file, "PROJECT_FILE"), "PROJECT_FILE")
    profile = _record(load_json(profile_file, "--profile"), "--profile") if profile_file else None

    result = score_opportunity(opportunity, project, profile, settings)
    if not result.ok:
        console.print(f"[red]{result.error}:[/red] {result.message}")
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(1)

    if output_format == "text":
        click.echo(generate_match_notes(result))
        for s in result.strengths:
            click.echo(f"  + {s}")
        for w in result.weaknesses:
            click.echo(f"  - {w}")
        click.echo(f"Confidence: {result.confidence:.2f}")
    else:
        click.echo(json.dumps(result.to_dict(), indent=2))


# ============================================================================
# Rank Command
# ============================================================================

@cli.command()
@click.argument("opportunities_file", type=click.Path(allow_dash=True))
@click.argument("project_file", type=click.Path(exists=True))
@click.option("--profile", "profile_file", type=click.Path(exists=True), help="Organization profile JSON")
@click.option("--min-score", type=int, default=0, help="Minimum fit score")
@click.option("-l", "--limit", type=int, default=None, help="Max matches to show")
@click.option("-f", "--format", "output_format",
              type=click.Choice(["json", "jsonl", "csv", "table"]), default="json", help="Output format")
@click.option("--no-headers", is_flag=True, help="Omit headers in CSV")
@click.option("--config", type=click.Path(exists=True), help="YAML config file")
@click.option("-q", "--quiet", is_flag=True, help="Suppress summary, only emit data")
@click.option("-v", "--verbose", is_flag=True, help="Verbose progress logging")
@click.option("--debug", is_flag=True, help="Enable debug logging")
def rank(
    opportunities_file: str,
    project_file: str,
    profile_file: Optional[str],
    min_score: int,
    limit: Optional[int],
    output_format: str,
    no_headers: bool,
    config: Optional[str],
    quiet: bool,
    verbose: bool,
    debug: bool,
):
    """Rank opportunities for a project, best fit first."""
    setup_logging(verbose, quiet, debug)
    settings = _settings(config)

    opportunities = _records(load_json(opportunities_file, "OPPORTUNITIES_FILE"), "opportunities", "OPPORTUNITIES_FILE")
    project = _record(load_json(project_file, "PROJECT_FILE"), "PROJECT_FILE")
    profile = _record(load_json(profile_file, "--profile"), "--profile") if profile_file else None

    matches = rank_opportunities(opportunities, project, profile, min_score=min_score, limit=limit, settings=settings)

    if output_format == "table":
        display_matches(matches)
    else:
        click.echo(format_output(matches, output_format, no_headers))

    if not quiet:
        console.print(f"[dim]{len(matches)} of {len(opportunities)} opportunities after filtering[/dim]")


# ============================================================================
# Analyze Command
# ============================================================================

@cli.command()
@click.argument("projects_file", type=click.Path(exists=True))
@click.argument("opportunities_file", type=click.Path(exists=True))
@click.option("--profile", "profile_file", type=click.Path(exists=True), help="Organization profile JSON")
@click.option("--config", type=click.Path(exists=True), help="YAML config file")
@click.option("-q", "--quiet", is_flag=True, help="Suppress summary, only emit data")
@click.option("-v", "--verbose", is_flag=True, help="Verbose progress logging")
@click.option("--debug", is_flag=True, help="Enable debug logging")
def analyze(
    projects_file: str,
    opportunities_file: str,
    profile_file: Optional[str],
    config: Optional[str],
    quiet: bool,
    verbose: bool,
    debug: bool,
):
    """Analyze every project against every opportunity."""
    setup_logging(verbose, quiet, debug)
    settings = _settings(config)

    projects = _records(load_json(projects_file, "PROJECTS_FILE"), "projects", "PROJECTS_FILE")
    opportunities = _records(load_json(opportunities_file, "OPPORTUNITIES_FILE"), "opportunities", "OPPORTUNITIES_FILE")
    profile = _record(load_json(profile_file, "--profile"), "--profile") if profile_file else None

    analysis = analyze_opportunities(projects, opportunities, profile, settings)

    if not quiet:
        console.print(
            f"[green]High:[/green] {analysis.high_matches}  "
            f"[yellow]Medium:[/yellow] {analysis.medium_matches}  "
            f"[red]Urgent deadlines:[/red] {analysis.urgent_deadlines}  "
            f"[dim]({analysis.total_analyzed} opportunities)[/dim]"
        )
    click.echo(json.dumps(analysis.to_dict(), indent=2, default=str))


# ============================================================================
# Intent Command
# ============================================================================

@cli.command()
@click.argument("message")
@click.option("--history", "history_file", type=click.Path(exists=True), help="Conversation history JSON")
@click.option("--now", type=click.DateTime(formats=["%Y-%m-%dT%H:%M:%S"]), default=None,
              help="Reference time in UTC (defaults to the current time)")
@click.option("--config", type=click.Path(exists=True), help="YAML config file")
@click.option("--debug", is_flag=True, help="Enable debug logging")
def intent(
    message: str,
    history_file: Optional[str],
    now: Optional[datetime],
    config: Optional[str],
    debug: bool,
):
    """Classify a chat message into an assistant intent."""
    setup_logging(False, False, debug)
    settings = _settings(config)

    history = None
    if history_file:
        history = _records(load_json(history_file, "--history"), "messages", "--history")

    if now is not None:
        now = now.replace(tzinfo=timezone.utc)

    result = classify_message(message, history, settings, now)
    click.echo(result.value)


# ============================================================================
# Check Command
# ============================================================================

@cli.command()
@click.option("--config", type=click.Path(exists=True), help="YAML config file")
def check(config: Optional[str]):
    """Check configuration and show effective settings."""
    config_path = config or os.environ.get("FUNDINGOS_CONFIG", "")
    if config_path:
        click.echo(f"✓ Config file: {config_path}")
    else:
        click.echo("- Config file: not set (using defaults)")

    try:
        settings = load_config(config)
    except ConfigError as e:
        click.echo(f"✗ Config: {e}")
        sys.exit(1)

    click.echo("✓ Config: valid")
    click.echo(f"  Intent window: {settings.intent.recency_window_seconds}s")
    click.echo(f"  Follow-up max length: {settings.intent.max_follow_up_length}")
    click.echo(f"  Base score: {settings.scoring.base_score}")
    click.echo(
        f"  Thresholds: high>={settings.high_match_threshold} "
        f"medium>={settings.medium_match_threshold} urgent<={settings.urgent_deadline_days}d"
    )
    click.echo(f"  Allowed origins: {settings.allowed_origins}")


# ============================================================================
# Version Command
# ============================================================================

@cli.command()
def version():
    """Show version info."""
    from fundingos import get_version
    click.echo(f"fundingos {get_version()}")


# ============================================================================
# Web Command
# ============================================================================

@cli.command()
@click.option("--host", default="127.0.0.1", help="Host to bind to.")
@click.option("--port", default=8000, help="Port to bind to.")
@click.option("--reload", is_flag=True, help="Enable auto-reload for development.")
@click.option("--config", type=click.Path(exists=True), help="YAML config file")
def web(host: str, port: int, reload: bool, config: Optional[str]) -> None:
    """Start the HTTP API."""
    import uvicorn

    if config:
        # Picked up by load_config() when the app module is imported
        os.environ["FUNDINGOS_CONFIG"] = config

    console.print(
        Panel.fit(
            f"[bold]FundingOS API[/bold]\n"
            f"Running at: [cyan]http://{host}:{port}/api/v1[/cyan]",
            border_style="blue",
        )
    )
    console.print("Press Ctrl+C to stop\n")

    uvicorn.run(
        "fundingos.web.app:app",
        host=host,
        port=port,
        reload=reload,
        log_level="info",
    )


if __name__ == "__main__":
    cli()
