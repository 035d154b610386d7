"""Journal CLI commands."""

import json

import click
import structlog
from rich.console import Console
from rich.table import Table

from cli.utils import get_components, resolve_user
from errors import InvalidInputError

console = Console()
logger = structlog.get_logger()

LEVEL_STYLE = {
    "very_positive": "bold green",
    "positive": "green",
    "slightly_positive": "cyan",
    "neutral": "dim",
    "slightly_negative": "yellow",
    "negative": "red",
    "very_negative": "bold red",
}


def _print_analysis(analysis: dict) -> None:
    sentiment = analysis["sentiment"]
    level = str(sentiment["level"])
    style = LEVEL_STYLE.get(level, "dim")
    console.print(
        f"[bold]Sentiment:[/] [{style}]{level}[/] ({sentiment['score']:+.2f}, "
        f"confidence {sentiment['confidence']:.0%})"
    )

    emotions = analysis["emotions"]
    if emotions["primary"]:
        line = f"[bold]Emotions:[/] {emotions['primary']}"
        if emotions["secondary"]:
            line += f", {emotions['secondary']}"
        console.print(line)

    if analysis["markers"]:
        console.print(f"[bold]Insights:[/] {', '.join(str(m) for m in analysis['markers'])}")
    if analysis["notable_phrases"]:
        console.print(f"[dim]Notable: {'; '.join(analysis['notable_phrases'])}[/]")


@click.group()
def journal():
    """Write and review journal entries."""
    pass


@journal.command("add")
@click.option("-u", "--user", "user_id", help="User id (defaults to config user.default_id)")
@click.option("--title", help="Entry title")
@click.argument("content", required=False)
def journal_add(user_id: str, title: str, content: str):
    """Add new journal entry. Opens editor if no content provided."""
    c = get_components()
    user_id = resolve_user(c, user_id)

    if not content:
        content = click.edit("\n")
        if not content or not content.strip():
            console.print("[yellow]No content provided, cancelled.[/]")
            return

    try:
        record = c["journal"].record_entry(user_id, content, title=title)
    except InvalidInputError as e:
        console.print(f"[red]Error:[/] {e}")
        raise SystemExit(1)

    console.print(f"[green]Saved:[/] {record.entry.id[:8]}")
    _print_analysis(record.analysis.analysis.to_dict())
    if record.ers:
        console.print(
            f"[bold]ERS:[/] {record.ers.score:.1f} ({record.ers.stage}, {record.ers.trend})"
        )


@journal.command("list")
@click.option("-u", "--user", "user_id", help="User id")
@click.option("-n", "--limit", default=10, help="Max entries to show")
def journal_list(user_id: str, limit: int):
    """List recent journal entries with their sentiment."""
    c = get_components()
    user_id = resolve_user(c, user_id)
    analyses = c["store"].list_analyses(user_id, limit=limit)

    if not analyses:
        console.print("[yellow]No entries found.[/]")
        return

    table = Table(show_header=True)
    table.add_column("Date", style="cyan")
    table.add_column("ID", style="dim")
    table.add_column("Sentiment")
    table.add_column("Score", justify="right")
    table.add_column("Words", justify="right")
    table.add_column("Insights", style="green")

    for a in reversed(analyses):
        level = str(a.sentiment_level)
        table.add_row(
            a.entry_created_at.strftime("%Y-%m-%d %H:%M"),
            a.entry_id[:8],
            f"[{LEVEL_STYLE.get(level, 'dim')}]{level}[/]",
            f"{a.sentiment_score:+.2f}",
            str(a.word_count),
            ", ".join(str(m) for m in a.markers[:3]),
        )

    console.print(table)


@journal.command("analyze")
@click.argument("text")
@click.option("--json", "as_json", is_flag=True, help="Print the full analysis as JSON")
def journal_analyze(text: str, as_json: bool):
    """Analyze text without saving it."""
    c = get_components()
    try:
        result = c["analyzer"].analyze(text)
    except InvalidInputError as e:
        console.print(f"[red]Error:[/] {e}")
        raise SystemExit(1)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2, default=str))
        return
    _print_analysis(result.to_dict())


@journal.command("delete")
@click.argument("entry_id")
@click.option("-u", "--user", "user_id", help="User id")
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation")
def journal_delete(entry_id: str, user_id: str, yes: bool):
    """Delete a journal entry by id."""
    c = get_components()
    user_id = resolve_user(c, user_id)

    if not yes:
        if not click.confirm(f"Delete {entry_id}?"):
            return

    if c["journal"].delete_entry(user_id, entry_id):
        console.print(f"[green]Deleted:[/] {entry_id}")
    else:
        console.print(f"[red]Not found:[/] {entry_id}")
