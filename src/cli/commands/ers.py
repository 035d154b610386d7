"""Emotional Regulation Score CLI commands."""

from datetime import datetime

import click
from rich.console import Console
from rich.table import Table

from cli.utils import get_components, resolve_user
from ers import get_stage_info
from errors import InvalidInputError
from shared_types import Readiness

console = Console()

STAGE_STYLE = {"healing": "red", "rebuilding": "yellow", "ready": "green"}
TREND_ARROW = {"improving": "[green]↑[/]", "stable": "[dim]→[/]", "declining": "[red]↓[/]"}


def _print_score(score) -> None:
    stage = str(score.stage)
    info = get_stage_info(stage)
    console.print(
        f"\n[bold]ERS {score.score:.1f}[/] {TREND_ARROW[str(score.trend)]}  "
        f"[{STAGE_STYLE[stage]}]{info['label']}[/] - {info['description']}"
    )
    if score.is_baseline:
        console.print("[dim]Baseline score: log moods and journal entries to personalize it.[/]")
        return
    if score.delta is not None:
        console.print(f"[dim]Change since last score: {score.delta:+.1f}[/]")

    table = Table(show_header=True)
    table.add_column("Component")
    table.add_column("Value", justify="right")
    for name, value in score.components.items():
        table.add_row(name.replace("_", " "), "-" if value is None else f"{value:.2f}")
    console.print(table)
    console.print(f"[dim]Confidence {score.confidence:.0%} from {score.data_points} data points[/]")


@click.group()
def ers():
    """Emotional Regulation Score."""
    pass


@ers.command("calculate")
@click.option("-u", "--user", "user_id", help="User id")
@click.option(
    "--at",
    "at",
    type=click.DateTime(),
    help="Compute as of this time instead of now (replaces any score at the same instant)",
)
def ers_calculate(user_id: str, at: datetime):
    """Compute and store a new score."""
    c = get_components()
    score = c["ers"].calculate_and_store(resolve_user(c, user_id), now=at)
    _print_score(score)


@ers.command("show")
@click.option("-u", "--user", "user_id", help="User id")
def ers_show(user_id: str):
    """Show the latest stored score."""
    c = get_components()
    score = c["store"].get_latest_ers_score(resolve_user(c, user_id))
    if score is None:
        console.print("[yellow]No score yet. Run 'paceful ers calculate'.[/]")
        return
    _print_score(score)


@ers.command("history")
@click.option("-u", "--user", "user_id", help="User id")
@click.option("-n", "--limit", default=12, help="Max scores to show")
def ers_history(user_id: str, limit: int):
    """Past scores, oldest first."""
    c = get_components()
    scores = c["store"].list_ers_scores(resolve_user(c, user_id), limit=limit)

    if not scores:
        console.print("[yellow]No scores yet.[/]")
        return

    table = Table(show_header=True, title="ERS history")
    table.add_column("Computed", style="dim")
    table.add_column("Score", justify="right")
    table.add_column("Stage")
    table.add_column("Trend")
    table.add_column("Confidence", justify="right")

    for s in scores:
        stage = str(s.stage)
        table.add_row(
            s.computed_at.strftime("%Y-%m-%d %H:%M"),
            f"{s.score:.1f}",
            f"[{STAGE_STYLE[stage]}]{stage}[/]",
            TREND_ARROW[str(s.trend)],
            f"{s.confidence:.0%}",
        )
    console.print(table)


@ers.command("readiness")
@click.argument("answer", type=click.Choice([r.value for r in Readiness]))
@click.option("-u", "--user", "user_id", help="User id")
def ers_readiness(answer: str, user_id: str):
    """Record how ready you feel to connect with others."""
    c = get_components()
    user_id = resolve_user(c, user_id)
    try:
        c["store"].add_readiness(user_id, answer)
    except InvalidInputError as e:
        console.print(f"[red]Error:[/] {e}")
        raise SystemExit(1)
    console.print(f"[green]Recorded:[/] {answer}")
    _print_score(c["ers"].calculate_and_store(user_id))


@ers.command("recompute-all")
def ers_recompute_all():
    """Recompute scores for every user with data."""
    c = get_components()
    with console.status("Recomputing scores..."):
        result = c["ers"].calculate_for_all_users()

    console.print(f"[green]Updated:[/] {result.success}  [red]Failed:[/] {result.failed}")
    for err in result.errors:
        console.print(f"  [red]{err['user_id']}[/]: {err['error']}")
