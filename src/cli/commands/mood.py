"""Mood tracking CLI commands."""

import click
from rich.console import Console
from rich.table import Table

from cli.utils import get_components, resolve_user
from errors import InvalidInputError
from mood.calculator import get_mood_label

console = Console()

LABEL_STYLE = {"Low": "red", "Moderate": "yellow", "High": "green"}


def _bar(value: float) -> str:
    label = get_mood_label(max(1, min(10, round(value))))
    return f"[{LABEL_STYLE[label]}]{'█' * round(value)}[/]"


@click.group()
def mood():
    """Log moods and review mood history."""
    pass


@mood.command("log")
@click.argument("value", type=int)
@click.option("-u", "--user", "user_id", help="User id")
@click.option("-e", "--emotions", help="Comma-separated emotions")
@click.option("--note", help="Short note")
def mood_log(value: int, user_id: str, emotions: str, note: str):
    """Log a mood from 1 (lowest) to 10 (highest)."""
    c = get_components()
    user_id = resolve_user(c, user_id)
    emotion_list = emotions.split(",") if emotions else []

    try:
        record = c["mood"].log_mood(user_id, value, emotions=emotion_list, note=note)
    except InvalidInputError as e:
        console.print(f"[red]Error:[/] {e}")
        raise SystemExit(1)

    console.print(f"[green]Logged:[/] {value} ({get_mood_label(value)})")
    if record.ers:
        console.print(f"[bold]ERS:[/] {record.ers.score:.1f} ({record.ers.stage})")


@mood.command("stats")
@click.option("-u", "--user", "user_id", help="User id")
@click.option("-d", "--days", default=30, help="Lookback days")
def mood_stats(user_id: str, days: int):
    """Summary statistics over the last N days."""
    c = get_components()
    stats = c["mood"].stats(resolve_user(c, user_id), days=days)

    if not stats.count:
        console.print("[yellow]No moods logged. Try 'paceful mood log 7'.[/]")
        return

    console.print(f"[bold]Entries:[/] {stats.count}")
    console.print(f"[bold]Average:[/] {stats.average:.1f}  (std dev {stats.std_dev:.2f})")
    console.print(f"[bold]Range:[/] {stats.lowest} - {stats.highest}")
    console.print(f"[bold]Trend:[/] {stats.trend} ({stats.trend_percentage:+.1f}%)")
    if stats.most_common_emotion:
        console.print(f"[bold]Most common emotion:[/] {stats.most_common_emotion}")


@mood.command("daily")
@click.option("-u", "--user", "user_id", help="User id")
@click.option("-d", "--days", default=30, help="Lookback days")
def mood_daily(user_id: str, days: int):
    """Per-day mood averages."""
    c = get_components()
    summaries = c["mood"].daily(resolve_user(c, user_id), days=days)

    if not summaries:
        console.print("[yellow]No moods logged.[/]")
        return

    table = Table(show_header=True, title=f"Mood - last {days} days")
    table.add_column("Date", style="dim")
    table.add_column("Mood")
    table.add_column("Avg", justify="right")
    table.add_column("Entries", justify="right")
    table.add_column("Emotions")

    for s in summaries:
        table.add_row(
            s.date,
            _bar(s.average_mood),
            f"{s.average_mood:.1f}",
            str(s.entry_count),
            ", ".join(s.dominant_emotions),
        )

    console.print(table)


@mood.command("day")
@click.argument("day")
@click.option("-u", "--user", "user_id", help="User id")
def mood_day(day: str, user_id: str):
    """Every mood logged on DAY (YYYY-MM-DD)."""
    c = get_components()
    try:
        entries = c["mood"].for_date(resolve_user(c, user_id), day)
    except InvalidInputError as e:
        console.print(f"[red]Error:[/] {e}")
        raise SystemExit(1)

    if not entries:
        console.print(f"[yellow]No moods logged on {day}.[/]")
        return

    for e in entries:
        line = f"{e.logged_at.strftime('%H:%M')}  {_bar(e.mood_value)} {e.mood_value}"
        if e.emotions:
            line += f"  [dim]{', '.join(e.emotions)}[/]"
        console.print(line)
        if e.note:
            console.print(f"       [dim]{e.note}[/]")
