"""Initialize Paceful data directory and config."""

from pathlib import Path

import click
from rich.console import Console

from cli.config import find_config, load_config_model, write_default_config

console = Console()


@click.command()
@click.option("--path", "config_path", type=click.Path(path_type=Path), help="Where to write config")
def init(config_path: Path):
    """Create the data directory and a default config file."""
    existing = find_config()
    model = load_config_model(existing)

    db_dir = model.paths.db_path.parent
    db_dir.mkdir(parents=True, exist_ok=True)
    console.print(f"[green]✓[/] data dir: {db_dir}")

    target = config_path or Path.home() / "paceful" / "config.yaml"
    if target.exists():
        console.print(f"[dim]Config already exists: {target}[/]")
    else:
        write_default_config(target)
        console.print(f"[green]✓[/] Created config: {target}")

    console.print("\n[bold]Ready![/] Try 'paceful mood log 7' or 'paceful journal add'.")
