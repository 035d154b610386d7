"""Paceful command line entry point."""

import sys
from pathlib import Path

import click

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from cli.commands import ers, init, journal, mood, serve
from cli.config import load_config_model
from cli.logging_config import setup_logging


@click.group()
@click.version_option(version="0.1.0")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.option("--json-logs", is_flag=True, help="Emit logs as JSON lines")
def cli(verbose: bool, json_logs: bool):
    """Paceful - journaling, mood tracking and emotional readiness."""
    try:
        config = load_config_model()
        level, json_mode = config.logging.level, config.logging.json_mode
        log_file = config.paths.log_file
    except ValueError:
        # Config problems are reported by the command that needs the config
        level, json_mode, log_file = "INFO", False, None
    setup_logging(
        json_mode=json_mode or json_logs,
        level="DEBUG" if verbose else level,
        log_file=log_file,
    )


cli.add_command(journal)
cli.add_command(mood)
cli.add_command(ers)
cli.add_command(init)
cli.add_command(serve)


if __name__ == "__main__":
    cli()
