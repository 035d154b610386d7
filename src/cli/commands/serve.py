"""Run the web API."""

import click


@click.command()
@click.option("--host", default="127.0.0.1", help="Bind address")
@click.option("--port", default=8000, type=int, help="Bind port")
def serve(host: str, port: int):
    """Serve the Paceful HTTP API."""
    import uvicorn

    uvicorn.run("web.app:app", host=host, port=port, log_config=None)
