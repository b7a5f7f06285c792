"""API server command."""

import click

from .. import config
from .base import ensure_initialized


@click.command()
@click.option("--host", default="127.0.0.1", help="Host to bind to (default: 127.0.0.1)")
@click.option(
    "--port", "-p", default=config.PORT, type=int, help=f"Port to bind to (default: {config.PORT})"
)
@click.option("--reload", is_flag=True, help="Enable auto-reload for development")
@click.pass_context
def serve(ctx: click.Context, host: str, port: int, reload: bool):
    """Start the REST API server.

    Examples:

        # Start on the configured port
        gymsynergy serve

        # Expose to the network with auto-reload
        gymsynergy serve --host 0.0.0.0 --reload
    """
    ensure_initialized(ctx)

    import uvicorn

    from ..web import create_app

    click.echo()
    click.echo(click.style("Starting GymSynergy API...", fg="green"))
    click.echo(f"  Local:   http://{host}:{port}/api/test")
    click.echo()

    uvicorn.run(
        create_app() if not reload else "gymsynergy.web:create_app",
        host=host,
        port=port,
        reload=reload,
        factory=reload,
        log_level=config.LOG_LEVEL.lower(),
    )
