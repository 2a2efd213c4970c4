"""CLI commands for running and checking the callback server."""

import json
import logging
import sys
from pathlib import Path

import click
import requests

from ..callback_server.app import run_server
from ..callback_server.config import load_config
from ..logging_audit import configure_server_logging
from ..utils.exceptions import ConfigurationError


logger = logging.getLogger(__name__)


@click.command(name="serve")
@click.option(
    "--host",
    type=str,
    help="Host address (overrides config file)"
)
@click.option(
    "--port",
    type=int,
    help="Server port (overrides config file and PORT/RAILWAY_PORT)"
)
@click.option(
    "--config",
    type=click.Path(exists=True, path_type=Path),
    help="Path to configuration file (default: config/callback.json)"
)
@click.option(
    "--debug",
    is_flag=True,
    help="Enable debug mode"
)
@click.pass_context
def serve(
    ctx: click.Context,
    host: str | None,
    port: int | None,
    config: Path | None,
    debug: bool
):
    """Start the DSR callback server in the foreground.

    Examples:

        # Start with defaults (port from PORT, RAILWAY_PORT or 3000)\n
        dsr-callback serve

        # Start on custom port\n
        dsr-callback serve --port 9090
    """
    try:
        server_config = load_config(config)
    except ConfigurationError as e:
        raise click.ClickException(f"Configuration error: {e}")

    cli_options = ctx.obj or {}
    configure_server_logging(
        server_config,
        verbose=cli_options.get("verbose", False),
        log_file=cli_options.get("log_file"),
    )

    updates = {}
    if host is not None:
        updates["host"] = host
    if port is not None:
        if not 1 <= port <= 65535:
            raise click.ClickException(
                f"Invalid port {port}. Port must be between 1 and 65535."
            )
        updates["port"] = port
    if updates:
        server_config = server_config.model_copy(update=updates)

    # Display startup information
    click.echo("=" * 50)
    click.echo("DSR Callback Server")
    click.echo("=" * 50)
    click.echo(f"Host: {server_config.host}")
    click.echo(f"Port: {server_config.port}")
    click.echo(f"Callback URL: http://{server_config.host}:{server_config.port}/")
    click.echo(f"Health Check: http://{server_config.host}:{server_config.port}/health")
    click.echo("=" * 50)
    click.echo("")
    click.echo("Starting server... (Press Ctrl+C to stop)")
    click.echo("")

    try:
        run_server(config=server_config, debug=debug)
    except KeyboardInterrupt:
        click.echo(click.style("\n\nShutting down DSR Callback Server...", fg="yellow"))
    except OSError as e:
        logger.error(f"Server listen error: {e}")
        click.echo(click.style(f"Server listen error: {e}", fg="red"), err=True)
        sys.exit(1)


@click.command(name="health")
@click.option(
    "--url",
    default="http://127.0.0.1:3000",
    show_default=True,
    help="Base URL of the running callback server"
)
@click.option(
    "--timeout",
    type=float,
    default=5.0,
    show_default=True,
    help="Request timeout in seconds"
)
@click.option(
    "--json",
    "output_json",
    is_flag=True,
    help="Output health data as JSON"
)
def health(url: str, timeout: float, output_json: bool):
    """Query the health endpoint of a running callback server.

    Exits with status 1 when the server is unreachable or unhealthy.
    """
    health_url = f"{url.rstrip('/')}/health"

    try:
        response = requests.get(health_url, timeout=timeout)
        health_data = response.json() if response.status_code == 200 else {}
    except (requests.RequestException, ValueError) as e:
        logger.debug(f"Health check failed: {e}")
        health_data = {"error": str(e)}

    healthy = health_data.get("status") == "ok"

    if output_json:
        click.echo(json.dumps({"healthy": healthy, "url": health_url, **health_data}, indent=2))
    elif healthy:
        click.echo(click.style("✓", fg="green", bold=True) + f" {health_data.get('message', 'ok')}")
        click.echo(f"URL: {health_url}")
        click.echo(f"Uptime: {format_uptime(int(health_data.get('uptime_seconds', 0)))}")
        click.echo(f"Requests Handled: {health_data.get('request_count', 0)}")
    else:
        click.echo(click.style("✗", fg="red", bold=True) + f" Callback server not healthy at {health_url}")
        if "error" in health_data:
            click.echo(f"  {health_data['error']}", err=True)

    sys.exit(0 if healthy else 1)


def format_uptime(seconds: int) -> str:
    """Format uptime in human-readable format.

    Args:
        seconds: Uptime in seconds

    Returns:
        Formatted uptime string (e.g., "2h 15m 30s")
    """
    hours = seconds // 3600
    minutes = (seconds % 3600) // 60
    secs = seconds % 60

    parts = []
    if hours > 0:
        parts.append(f"{hours}h")
    if minutes > 0:
        parts.append(f"{minutes}m")
    if secs > 0 or not parts:
        parts.append(f"{secs}s")

    return " ".join(parts)
