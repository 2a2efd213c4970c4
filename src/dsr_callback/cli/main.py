"""Main CLI entry point for the DSR Callback Receiver.

This module provides the main Click command group for the dsr-callback CLI.
"""

from pathlib import Path
from typing import Optional

import click

from dsr_callback import __version__
from dsr_callback.callback_server.config import load_config
from dsr_callback.cli.inspect_commands import inspect_envelope
from dsr_callback.cli.server_commands import health, serve
from dsr_callback.logging_audit import configure_logging
from dsr_callback.utils.exceptions import ConfigurationError


@click.group()
@click.version_option(version=__version__, prog_name="dsr-callback")
@click.option("--verbose", is_flag=True, help="Enable verbose logging (DEBUG level)")
@click.option(
    "--log-file",
    type=click.Path(path_type=Path),
    default=None,
    help="Also write logs to this file (serve defaults to the configured log_path)",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    log_file: Optional[Path],
) -> None:
    """DSR Callback Receiver - acknowledges access-point controller callbacks.

    Common usage:

        # Receive callbacks on port 3000 (or $PORT)
        dsr-callback serve

        # Classify a captured envelope without running the server
        dsr-callback inspect notify.xml

    Use --help with any command for more information.
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["log_file"] = log_file

    # serve reconfigures with the server log level
    configure_logging(level="DEBUG" if verbose else "WARNING", log_file=log_file)


cli.add_command(serve)
cli.add_command(health)
cli.add_command(inspect_envelope)


@cli.group()
def config() -> None:
    """Configuration management commands."""
    pass


@config.command()
@click.argument("config_file", type=click.Path(exists=True, path_type=Path))
def validate(config_file: Path) -> None:
    """Validate a configuration file.

    Environment overrides (DSR_CALLBACK_*, PORT, RAILWAY_PORT) are applied,
    so the output shows the configuration the server would use.

    Example:
        dsr-callback config validate config/callback.json
    """
    try:
        config_obj = load_config(config_file)
    except ConfigurationError as e:
        click.echo(click.style("✗", fg="red", bold=True) + " Configuration validation failed")
        click.echo(f"\n{e}", err=True)
        raise click.exceptions.Exit(1)

    click.echo(click.style("✓", fg="green", bold=True) + " Configuration is valid")
    click.echo(f"\nConfiguration file: {config_file}")
    click.echo(f"\nServer:")
    click.echo(f"  Host:        {config_obj.host}")
    click.echo(f"  Port:        {config_obj.port}")
    click.echo(f"  Render:      {config_obj.render_callbacks}")
    click.echo(f"\nLogging:")
    click.echo(f"  Level:       {config_obj.log_level}")
    click.echo(f"  Log file:    {config_obj.log_path}")


cli.add_command(config)


@cli.command()
def version() -> None:
    """Display version information."""
    click.echo(f"dsr-callback version {__version__}")


if __name__ == "__main__":
    cli()
