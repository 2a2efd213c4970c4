"""CLI command for inspecting a saved callback envelope offline."""

import json
import sys
from pathlib import Path

import click

from ..callback_server.rendering import CallbackRenderer
from ..soap.dispatcher import dispatch
from ..soap.envelope import parse_envelope_strict
from ..utils.exceptions import EnvelopeParseError


@click.command(name="inspect")
@click.argument("envelope_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--json",
    "output_json",
    is_flag=True,
    help="Output the normalized record as JSON"
)
def inspect_envelope(envelope_file: Path, output_json: bool):
    """Classify a saved SOAP envelope and show the acknowledgement.

    Runs the same parsing and dispatch as the server, without HTTP.

    Example:

        dsr-callback inspect captured/notify-updated.xml
    """
    try:
        envelope = parse_envelope_strict(envelope_file.read_bytes())
    except EnvelopeParseError as e:
        click.echo(click.style("✗", fg="red", bold=True) + f" Invalid SOAP: {e}", err=True)
        sys.exit(1)

    if output_json:
        result = dispatch(envelope)
        record = None
        if result.status is not None:
            record = result.status.to_dict()
        elif result.event is not None:
            record = result.event.to_dict()
        click.echo(json.dumps({
            "operation": result.kind.value,
            "record": record,
            "response": result.response_xml,
        }, indent=2))
        return

    result = dispatch(envelope, sink=CallbackRenderer(echo=click.echo))
    click.echo("Acknowledgement:")
    click.echo(result.response_xml)
