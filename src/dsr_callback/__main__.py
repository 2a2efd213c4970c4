"""Entry point for running dsr_callback as a module.

This allows the package to be executed as:
    python -m dsr_callback
"""

from dsr_callback.cli.main import cli

if __name__ == "__main__":
    cli()
