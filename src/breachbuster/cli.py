"""
BreachBuster CLI - Main entry point for the command-line interface.
"""

import logging

import click
from rich.console import Console

from breachbuster import __version__

console = Console()

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


@click.group()
@click.version_option(version=__version__, prog_name="breachbuster")
@click.option("--log-level", envvar="BREACHBUSTER_LOG_LEVEL", default="WARNING",
              type=click.Choice(LOG_LEVELS, case_sensitive=False), help="Logging verbosity")
@click.pass_context
def main(ctx: click.Context, log_level: str) -> None:
    """BreachBuster - Password Security Utilities

    Check passwords against known data breaches without revealing them,
    analyze their strength and generate new ones.
    """
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx.ensure_object(dict)
    ctx.obj["console"] = console


# Import and register subcommand groups
from breachbuster.pwned.cli import pwned
from breachbuster.tools.cli import generate, strength

main.add_command(pwned)
main.add_command(generate)
main.add_command(strength)

# Server commands (added dynamically)
from breachbuster.server.app import add_server_commands
add_server_commands(main)


if __name__ == "__main__":
    main()
