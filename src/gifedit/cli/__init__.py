"""CLI module for gifedit commands.

This module re-exports all command functions so the entry point can
register them while each command lives in its own module.
"""

import click

from .. import __version__
from ..io import setup_logging
from .assemble_cmd import assemble
from .edit_cmd import edit
from .info_cmd import info


@click.group()
@click.version_option(version=__version__, prog_name="gifedit")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    show_default=True,
    help="Logging verbosity",
)
def main(log_level: str) -> None:
    """🎞️ gifedit: edit and assemble animated GIFs."""
    setup_logging(log_level)


main.add_command(info)
main.add_command(assemble)
main.add_command(edit)

__all__ = [
    "assemble",
    "edit",
    "info",
    "main",
]
