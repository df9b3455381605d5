# solatsm/cli/main.py

"""
Main entry point for the solatsm CLI application.
Uses Click for command-line interface handling.
"""

import logging

import click

from solatsm.version import __version__
from solatsm.config import SolaConfig
from .base_cmd import ConfigGroup, verbose_option, quiet_option
from .stretch_cmd import stretch_cmd
from .info_cmd import info_cmd

logger = logging.getLogger(__name__)

CONTEXT_SETTINGS = dict(help_option_names=['-h', '--help'])


# --- Main CLI Group ---
@click.group(context_settings=CONTEXT_SETTINGS, cls=ConfigGroup)
@click.version_option(__version__, '-V', '--version', package_name='solatsm', prog_name='solatsm')
@verbose_option
@quiet_option
@click.pass_context
def main_cli(ctx, verbose: int, quiet: bool):
    """
    solatsm: time-scale modification of audio using
    Synchronized Overlap-Add (SOLA).

    Configuration is loaded from:
    Defaults -> ./solatsm.toml -> ~/.config/solatsm/solatsm.toml -> Env Vars

    Use -v for verbose output, -vv for debug output, -q for quiet mode.
    """
    config: SolaConfig = ctx.obj['config']
    logger.debug(f"solatsm CLI group invoked. Frame size bounds: "
                 f"[{config.tsm.min_frame_size}, {config.tsm.max_frame_size}]")


# --- Register Commands ---
main_cli.add_command(stretch_cmd)
main_cli.add_command(info_cmd)

cli = main_cli

if __name__ == "__main__":
    cli()
