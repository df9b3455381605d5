# solatsm/cli/base_cmd.py

"""
Base setup for CLI commands: configuration loading, logging initialization
and the shared verbosity options.
"""

import logging
import sys

import click

from solatsm.config import load_configuration, SolaConfig
from solatsm.utils.logging_config import setup_logging

logger = logging.getLogger(__name__)


class ConfigGroup(click.Group):
    """
    A custom Click Group that loads configuration and sets up logging before
    invoking the group or its subcommands. The configuration is passed via
    the context object (ctx.obj['config']); a config already present there
    (e.g. supplied by a test) is reused.
    """
    def invoke(self, ctx: click.Context):
        if ctx.obj is None:
            ctx.obj = {}

        setup_success = False
        try:
            # --- Setup Phase ---
            if 'config' not in ctx.obj:
                ctx.obj['config'] = load_configuration()
            config: SolaConfig = ctx.obj['config']

            verbosity = 0
            if ctx.params.get('quiet', False):
                verbosity = -1
            elif ctx.params.get('verbose', 0) > 0:
                verbosity = ctx.params['verbose']
            setup_logging(config, verbosity)
            logger.debug("Logging setup complete in ConfigGroup.")

            setup_success = True

            # --- Command Execution Phase ---
            return super().invoke(ctx)

        except click.exceptions.Exit:
            raise
        except Exception as e:
            if not setup_success:
                error_logger = logging.getLogger("solatsm.error")
                error_logger.critical(f"Critical error during CLI setup: {repr(e)}", exc_info=True)
                # Logging might not be set up yet
                print(f"CRITICAL SETUP ERROR: {repr(e)}", file=sys.stderr)
                ctx.exit(1)
            raise


# --- Common CLI Options ---
verbose_option = click.option(
    '-v', '--verbose',
    count=True,
    help="Increase verbosity level (-v for INFO, -vv for DEBUG)."
)
quiet_option = click.option(
    '-q', '--quiet',
    is_flag=True,
    default=False,
    help="Suppress all console output except critical errors."
)
