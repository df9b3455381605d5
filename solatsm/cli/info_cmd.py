# solatsm/cli/info_cmd.py

"""
CLI command for inspecting an audio file's container details.
"""

import logging
from pathlib import Path

import click
from tabulate import tabulate

from solatsm.core.audio.io import describe_audio
from solatsm.core.errors import SolaError

logger = logging.getLogger(__name__)


@click.command("info")
@click.argument("file", type=click.Path(dir_okay=False, path_type=Path))
def info_cmd(file: Path):
    """Show format, sample rate, channels and duration of FILE."""
    try:
        details = describe_audio(file)
    except SolaError as e:
        raise click.ClickException(str(e))

    rows = [(key, f"{value:.3f}" if isinstance(value, float) else value) for key, value in details.items()]
    click.echo(tabulate(rows, headers=["Property", "Value"]))
