# solatsm/cli/stretch_cmd.py

"""
CLI command for time-scale modification of an audio file.
"""

import logging
from pathlib import Path
from typing import Optional

import click

from solatsm.config.models import SolaConfig
from solatsm.core.audio.io import load_pcm, save_pcm
from solatsm.core.errors import SolaError
from solatsm.core.tsm import SolaEngine
from solatsm.core.validation import validate_tsm_parameters
from solatsm.utils.trace import format_report, save_trace
from solatsm.utils.visualizations import plot_tsm_comparison

logger = logging.getLogger(__name__)


@click.command("stretch")
@click.argument("source", type=click.Path(dir_okay=False, path_type=Path))
@click.argument("destination", type=click.Path(dir_okay=False, path_type=Path))
@click.argument("alpha", type=float)
@click.argument("frame_size", type=int, required=False, default=None)
@click.option("--channel", type=int, default=None,
              help="1-based channel to extract from multi-channel input [default: from config, 1].")
@click.option("--trace", "trace_path", type=click.Path(dir_okay=False, path_type=Path), default=None,
              help="Write the per-frame lag trace to this CSV file.")
@click.option("--plot", "plot_path", type=click.Path(dir_okay=False, path_type=Path), default=None,
              help="Save an input/output waveform comparison image to this file.")
@click.option("--report/--no-report", default=True, show_default=True,
              help="Print the run report when done.")
@click.pass_context
def stretch_cmd(
    ctx,
    source: Path,
    destination: Path,
    alpha: float,
    frame_size: Optional[int],
    channel: Optional[int],
    trace_path: Optional[Path],
    plot_path: Optional[Path],
    report: bool
):
    """
    Time-scale modify SOURCE by ALPHA and write the result to DESTINATION.

    ALPHA is the time-scale factor (output duration / input duration),
    from 0.5 to 2.0. FRAME_SIZE is the size of the overlapping frames,
    from 25 to 1000 (default 160).
    """
    config: SolaConfig = ctx.obj['config']
    if channel is None:
        channel = config.audio.channel

    try:
        alpha, frame_size = validate_tsm_parameters(alpha, frame_size, config.tsm)

        logger.info(f"Reading {source} ...")
        samples, sr = load_pcm(source, channel=channel)

        logger.info("Performing time-scale modification (TSM) ...")
        engine = SolaEngine(frame_size, max_output_samples=config.tsm.max_output_samples)
        result = engine.run(samples, alpha, sample_rate=sr)

        logger.info(f"Writing {destination} ...")
        bytes_written = save_pcm(result.samples, sr, destination, subtype=config.audio.output_subtype)

        if trace_path is not None:
            save_trace(result, trace_path)
        if plot_path is not None:
            plot_tsm_comparison(samples, result.samples, sr, str(plot_path), alpha=alpha)

    except SolaError as e:
        logger.error(f"Time-scale modification failed: {e}")
        raise click.ClickException(str(e))
    except OSError as e:
        # Trace/plot outputs
        raise click.ClickException(f"Problem writing output: {e}")
    except Exception as e:
        logger.error(f"An unexpected error occurred during time-scale modification: {e}", exc_info=True)
        raise click.Abort()

    if report:
        click.echo("SOLA report:")
        click.echo(format_report(result, bytes_read=source.stat().st_size, bytes_written=bytes_written))
    else:
        click.echo(f"Wrote {result.output_length} samples to '{destination}'.")
