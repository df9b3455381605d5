# solatsm/utils/visualizations.py

"""
Waveform plots of a time-scale modification run using Matplotlib.
"""

import logging
from typing import Optional

import matplotlib
matplotlib.use("Agg") # File output only; no display needed
import matplotlib.pyplot as plt
import numpy as np
from numpy.typing import NDArray

logger = logging.getLogger(__name__)

# Define a small epsilon for constant-signal axis margins
_EPSILON = np.finfo(np.float64).eps


def plot_tsm_comparison(
    original: NDArray[np.int16],
    modified: NDArray[np.int16],
    sr: float,
    output_file: str,
    alpha: Optional[float] = None,
    max_seconds: Optional[float] = None,
    title: str = "SOLA time-scale modification"
):
    """
    Saves a two-panel figure: input waveform above, modified waveform below,
    sharing one time axis so the change in duration is visible.

    Args:
        original: Input int16 signal.
        modified: Output int16 signal.
        sr: Sampling rate (Hz).
        output_file: Path to save the image (e.g., 'comparison.png').
        alpha: Time-scale factor, shown in the title if given.
        max_seconds: If set, only plot the first `max_seconds` of each signal.
        title: Figure title.

    Raises:
        ValueError: If either signal is not 1D or sr is not positive.
    """
    if original.ndim != 1 or modified.ndim != 1:
        raise ValueError("Input signals must be 1D.")
    if sr <= 0:
        raise ValueError("Sampling rate must be positive.")
    if original.size == 0 or modified.size == 0:
        logger.warning(f"Empty signal. Skipping comparison plot for {output_file}.")
        return

    limit = int(max_seconds * sr) if max_seconds else None
    signals = [("Input", original[:limit]), ("Output", modified[:limit])]

    fig = None
    try:
        logger.info(f"Generating comparison plot: sr={sr}, output={output_file}")
        fig, axes = plt.subplots(2, 1, figsize=(12, 6), sharex=True)
        peak = max(np.max(np.abs(s.astype(np.float64))) for _, s in signals)
        margin = peak * 0.1 + _EPSILON
        for ax, (label, data) in zip(axes, signals):
            time_axis = np.arange(data.size) / sr
            ax.plot(time_axis, data, linewidth=0.6)
            ax.set_ylabel(f"{label}\nAmplitude")
            ax.set_ylim(-peak - margin, peak + margin)
            ax.grid(True, alpha=0.5)
        axes[-1].set_xlabel("Time (seconds)")
        fig.suptitle(f"{title} (alpha={alpha})" if alpha is not None else title)
        fig.tight_layout()

        fig.savefig(output_file, dpi=150, bbox_inches="tight")
        logger.info(f"Comparison plot saved to {output_file}")
    finally:
        if fig is not None:
            plt.close(fig)
