# solatsm/core/tsm/engine.py

"""
SOLA time-scale modification engine.

Drives the frame loop: the first frame is copied as-is, then every following
analysis frame is aligned against the synthesized output (lag search) and
crossfaded into it (frame blending). All run state (frame size, intervals,
output buffer and its valid length) lives in objects created per run, so one
engine may be reused or shared between threads.
"""

import logging
from typing import Any, Dict, List, Optional

import numpy as np
from numpy.typing import NDArray

from ..errors import InsufficientData, InvalidConfiguration, ResourceExhausted
from ..signal import InputSignal, OutputBuffer
from .blend import overlap_frame
from .intervals import compute_intervals
from .lag import find_lag

logger = logging.getLogger(__name__)

DEFAULT_FRAME_SIZE = 160


def output_capacity(input_length: int, alpha: float, frame_size: int) -> int:
    """Upper bound on the synthesized length: floor(len * alpha) + N."""
    return int(input_length * alpha) + frame_size


class TsmResult:
    """
    Outcome of one SOLA run.

    Attributes:
        samples: Synthesized int16 samples (length = final valid length).
        sample_rate: Sample rate carried over from the input, if known.
        alpha: Time-scale factor used.
        frame_size: Frame size N used.
        analysis_interval: Sa.
        synthesis_interval: Ss.
        capacity: Size of the pre-allocated output buffer.
        frames: One record per processed frame (frame, lag, score, overlap,
                valid_length); frame 0 is the direct copy.
    """

    def __init__(
        self,
        samples: NDArray[np.int16],
        sample_rate: Optional[int],
        alpha: float,
        frame_size: int,
        analysis_interval: int,
        synthesis_interval: int,
        capacity: int,
        frames: List[Dict[str, Any]]
    ):
        self.samples = samples
        self.sample_rate = sample_rate
        self.alpha = alpha
        self.frame_size = frame_size
        self.analysis_interval = analysis_interval
        self.synthesis_interval = synthesis_interval
        self.capacity = capacity
        self.frames = frames

    @property
    def output_length(self) -> int:
        return int(self.samples.size)

    @property
    def lags(self) -> List[int]:
        return [record["lag"] for record in self.frames[1:]]

    def __repr__(self) -> str:
        return (f"TsmResult(alpha={self.alpha}, frame_size={self.frame_size}, "
                f"sa={self.analysis_interval}, ss={self.synthesis_interval}, "
                f"frames={len(self.frames)}, output_length={self.output_length})")


class SolaEngine:
    """
    Synchronized Overlap-Add time-scale modification.

    Args:
        frame_size: Frame size N in samples (must be positive).
        max_output_samples: Optional ceiling on the output buffer capacity.
                            A run needing more raises ResourceExhausted
                            before anything is allocated.
    """

    def __init__(self, frame_size: int = DEFAULT_FRAME_SIZE, max_output_samples: Optional[int] = None):
        if frame_size <= 0:
            raise InvalidConfiguration(f"Frame size must be positive, got {frame_size}.")
        self.frame_size = int(frame_size)
        self.max_output_samples = max_output_samples

    def run(self, x, alpha: float, sample_rate: Optional[int] = None) -> TsmResult:
        """
        Time-scale modifies x by alpha.

        Args:
            x: Input samples (int16 array-like) or an InputSignal.
            alpha: Time-scale factor; > 1 stretches, < 1 compresses.
            sample_rate: Optional sample rate attached to the result.

        Returns:
            TsmResult holding the synthesized signal and the per-frame trace.

        Raises:
            InvalidConfiguration: If alpha is not positive.
            InsufficientData: If x is shorter than the frame size.
            ResourceExhausted: If the output buffer cannot be allocated or
                               exceeds max_output_samples.
        """
        n = self.frame_size
        if not alpha > 0:
            raise InvalidConfiguration(f"Time-scale factor must be positive, got {alpha}.")

        signal = x if isinstance(x, InputSignal) else InputSignal(x, sample_rate)
        if sample_rate is None:
            sample_rate = signal.sample_rate

        if len(signal) < n:
            logger.error(f"Input has {len(signal)} samples, fewer than the frame size {n}.")
            raise InsufficientData(
                f"The size of the original signal ({len(signal)}) is smaller than <framesize = {n}>."
            )

        sa, ss = compute_intervals(alpha, n)
        if sa == 0:
            logger.error(f"Analysis interval is zero for N={n}, alpha={alpha}.")
            raise InvalidConfiguration(f"Frame size {n} is too small for alpha={alpha}.")
        capacity = output_capacity(len(signal), alpha, n)
        if self.max_output_samples is not None and capacity > self.max_output_samples:
            logger.error(f"Output capacity {capacity} exceeds the limit of {self.max_output_samples} samples.")
            raise ResourceExhausted(
                f"Output of {capacity} samples exceeds the limit of {self.max_output_samples}."
            )
        y = OutputBuffer(capacity)

        max_frames = (len(signal) - n) // sa
        logger.info(f"SOLA: alpha={alpha}, N={n}, Sa={sa}, Ss={ss}, "
                    f"input={len(signal)} samples, frames={max_frames + 1}, capacity={capacity}")

        y.write(0, signal.window(0, n))
        y.valid_length = n
        frames: List[Dict[str, Any]] = [
            {"frame": 0, "lag": 0, "score": None, "overlap": 0, "valid_length": n}
        ]

        for m in range(1, max_frames + 1):
            lag, score = find_lag(signal, y, sa, ss, m, n)
            overlap = overlap_frame(signal, y, sa, ss, m, lag, n)
            y.valid_length = m * ss + lag + n
            frames.append({
                "frame": m,
                "lag": lag,
                "score": score,
                "overlap": overlap,
                "valid_length": y.valid_length,
            })

        logger.info(f"SOLA done: output={y.valid_length} samples "
                    f"({y.valid_length / len(signal):.3f}x input).")
        return TsmResult(
            samples=y.to_array(),
            sample_rate=sample_rate,
            alpha=alpha,
            frame_size=n,
            analysis_interval=sa,
            synthesis_interval=ss,
            capacity=capacity,
            frames=frames,
        )


def time_scale_modify(
    x,
    alpha: float,
    frame_size: int = DEFAULT_FRAME_SIZE,
    max_output_samples: Optional[int] = None
) -> NDArray[np.int16]:
    """
    Convenience wrapper returning only the synthesized samples.

    See SolaEngine.run for arguments and errors.
    """
    return SolaEngine(frame_size, max_output_samples).run(x, alpha).samples
