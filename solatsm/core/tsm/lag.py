# solatsm/core/tsm/lag.py

"""
Lag search: finds the synthesis offset at which a new analysis frame best
lines up with the output synthesized so far.
"""

import logging
from typing import Tuple

from ..signal import InputSignal, OutputBuffer
from .correlation import cross_correlation

logger = logging.getLogger(__name__)

# Best-score sentinel; any scored candidate above it replaces the default lag.
_NO_SCORE = -1.0


def initial_lag(ss: int, m: int, frame_size: int) -> int:
    """First lag examined for frame m (never reaches before the buffer start)."""
    half = frame_size // 2
    return -half if m * ss >= half else -ss


def find_lag(
    x: InputSignal,
    y: OutputBuffer,
    sa: int,
    ss: int,
    m: int,
    frame_size: int
) -> Tuple[int, float]:
    """
    Scans k = k0 .. N//2 for the lag maximizing the normalized
    cross-correlation between x[m*Sa + j] and y[m*Ss + k + j].

    The overlap L starts at N, truncated so the first window ends at the
    current valid length of y, and shrinks by one sample per step of k.
    The scan stops as soon as L < N//8: tiny overlaps correlate spuriously
    well and are excluded outright. Ties keep the earliest lag.

    Args:
        x: Input signal.
        y: Output buffer; only its valid region is read.
        sa: Analysis interval.
        ss: Synthesis interval.
        m: Frame index (>= 1).
        frame_size: Frame size N.

    Returns:
        A tuple (lag, score). If no candidate scored above -1 the lag is 0
        and the score is -1.0.
    """
    k = initial_lag(ss, m, frame_size)
    min_overlap = frame_size // 8
    base = m * ss

    overlap = min(frame_size, y.valid_length - (base + k))

    best_lag, best_score = 0, _NO_SCORE
    reference = m * sa
    while k <= frame_size // 2:
        if overlap < min_overlap or overlap <= 0:
            break
        score = cross_correlation(
            x.window(reference, overlap),
            y.window(base + k, overlap)
        )
        if score > best_score:
            best_lag, best_score = k, score
        k += 1
        overlap -= 1

    logger.debug(f"Frame {m}: lag={best_lag} score={best_score:.4f}")
    return best_lag, best_score
