# solatsm/core/tsm/intervals.py

"""
Analysis and synthesis interframe intervals for SOLA.
"""

from typing import Tuple

import numpy as np


def compute_intervals(alpha: float, frame_size: int) -> Tuple[int, int]:
    """
    Derives the analysis (Sa) and synthesis (Ss) intervals from alpha and N.

    Sa stays close to N/2 so consecutive analysis frames overlap by roughly
    half a frame whatever the time-scale factor. Products are evaluated in
    single precision, which keeps factors such as 0.7 from landing one
    sample below the exact decimal result.

    Args:
        alpha: Time-scale factor (output duration / input duration).
        frame_size: Frame size N in samples.

    Returns:
        A tuple (sa, ss):
        - sa: floor(N / (2 * alpha)) when alpha > 1, else floor(N / 2).
        - ss: floor(sa * alpha).
    """
    a = np.float32(alpha)
    if a > 1.0:
        sa = int(np.float32(frame_size) / (np.float32(2.0) * a))
    else:
        sa = frame_size // 2
    ss = int(np.float32(sa) * a)
    return sa, ss
