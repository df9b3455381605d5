# solatsm/core/tsm/correlation.py

"""
Normalized cross-correlation between two equal-length sample windows.
"""

import numpy as np
from numpy.typing import NDArray


def cross_correlation(x: NDArray, y: NDArray) -> float:
    """
    Computes sum(x*y) / sqrt(sum(x^2) * sum(y^2)).

    Sums are accumulated in float64: products of 16-bit samples reach 2^30
    and windows hold up to ~1000 of them, which stays exact in a double.

    Args:
        x: First window (int16 or any numeric dtype).
        y: Second window, same length as x.

    Returns:
        The score in [-1, 1], or 0.0 when either window is silent.

    Raises:
        ValueError: If the windows differ in length.
    """
    if len(x) != len(y):
        raise ValueError(f"Correlation windows differ in length: {len(x)} != {len(y)}.")
    xf = np.asarray(x, dtype=np.float64)
    yf = np.asarray(y, dtype=np.float64)

    denom = np.sqrt(np.dot(xf, xf) * np.dot(yf, yf))
    if denom == 0.0:
        return 0.0
    return float(np.dot(xf, yf) / denom)
