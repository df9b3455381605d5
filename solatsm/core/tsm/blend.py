# solatsm/core/tsm/blend.py

"""
Frame blending: writes an analysis frame into the output buffer at its
synchronized position, crossfading it against the existing tail.
"""

import numpy as np

from ..signal import InputSignal, OutputBuffer


def overlap_length(y: OutputBuffer, position: int, frame_size: int) -> int:
    """Number of samples of y already valid from `position`, capped at N."""
    return min(frame_size, y.valid_length - position)


def crossfade(old: np.ndarray, new: np.ndarray) -> np.ndarray:
    """
    Linear crossfade from `old` to `new` over len(old) samples.

    Sample j becomes (1 - j/L) * old[j] + (j/L) * new[j], evaluated exactly
    in integers and truncated toward zero, so identical inputs come back
    unchanged.
    """
    length = len(old)
    if length == 0:
        return np.empty(0, dtype=np.int16)
    j = np.arange(length, dtype=np.int64)
    num = old.astype(np.int64) * (length - j) + new.astype(np.int64) * j
    blended = np.sign(num) * (np.abs(num) // length)
    return blended.astype(np.int16)


def overlap_frame(
    x: InputSignal,
    y: OutputBuffer,
    sa: int,
    ss: int,
    m: int,
    lag: int,
    frame_size: int
) -> int:
    """
    Writes frame m into y over [m*Ss + lag, m*Ss + lag + N).

    The first Lm samples (those already valid in y) are crossfaded; the
    remaining N - Lm samples, present only near the end of the synthesized
    output, are copied straight from x.

    Returns:
        Lm, the number of crossfaded samples.

    Raises:
        CapacityExceeded: If the frame would not fit in the output buffer.
    """
    position = m * ss + lag
    reference = m * sa
    lm = overlap_length(y, position, frame_size)

    frame = np.empty(frame_size, dtype=np.int16)
    frame[:lm] = crossfade(y.window(position, lm), x.window(reference, lm))
    frame[lm:] = x.window(reference + lm, frame_size - lm)
    y.write(position, frame)
    return lm
