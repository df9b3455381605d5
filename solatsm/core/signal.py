# solatsm/core/signal.py

"""
PCM signal containers used by the SOLA engine.

InputSignal wraps the read-only source samples. OutputBuffer is the single
pre-allocated synthesis buffer: it tracks how many leading samples are
validly synthesized and refuses any read past that point or any write past
its capacity. All window accesses go through these classes so that a lag can
never address samples outside the logically valid part of either buffer.
"""

import logging
from typing import Optional

import numpy as np
from numpy.typing import NDArray

from .errors import CapacityExceeded, ResourceExhausted, WindowOutOfBounds

logger = logging.getLogger(__name__)

PCM_DTYPE = np.int16


def as_pcm16(samples) -> NDArray[np.int16]:
    """
    Converts array-like samples to a 1D int16 array.

    Integer input outside the int16 range and float input are rejected
    rather than silently wrapped.

    Raises:
        ValueError: If the samples are not 1D or not representable as int16.
    """
    arr = np.asarray(samples)
    if arr.ndim != 1:
        raise ValueError(f"PCM samples must be 1D, got shape {arr.shape}.")
    if arr.dtype == PCM_DTYPE:
        return arr
    if not np.issubdtype(arr.dtype, np.integer):
        raise ValueError(f"PCM samples must be integers, got dtype {arr.dtype}.")
    if arr.size and (arr.min() < np.iinfo(PCM_DTYPE).min or arr.max() > np.iinfo(PCM_DTYPE).max):
        raise ValueError("PCM samples exceed the 16-bit signed range.")
    return arr.astype(PCM_DTYPE)


class InputSignal:
    """Immutable 16-bit PCM signal."""

    def __init__(self, samples, sample_rate: Optional[int] = None):
        data = np.array(as_pcm16(samples), dtype=PCM_DTYPE, copy=True)
        data.setflags(write=False)
        self._samples = data
        self.sample_rate = sample_rate

    def __len__(self) -> int:
        return self._samples.size

    @property
    def samples(self) -> NDArray[np.int16]:
        return self._samples

    def window(self, start: int, length: int) -> NDArray[np.int16]:
        """Returns a read-only view of samples [start, start + length)."""
        if start < 0 or length < 0 or start + length > self._samples.size:
            raise WindowOutOfBounds(
                f"Input window [{start}, {start + length}) outside [0, {self._samples.size})."
            )
        return self._samples[start:start + length]


class OutputBuffer:
    """
    Fixed-capacity synthesis buffer.

    Attributes:
        capacity: Number of samples allocated; never changes.
        valid_length: Number of leading samples known to be correctly
                      synthesized (the last valid sample index + 1).
    """

    def __init__(self, capacity: int):
        if capacity <= 0:
            raise ValueError(f"Output capacity must be positive, got {capacity}.")
        try:
            self._samples = np.zeros(capacity, dtype=PCM_DTYPE)
        except MemoryError as e:
            logger.error(f"Failed to allocate output buffer of {capacity} samples: {e}")
            raise ResourceExhausted(f"Cannot allocate output buffer of {capacity} samples.") from e
        self.capacity = capacity
        self._valid_length = 0

    @property
    def valid_length(self) -> int:
        return self._valid_length

    @valid_length.setter
    def valid_length(self, value: int):
        if value < 0 or value > self.capacity:
            raise CapacityExceeded(
                f"Valid length {value} outside output capacity {self.capacity}."
            )
        self._valid_length = value

    def window(self, start: int, length: int) -> NDArray[np.int16]:
        """Returns a view of validly synthesized samples [start, start + length)."""
        if start < 0 or length < 0 or start + length > self._valid_length:
            raise WindowOutOfBounds(
                f"Output window [{start}, {start + length}) outside valid region [0, {self._valid_length})."
            )
        return self._samples[start:start + length]

    def write(self, start: int, values: NDArray) -> None:
        """Overwrites samples [start, start + len(values)) in place."""
        end = start + len(values)
        if start < 0:
            raise WindowOutOfBounds(f"Output write starts before the buffer ({start}).")
        if end > self.capacity:
            raise CapacityExceeded(
                f"Output write [{start}, {end}) exceeds capacity {self.capacity}."
            )
        self._samples[start:end] = values

    def to_array(self) -> NDArray[np.int16]:
        """Returns a copy of the valid part of the buffer."""
        return self._samples[:self._valid_length].copy()
