# solatsm/core/tsm/__init__.py

"""
Synchronized Overlap-Add (SOLA) time-scale modification.

Components, leaves first:
- intervals: analysis/synthesis interframe intervals from alpha and N.
- correlation: normalized cross-correlation of two sample windows.
- lag: bounded search for the best-aligned synthesis lag of a frame.
- blend: crossfade of a frame into the output buffer.
- engine: the frame loop tying them together.
"""

from .intervals import compute_intervals
from .correlation import cross_correlation
from .lag import find_lag, initial_lag
from .blend import crossfade, overlap_frame
from .engine import (
    DEFAULT_FRAME_SIZE,
    SolaEngine,
    TsmResult,
    output_capacity,
    time_scale_modify,
)

__all__ = [
    "compute_intervals",
    "cross_correlation",
    "find_lag",
    "initial_lag",
    "crossfade",
    "overlap_frame",
    "DEFAULT_FRAME_SIZE",
    "SolaEngine",
    "TsmResult",
    "output_capacity",
    "time_scale_modify",
]
