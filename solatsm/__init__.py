# solatsm/__init__.py

"""
solatsm: Time-Scale Modification of 16-bit PCM audio using the
Synchronized Overlap-Add (SOLA) method.
"""

from solatsm.version import __version__
from solatsm.core.tsm import SolaEngine, TsmResult, time_scale_modify

__all__ = [
    "__version__",
    "SolaEngine",
    "TsmResult",
    "time_scale_modify",
]
