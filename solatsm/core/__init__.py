# solatsm/core/__init__.py

"""
Core Processing Package for solatsm.

Contains modules for:
- PCM signal containers with bounds-checked windows
- SOLA time-scale modification (tsm subpackage)
- Parameter validation
- Audio codecs and file I/O (audio subpackage)
- The error hierarchy
"""

from . import errors
from . import signal
from . import tsm
from . import validation
from . import audio

__all__ = [
    "errors",
    "signal",
    "tsm",
    "validation",
    "audio",
]
