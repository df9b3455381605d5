# solatsm/core/audio/__init__.py

"""
Core Audio Package.

Contains the mu-law codec, the Sun .au container codec and the format
dispatching loader/saver used around the SOLA engine.
"""

from . import ulaw
from . import au
from . import io

__all__ = [
    "ulaw",
    "au",
    "io",
]
