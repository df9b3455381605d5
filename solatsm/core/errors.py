# solatsm/core/errors.py

"""
Exception hierarchy for solatsm.

Every failure raised by the core engine, the audio codecs and the parameter
validation derives from SolaError. Each class also derives from the closest
built-in exception so callers that only know about ValueError, OSError, etc.
keep working.
"""


class SolaError(Exception):
    """Base class for all solatsm errors."""


class InvalidConfiguration(SolaError, ValueError):
    """Time-scale factor or frame size outside the allowed range."""


class InsufficientData(SolaError, ValueError):
    """Input signal is shorter than the configured frame size."""


class ResourceExhausted(SolaError, MemoryError):
    """The output buffer could not be allocated."""


class CapacityExceeded(ResourceExhausted):
    """A write would land outside the pre-allocated output buffer."""


class MalformedInput(SolaError, ValueError):
    """Container header or payload is invalid, unsupported or truncated."""


class IOFailure(SolaError, OSError):
    """Reading from or writing to a file or stream failed."""


class WindowOutOfBounds(SolaError, IndexError):
    """A sample window reaches outside the valid region of a signal."""
