# solatsm/core/audio/ulaw.py

"""
G.711 mu-law companding between 8-bit codes and 16-bit linear PCM.

Encoder after Craig Reese (IDA/Supercomputing Research Center) and
Joe Campbell (Department of Defense), 1989, without the optional CCITT
zero trap. Both directions are vectorized table lookups with no state
carried between samples.
"""

import numpy as np
from numpy.typing import NDArray

BIAS = 0x84
CLIP = 32635

# Segment base values of the decoder, indexed by exponent.
_DECODE_EXP_LUT = np.array([0, 132, 396, 924, 1980, 4092, 8316, 16764], dtype=np.int32)

# Exponent of a biased magnitude, indexed by (magnitude >> 7) & 0xFF.
_ENCODE_EXP_LUT = np.repeat(
    np.arange(8, dtype=np.int32),
    [2, 2, 4, 8, 16, 32, 64, 128]
)


def _build_decode_table() -> NDArray[np.int16]:
    codes = ~np.arange(256, dtype=np.int32) & 0xFF
    sign = codes & 0x80
    exponent = (codes >> 4) & 0x07
    mantissa = codes & 0x0F
    magnitude = _DECODE_EXP_LUT[exponent] + (mantissa << (exponent + 3))
    return np.where(sign != 0, -magnitude, magnitude).astype(np.int16)


_DECODE_TABLE = _build_decode_table()


def ulaw_to_linear(codes) -> NDArray[np.int16]:
    """
    Expands mu-law codes to 16-bit linear samples.

    Args:
        codes: uint8 array-like (or bytes) of mu-law codes.

    Returns:
        int16 array of the same length.
    """
    if isinstance(codes, (bytes, bytearray, memoryview)):
        codes = np.frombuffer(codes, dtype=np.uint8)
    codes = np.asarray(codes, dtype=np.uint8)
    return _DECODE_TABLE[codes]


def linear_to_ulaw(samples) -> NDArray[np.uint8]:
    """
    Compresses 16-bit linear samples to mu-law codes.

    Magnitudes above CLIP saturate, including -32768.

    Args:
        samples: int16 array-like.

    Returns:
        uint8 array of mu-law codes.
    """
    pcm = np.asarray(samples).astype(np.int32)
    sign = (pcm >> 8) & 0x80
    magnitude = np.minimum(np.abs(pcm), CLIP) + BIAS
    exponent = _ENCODE_EXP_LUT[(magnitude >> 7) & 0xFF]
    mantissa = (magnitude >> (exponent + 3)) & 0x0F
    return (~(sign | (exponent << 4) | mantissa) & 0xFF).astype(np.uint8)
