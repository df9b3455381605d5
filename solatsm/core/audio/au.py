# solatsm/core/audio/au.py

"""
Sun/NeXT .au container with 8-bit mu-law payload.

On-disk layout (all fields unsigned 32-bit, big-endian, 32 bytes total):

    offset  field
    0       magic          0x2e736e64 (".snd")
    4       data_offset    byte offset of the sample data
    8       data_size      bytes of sample data (0xffffffff: until EOF)
    12      encoding       1 = 8-bit mu-law (the only one supported)
    16      sample_rate    samples per second
    20      channels       interleaved channel count
    24      info           annotation word
    28      reserved

The header is always (de)serialized with an explicit big-endian struct
format, so host byte order never matters.
"""

import io
import logging
import struct
from pathlib import Path
from typing import BinaryIO, Tuple, Union

import numpy as np
from numpy.typing import NDArray

from ..errors import IOFailure, MalformedInput
from ..signal import as_pcm16
from .ulaw import linear_to_ulaw, ulaw_to_linear

logger = logging.getLogger(__name__)

AU_MAGIC = 0x2E736E64
AU_ENCODING_ULAW8 = 1
AU_UNKNOWN_SIZE = 0xFFFFFFFF
AU_HEADER_FORMAT = ">8I"
AU_HEADER_SIZE = struct.calcsize(AU_HEADER_FORMAT)  # 32

# Smallest header the .au format allows; data may start after it.
_AU_MIN_DATA_OFFSET = 24

PathOrStream = Union[str, Path, BinaryIO]


class AuHeader:
    """Decoded .au header fields."""

    FIELDS = ("magic", "data_offset", "data_size", "encoding",
              "sample_rate", "channels", "info", "reserved")

    def __init__(
        self,
        sample_rate: int,
        data_size: int,
        channels: int = 1,
        encoding: int = AU_ENCODING_ULAW8,
        data_offset: int = AU_HEADER_SIZE,
        info: int = 0,
        reserved: int = 0,
        magic: int = AU_MAGIC
    ):
        self.magic = magic
        self.data_offset = data_offset
        self.data_size = data_size
        self.encoding = encoding
        self.sample_rate = sample_rate
        self.channels = channels
        self.info = info
        self.reserved = reserved

    def pack(self) -> bytes:
        """Serializes the header to its 32-byte big-endian form."""
        try:
            return struct.pack(AU_HEADER_FORMAT, *(getattr(self, f) for f in self.FIELDS))
        except struct.error as e:
            raise MalformedInput(f"Header field out of range for .au: {e}") from e

    @classmethod
    def unpack(cls, raw: bytes) -> "AuHeader":
        """
        Parses and validates a 32-byte header.

        Raises:
            MalformedInput: On short input, wrong magic, unsupported encoding,
                            zero channels or a data offset inside the header.
        """
        if len(raw) < AU_HEADER_SIZE:
            raise MalformedInput(f"Truncated .au header: {len(raw)} of {AU_HEADER_SIZE} bytes.")
        values = dict(zip(cls.FIELDS, struct.unpack(AU_HEADER_FORMAT, raw[:AU_HEADER_SIZE])))
        header = cls(**values)
        if header.magic != AU_MAGIC:
            raise MalformedInput(f"Not an .au file: bad magic number 0x{header.magic:08x}.")
        if header.encoding != AU_ENCODING_ULAW8:
            raise MalformedInput(f"Unsupported .au encoding {header.encoding}; only 8-bit mu-law (1) is supported.")
        if header.channels < 1:
            raise MalformedInput("The .au header declares zero channels.")
        if header.data_offset < _AU_MIN_DATA_OFFSET:
            raise MalformedInput(f"Invalid .au data offset {header.data_offset}.")
        return header

    def to_dict(self) -> dict:
        return {f: getattr(self, f) for f in self.FIELDS}

    def __repr__(self) -> str:
        fields = ", ".join(f"{k}={v}" for k, v in self.to_dict().items())
        return f"AuHeader({fields})"


def _read_exactly(stream: BinaryIO, size: int) -> bytes:
    try:
        return stream.read(size)
    except OSError as e:
        raise IOFailure(f"Read failed: {e}") from e


def _open_for_reading(path: Union[str, Path]) -> BinaryIO:
    try:
        return open(path, "rb")
    except OSError as e:
        raise IOFailure(f"Can't open {path}: {e}") from e


def _read_header(stream: BinaryIO) -> AuHeader:
    return AuHeader.unpack(_read_exactly(stream, AU_HEADER_SIZE))


def read_au_header(source: PathOrStream) -> AuHeader:
    """Reads and validates only the header of an .au file or stream."""
    if isinstance(source, (str, Path)):
        with _open_for_reading(source) as f:
            return _read_header(f)
    return _read_header(source)


def _read_au_stream(stream: BinaryIO, channel: int) -> Tuple[NDArray[np.int16], int]:
    raw = _read_exactly(stream, AU_HEADER_SIZE)
    header = AuHeader.unpack(raw)
    if not 1 <= channel <= header.channels:
        raise MalformedInput(
            f"Channel {channel} requested but the file has {header.channels} channel(s)."
        )

    # Data may start inside the 32-byte block (24-byte headers) or after an annotation.
    gap = header.data_offset - AU_HEADER_SIZE
    leading = raw[header.data_offset:]
    if gap > 0 and len(_read_exactly(stream, gap)) < gap:
        raise MalformedInput(f"Truncated .au file: data offset {header.data_offset} beyond end of file.")

    if header.data_size == AU_UNKNOWN_SIZE:
        payload = leading + _read_exactly(stream, -1)
    else:
        payload = leading[:header.data_size]
        payload += _read_exactly(stream, header.data_size - len(payload))
        if len(payload) < header.data_size:
            raise MalformedInput(
                f"Truncated .au data: expected {header.data_size} bytes, got {len(payload)}."
            )

    codes = np.frombuffer(payload, dtype=np.uint8)
    frames = codes.size // header.channels
    codes = codes[:frames * header.channels].reshape(frames, header.channels)[:, channel - 1]
    logger.debug(f"Decoded {frames} mu-law frames (channel {channel}/{header.channels}, "
                 f"sr={header.sample_rate}).")
    return ulaw_to_linear(codes), header.sample_rate


def read_au(source: PathOrStream, channel: int = 1) -> Tuple[NDArray[np.int16], int]:
    """
    Reads one channel of a mu-law .au file as 16-bit linear PCM.

    The header is validated before any sample data is read or decoded.

    Args:
        source: File path or binary stream positioned at the header.
        channel: 1-based channel to extract from interleaved data.

    Returns:
        A tuple (samples, sample_rate) with int16 samples.

    Raises:
        MalformedInput: Invalid header, wrong encoding, bad channel or
                        truncated data.
        IOFailure: The file cannot be opened or read.
    """
    if isinstance(source, (str, Path)):
        logger.info(f"Reading .au file: {source} (channel={channel})")
        with _open_for_reading(source) as f:
            return _read_au_stream(f, channel)
    return _read_au_stream(source, channel)


def encode_au(samples, sample_rate: int) -> bytes:
    """Returns a complete mono mu-law .au image of the given samples."""
    pcm = as_pcm16(samples)
    header = AuHeader(sample_rate=sample_rate, data_size=pcm.size)
    return header.pack() + linear_to_ulaw(pcm).tobytes()


def write_au(destination: PathOrStream, samples, sample_rate: int) -> int:
    """
    Writes samples as a mono 8-bit mu-law .au file.

    Args:
        destination: File path or writable binary stream.
        samples: int16 samples.
        sample_rate: Samples per second.

    Returns:
        Number of bytes written (header included).

    Raises:
        IOFailure: The destination cannot be opened or written.
    """
    image = encode_au(samples, sample_rate)
    try:
        if isinstance(destination, (str, Path)):
            logger.info(f"Writing .au file: {destination} ({len(image) - AU_HEADER_SIZE} samples, sr={sample_rate})")
            with open(destination, "wb") as f:
                f.write(image)
        else:
            destination.write(image)
    except OSError as e:
        raise IOFailure(f"Problem writing the file {destination}: {e}") from e
    return len(image)


def decode_au(image: bytes, channel: int = 1) -> Tuple[NDArray[np.int16], int]:
    """Decodes an in-memory .au image (see read_au)."""
    return _read_au_stream(io.BytesIO(image), channel)
