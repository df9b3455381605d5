# solatsm/core/audio/io.py

"""
Loads and saves 16-bit PCM audio.

Sun .au (mu-law) files go through the built-in container codec; every other
format libsndfile understands (WAV, FLAC, AIFF, ...) goes through soundfile.
Either way the caller gets a flat int16 buffer of a single channel plus the
sample rate, which is all the SOLA engine needs.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import numpy as np
import soundfile as sf
from numpy.typing import NDArray

from ..errors import IOFailure, MalformedInput
from ..signal import as_pcm16
from .au import AU_UNKNOWN_SIZE, read_au, read_au_header, write_au

logger = logging.getLogger(__name__)

AU_EXTENSIONS = {".au", ".snd"}

_available_formats = sf.available_formats()
SUPPORTED_EXTENSIONS = {f".{fmt.lower()}" for fmt in _available_formats} | AU_EXTENSIONS

logger.debug(f"Supported audio extensions: {SUPPORTED_EXTENSIONS}")


def _check_extension(path: Path) -> str:
    ext = path.suffix.lower()
    if ext not in SUPPORTED_EXTENSIONS:
        raise MalformedInput(
            f"Unsupported audio extension: '{ext}'. Supported extensions: {sorted(SUPPORTED_EXTENSIONS)}"
        )
    return ext


def load_pcm(file_path: Path, channel: int = 1) -> Tuple[NDArray[np.int16], int]:
    """
    Loads one channel of an audio file as 16-bit linear PCM.

    Args:
        file_path: Path to the audio file.
        channel: 1-based channel to extract.

    Returns:
        A tuple containing:
        - samples (NDArray[np.int16]): 1D sample buffer.
        - sample_rate (int): Samples per second.

    Raises:
        IOFailure: If the file does not exist or cannot be read.
        MalformedInput: If the container is invalid or unsupported, or the
                        channel does not exist.
    """
    file_path = Path(file_path)
    if not file_path.is_file():
        raise IOFailure(f"Audio input file not found: {file_path}")
    ext = _check_extension(file_path)

    if ext in AU_EXTENSIONS:
        samples, sample_rate = read_au(file_path, channel=channel)
    else:
        logger.info(f"Loading audio from: {file_path} (channel={channel})")
        try:
            data, sample_rate = sf.read(str(file_path), dtype='int16', always_2d=True)
        except RuntimeError as e:
            # soundfile.LibsndfileError derives from RuntimeError
            logger.error(f"Error loading audio file {file_path}: {e}")
            raise MalformedInput(f"Cannot decode {file_path}: {e}") from e
        if not 1 <= channel <= data.shape[1]:
            raise MalformedInput(
                f"Channel {channel} requested but the file has {data.shape[1]} channel(s)."
            )
        samples = np.ascontiguousarray(data[:, channel - 1])

    logger.debug(f"Audio loaded. Samples: {samples.size}, SR: {sample_rate}")
    return samples, int(sample_rate)


def save_pcm(
    samples: NDArray[np.int16],
    sr: int,
    output_path: Path,
    subtype: Optional[str] = 'PCM_16'
) -> int:
    """
    Saves mono 16-bit PCM samples.

    .au/.snd outputs are always 8-bit mu-law; other formats are written by
    soundfile with the given subtype.

    Args:
        samples: 1D int16 samples.
        sr: Sampling rate (Hz).
        output_path: Destination; its extension selects the format.
        subtype: soundfile subtype for non-.au outputs.

    Returns:
        Size of the written file in bytes.

    Raises:
        MalformedInput: Unsupported extension or subtype.
        IOFailure: The file cannot be written.
    """
    output_path = Path(output_path)
    ext = _check_extension(output_path)
    pcm = as_pcm16(samples)
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise IOFailure(f"Cannot create output directory {output_path.parent}: {e}") from e

    if ext in AU_EXTENSIONS:
        return write_au(output_path, pcm, sr)

    logger.info(f"Saving audio to: {output_path} (sr={sr}, subtype={subtype})")
    file_format = ext[1:].upper()
    if subtype and not sf.check_format(file_format, subtype):
        raise MalformedInput(f"Subtype '{subtype}' is not valid for {file_format} files.")
    try:
        sf.write(str(output_path), pcm, sr, subtype=subtype, format=file_format)
    except RuntimeError as e:
        logger.error(f"Error saving audio file {output_path}: {e}")
        raise IOFailure(f"Problem writing the file {output_path}: {e}") from e
    return output_path.stat().st_size


def describe_audio(file_path: Path) -> Dict[str, Any]:
    """
    Summarizes an audio file without decoding its samples.

    Returns:
        Dict with 'format', 'encoding', 'sample_rate', 'channels', 'frames'
        and 'duration' (seconds); .au files also report their raw header fields.

    Raises:
        IOFailure, MalformedInput: As for load_pcm.
    """
    file_path = Path(file_path)
    if not file_path.is_file():
        raise IOFailure(f"Audio input file not found: {file_path}")
    ext = _check_extension(file_path)

    if ext in AU_EXTENSIONS:
        header = read_au_header(file_path)
        data_bytes = header.data_size
        if data_bytes == AU_UNKNOWN_SIZE:
            data_bytes = max(0, file_path.stat().st_size - header.data_offset)
        frames = data_bytes // header.channels
        details: Dict[str, Any] = {
            "format": "AU",
            "encoding": "ULAW (8-bit mu-law)",
            "sample_rate": header.sample_rate,
            "channels": header.channels,
            "frames": frames,
        }
        details.update({f"header.{k}": v for k, v in header.to_dict().items()})
    else:
        try:
            info = sf.info(str(file_path))
        except RuntimeError as e:
            raise MalformedInput(f"Cannot decode {file_path}: {e}") from e
        details = {
            "format": info.format,
            "encoding": info.subtype,
            "sample_rate": info.samplerate,
            "channels": info.channels,
            "frames": info.frames,
        }

    sr = details["sample_rate"]
    details["duration"] = details["frames"] / sr if sr else 0.0
    return details
