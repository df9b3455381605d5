# tests/test_au.py

"""
Tests for the Sun .au container codec in solatsm.core.audio.au.
"""

import io
import struct

import numpy as np
import pytest
from numpy.testing import assert_array_equal

from solatsm.core.audio.au import (
    AU_HEADER_SIZE,
    AU_UNKNOWN_SIZE,
    AuHeader,
    decode_au,
    encode_au,
    read_au,
    read_au_header,
    write_au,
)
from solatsm.core.audio.ulaw import linear_to_ulaw, ulaw_to_linear
from solatsm.core.errors import IOFailure, MalformedInput

# --- Helpers ---

def _au_image(codes: bytes, sample_rate: int = 8000, channels: int = 1,
              data_offset: int = AU_HEADER_SIZE, data_size=None, magic: int = 0x2E736E64,
              encoding: int = 1) -> bytes:
    """Builds a raw .au image without going through AuHeader."""
    size = len(codes) if data_size is None else data_size
    header = struct.pack(">6I", magic, data_offset, size, encoding, sample_rate, channels)
    padding = b"\x00" * (data_offset - len(header))
    return header + padding + codes


@pytest.fixture
def pcm_samples() -> np.ndarray:
    # Values on the mu-law grid survive the codec unchanged
    return ulaw_to_linear(np.arange(0, 256, 3, dtype=np.uint8))

# --- Header ---

def test_header_pack_layout():
    header = AuHeader(sample_rate=8000, data_size=100)
    expected = bytes.fromhex(
        "2e736e64 00000020 00000064 00000001 00001f40 00000001 00000000 00000000"
    )
    assert header.pack() == expected
    assert len(expected) == AU_HEADER_SIZE


def test_header_unpack_round_trip():
    header = AuHeader(sample_rate=44100, data_size=12345, channels=2, info=7)
    parsed = AuHeader.unpack(header.pack())
    assert parsed.to_dict() == header.to_dict()


def test_header_pack_rejects_out_of_range_fields():
    with pytest.raises(MalformedInput):
        AuHeader(sample_rate=-1, data_size=0).pack()


@pytest.mark.parametrize("kwargs, message", [
    ({"magic": 0x52494646}, "bad magic"),
    ({"encoding": 3}, "Unsupported .au encoding"),
    ({"channels": 0}, "zero channels"),
    ({"data_offset": 16}, "data offset"),
])
def test_header_unpack_rejects_invalid_fields(kwargs, message):
    raw = _au_image(b"\x00" * 16, **kwargs)
    with pytest.raises(MalformedInput, match=message):
        AuHeader.unpack(raw)


def test_header_unpack_rejects_short_input():
    with pytest.raises(MalformedInput, match="Truncated .au header"):
        AuHeader.unpack(b".snd\x00\x00")

# --- Reading ---

def test_encode_decode_round_trip(pcm_samples):
    image = encode_au(pcm_samples, 11025)
    assert image[:4] == b".snd"
    assert len(image) == AU_HEADER_SIZE + pcm_samples.size
    samples, sr = decode_au(image)
    assert sr == 11025
    assert samples.dtype == np.int16
    assert_array_equal(samples, pcm_samples)


def test_bad_magic_is_rejected_before_decoding(mocker):
    decode = mocker.patch("solatsm.core.audio.au.ulaw_to_linear")
    with pytest.raises(MalformedInput, match="bad magic"):
        read_au(io.BytesIO(_au_image(b"\xff" * 64, magic=0x12345678)))
    decode.assert_not_called()


def test_wrong_encoding_is_rejected():
    with pytest.raises(MalformedInput, match="encoding"):
        decode_au(_au_image(b"\xff" * 64, encoding=3))


def test_truncated_data_is_rejected():
    image = _au_image(b"\xff" * 10, data_size=100)
    with pytest.raises(MalformedInput, match="Truncated .au data"):
        decode_au(image)


def test_truncated_header_is_rejected():
    with pytest.raises(MalformedInput, match="Truncated .au header"):
        decode_au(b".snd" + b"\x00" * 10)


def test_unknown_size_reads_to_end_of_file():
    codes = linear_to_ulaw(np.array([0, 1000, -1000, 20000], dtype=np.int16)).tobytes()
    samples, _ = decode_au(_au_image(codes, data_size=AU_UNKNOWN_SIZE))
    assert samples.size == 4
    assert_array_equal(samples, ulaw_to_linear(codes))


def test_declared_size_ignores_trailing_bytes():
    codes = bytes([0xFF, 0x80, 0x00])
    samples, _ = decode_au(_au_image(codes + b"\x12\x34", data_size=3))
    assert_array_equal(samples, [0, 32124, -32124])


def test_data_after_annotation_is_found():
    codes = bytes([0x80, 0x00])
    samples, _ = decode_au(_au_image(codes, data_offset=48))
    assert_array_equal(samples, [32124, -32124])


def test_minimal_24_byte_header():
    codes = bytes([0x80] * 8 + [0x00] * 8)
    samples, _ = decode_au(_au_image(codes, data_offset=24))
    assert samples.size == 16
    assert_array_equal(samples[:8], [32124] * 8)
    assert_array_equal(samples[8:], [-32124] * 8)


def test_stereo_channel_extraction():
    left, right = 0x80, 0x00 # +32124 / -32124
    codes = bytes([left, right] * 5)
    image = _au_image(codes, channels=2)
    first, _ = decode_au(image, channel=1)
    second, _ = decode_au(image, channel=2)
    assert_array_equal(first, [32124] * 5)
    assert_array_equal(second, [-32124] * 5)


@pytest.mark.parametrize("channel", [0, 3])
def test_channel_out_of_range(channel):
    image = _au_image(b"\xff" * 8, channels=2)
    with pytest.raises(MalformedInput, match="Channel"):
        decode_au(image, channel=channel)

# --- Files ---

def test_write_and_read_file(tmp_path, pcm_samples):
    path = tmp_path / "tone.au"
    written = write_au(path, pcm_samples, 8000)
    assert written == path.stat().st_size == AU_HEADER_SIZE + pcm_samples.size
    assert path.read_bytes()[:4] == b".snd"

    header = read_au_header(path)
    assert header.sample_rate == 8000
    assert header.data_size == pcm_samples.size

    samples, sr = read_au(path)
    assert sr == 8000
    assert_array_equal(samples, pcm_samples)


def test_write_to_stream(pcm_samples):
    buffer = io.BytesIO()
    written = write_au(buffer, pcm_samples, 16000)
    assert written == len(buffer.getvalue())


def test_missing_file_raises_io_failure(tmp_path):
    with pytest.raises(IOFailure, match="Can't open"):
        read_au(tmp_path / "missing.au")


def test_unwritable_destination_raises_io_failure(tmp_path, pcm_samples):
    with pytest.raises(IOFailure):
        write_au(tmp_path / "no_such_dir" / "out.au", pcm_samples, 8000)
