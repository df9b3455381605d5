# tests/test_correlation.py

"""
Tests for the normalized cross-correlation in solatsm.core.tsm.correlation.
"""

import numpy as np
import pytest

from solatsm.core.tsm import cross_correlation


@pytest.fixture
def noise_pair():
    rng = np.random.default_rng(7)
    x = rng.integers(-20000, 20000, 500).astype(np.int16)
    y = rng.integers(-20000, 20000, 500).astype(np.int16)
    return x, y


def test_cross_correlation_identical_windows():
    x = np.array([100, -200, 300, -400, 500], dtype=np.int16)
    assert cross_correlation(x, x) == pytest.approx(1.0)


def test_cross_correlation_inverted_windows():
    x = np.array([100, -200, 300, -400, 500], dtype=np.int16)
    assert cross_correlation(x, -x) == pytest.approx(-1.0)


def test_cross_correlation_scale_invariant():
    x = np.array([10, 20, -30, 40], dtype=np.int16)
    assert cross_correlation(x, x * 3) == pytest.approx(1.0)


def test_cross_correlation_symmetric(noise_pair):
    """score(x, y) == score(y, x) exactly."""
    x, y = noise_pair
    for length in (1, 20, 160, 500):
        assert cross_correlation(x[:length], y[:length]) == cross_correlation(y[:length], x[:length])


@pytest.mark.parametrize("length", [1, 25, 160, 1000])
def test_cross_correlation_silent_window_is_zero(length):
    """A silent window yields exactly 0, whichever side it is on."""
    rng = np.random.default_rng(length)
    signal = rng.integers(-32768, 32767, length).astype(np.int16)
    silence = np.zeros(length, dtype=np.int16)
    assert cross_correlation(signal, silence) == 0.0
    assert cross_correlation(silence, signal) == 0.0
    assert cross_correlation(silence, silence) == 0.0


def test_cross_correlation_full_scale_does_not_overflow():
    """1000 full-scale products exceed 16/32-bit ranges but stay exact in float64."""
    x = np.full(1000, 32767, dtype=np.int16)
    y = np.full(1000, -32768, dtype=np.int16)
    assert cross_correlation(x, x) == pytest.approx(1.0)
    assert cross_correlation(x, y) == pytest.approx(-1.0)


def test_cross_correlation_bounded(noise_pair):
    x, y = noise_pair
    score = cross_correlation(x, y)
    assert -1.0 <= score <= 1.0
    assert isinstance(score, float)


def test_cross_correlation_length_mismatch():
    with pytest.raises(ValueError, match="differ in length"):
        cross_correlation(np.zeros(3, dtype=np.int16), np.zeros(4, dtype=np.int16))
