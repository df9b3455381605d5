# tests/test_validation.py

"""
Tests for the command-line parameter range checks.
"""

import pytest

from solatsm.config.models import TsmConfig
from solatsm.core.errors import InvalidConfiguration
from solatsm.core.validation import validate_alpha, validate_frame_size, validate_tsm_parameters


@pytest.mark.parametrize("alpha", [0.5, 1.0, 1.5, 2.0])
def test_alpha_within_bounds(alpha):
    assert validate_alpha(alpha) == alpha


@pytest.mark.parametrize("alpha", [0.49, 2.01, 0.0, -1.0])
def test_alpha_out_of_bounds(alpha):
    with pytest.raises(InvalidConfiguration, match="<alpha> must range from 0.5 to 2.0"):
        validate_alpha(alpha)


@pytest.mark.parametrize("frame_size", [25, 160, 1000])
def test_frame_size_within_bounds(frame_size):
    assert validate_frame_size(frame_size) == frame_size


@pytest.mark.parametrize("frame_size", [24, 1001, 0])
def test_frame_size_out_of_bounds(frame_size):
    with pytest.raises(InvalidConfiguration, match="<framesize> must range from 25 to 1000"):
        validate_frame_size(frame_size)


def test_default_frame_size_substituted():
    assert validate_tsm_parameters(1.5) == (1.5, 160)


def test_configured_bounds_are_used():
    cfg = TsmConfig(default_frame_size=256, min_frame_size=64, max_frame_size=512, max_alpha=3.0)
    assert validate_tsm_parameters(2.5, None, cfg) == (2.5, 256)
    with pytest.raises(InvalidConfiguration):
        validate_tsm_parameters(1.0, 32, cfg)


def test_alpha_checked_before_frame_size():
    with pytest.raises(InvalidConfiguration, match="<alpha>"):
        validate_tsm_parameters(5.0, 5)
