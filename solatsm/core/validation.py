# solatsm/core/validation.py

"""
Range checks for user-supplied time-scale factor and frame size.

The engine itself only requires positive values; these bounds belong to
the command-line surface and come from the [tsm] configuration section.
"""

import logging
from typing import Optional, Tuple

from solatsm.config.models import TsmConfig
from .errors import InvalidConfiguration

logger = logging.getLogger(__name__)


def validate_alpha(alpha: float, tsm_config: Optional[TsmConfig] = None) -> float:
    """Raises InvalidConfiguration unless min_alpha <= alpha <= max_alpha."""
    cfg = tsm_config or TsmConfig()
    if not cfg.min_alpha <= alpha <= cfg.max_alpha:
        raise InvalidConfiguration(
            f"<alpha> must range from {cfg.min_alpha:0.1f} to {cfg.max_alpha:0.1f} (got {alpha})"
        )
    return alpha


def validate_frame_size(frame_size: int, tsm_config: Optional[TsmConfig] = None) -> int:
    """Raises InvalidConfiguration unless min_frame_size <= N <= max_frame_size."""
    cfg = tsm_config or TsmConfig()
    if not cfg.min_frame_size <= frame_size <= cfg.max_frame_size:
        raise InvalidConfiguration(
            f"<framesize> must range from {cfg.min_frame_size} to {cfg.max_frame_size} (got {frame_size})"
        )
    return frame_size


def validate_tsm_parameters(
    alpha: float,
    frame_size: Optional[int] = None,
    tsm_config: Optional[TsmConfig] = None
) -> Tuple[float, int]:
    """
    Validates alpha and the frame size, substituting the configured default
    frame size when none is given.

    Returns:
        The validated (alpha, frame_size) pair.

    Raises:
        InvalidConfiguration: If either value is out of range.
    """
    cfg = tsm_config or TsmConfig()
    if frame_size is None:
        frame_size = cfg.default_frame_size
    validate_alpha(alpha, cfg)
    validate_frame_size(frame_size, cfg)
    logger.debug(f"Validated parameters: alpha={alpha}, frame_size={frame_size}")
    return alpha, frame_size
