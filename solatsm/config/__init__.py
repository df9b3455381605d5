# solatsm/config/__init__.py

"""
Configuration management for solatsm.

This package handles loading configuration from files (TOML),
environment variables, and internal defaults, providing a unified
configuration object.
"""

from .models import SolaConfig, TsmConfig
from .loaders import load_configuration

__all__ = [
    "SolaConfig",
    "TsmConfig",
    "load_configuration",
]
