# solatsm/config/models.py

"""
Pydantic models for defining the structure and validation of the solatsm
configuration (solatsm.toml). Uses Pydantic V2 syntax.
"""

from pathlib import Path
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

# --- Helper Functions ---

def _resolve_path(path: Union[str, Path]) -> Path:
    """Resolves and expands user paths."""
    return Path(path).expanduser().resolve()

# --- Model Definitions ---

class TsmConfig(BaseModel):
    """Time-scale modification parameters and their allowed ranges."""
    default_frame_size: int = Field(160, description="Frame size N used when none is given.")
    min_frame_size: int = Field(25, gt=0, description="Smallest accepted frame size.")
    max_frame_size: int = Field(1000, gt=0, description="Largest accepted frame size.")
    min_alpha: float = Field(0.5, gt=0, description="Smallest accepted time-scale factor.")
    max_alpha: float = Field(2.0, gt=0, description="Largest accepted time-scale factor.")
    max_output_samples: Optional[int] = Field(None, gt=0, description="Refuse runs whose output buffer would exceed this many samples.")

    @model_validator(mode='after')
    def check_ranges(self) -> 'TsmConfig':
        """Ensures min <= default <= max for the frame size and min <= max for alpha."""
        if not self.min_frame_size <= self.default_frame_size <= self.max_frame_size:
            raise ValueError(
                f"default_frame_size ({self.default_frame_size}) must lie within "
                f"[{self.min_frame_size}, {self.max_frame_size}]"
            )
        if self.min_alpha > self.max_alpha:
            raise ValueError(f"min_alpha ({self.min_alpha}) must not exceed max_alpha ({self.max_alpha})")
        return self

class AudioConfig(BaseModel):
    """Audio input/output defaults."""
    channel: int = Field(1, ge=1, description="1-based channel extracted from multi-channel input.")
    output_subtype: str = Field("PCM_16", description="soundfile subtype for non-.au outputs.")

class PathsConfig(BaseModel):
    """Configuration for file paths used by solatsm."""
    log_directory: Path = Field(default=Path("./solatsm_logs"), description="Directory for log files.")

    @field_validator('log_directory', mode='before')
    @classmethod
    def resolve_paths_before_validation(cls, value: Any) -> Path:
        """Resolves paths before Pydantic validates them."""
        if isinstance(value, (str, Path)):
            return _resolve_path(value)
        return value

class LoggingConfig(BaseModel):
    """Logging configuration settings."""
    log_file_enabled: bool = Field(False, description="Enable/disable persistent file logging.")
    log_filename_template: str = Field("solatsm_run_{timestamp:%Y%m%d_%H%M%S}.log", description="Naming pattern for log files.")
    log_level_file: str = Field("DEBUG", description="Minimum level for file logs (DEBUG, INFO, WARNING, ERROR, CRITICAL).")
    log_format: str = Field("%(asctime)s [%(levelname)-8s] %(name)-30s - %(message)s (%(filename)s:%(lineno)d)", description="Format string for file log entries.")
    log_level_console: str = Field("WARNING", description="Default minimum level for console output (overridden by verbosity flags).")

    @field_validator('log_level_file', 'log_level_console')
    @classmethod
    def check_log_level(cls, value: str) -> str:
        """Validate log level strings."""
        allowed_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_value = value.upper()
        if upper_value not in allowed_levels:
            raise ValueError(f"Invalid log level '{value}'. Must be one of {allowed_levels}")
        return upper_value

class SolaConfig(BaseModel):
    """Root configuration model for solatsm."""
    model_config = ConfigDict(
        extra='ignore',
        validate_assignment=True
    )

    tsm: TsmConfig = Field(default_factory=TsmConfig)
    audio: AudioConfig = Field(default_factory=AudioConfig)
    paths: PathsConfig = Field(default_factory=PathsConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
