# tests/test_config.py

import os

import pytest
from pydantic import ValidationError

from solatsm.config import SolaConfig, TsmConfig, load_configuration


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep host SOLATSM_* variables out of the tests."""
    for key in list(os.environ):
        if key.startswith("SOLATSM_"):
            monkeypatch.delenv(key)


def _load(**kwargs) -> SolaConfig:
    return load_configuration(disable_project_config=True, disable_user_config=True, **kwargs)


def test_defaults():
    config = _load()
    assert config.tsm.default_frame_size == 160
    assert (config.tsm.min_frame_size, config.tsm.max_frame_size) == (25, 1000)
    assert (config.tsm.min_alpha, config.tsm.max_alpha) == (0.5, 2.0)
    assert config.tsm.max_output_samples is None
    assert config.audio.channel == 1
    assert config.logging.log_file_enabled is False
    assert config.logging.log_level_console == "WARNING"


def test_toml_file_overrides_defaults(tmp_path):
    path = tmp_path / "custom.toml"
    path.write_text(
        "[tsm]\ndefault_frame_size = 320\nmax_alpha = 3.0\n\n"
        "[logging]\nlog_level_console = 'info'\n"
    )
    config = _load(config_files=[path])
    assert config.tsm.default_frame_size == 320
    assert config.tsm.max_alpha == 3.0
    assert config.tsm.min_alpha == 0.5
    assert config.logging.log_level_console == "INFO"


def test_environment_overrides_file(tmp_path, monkeypatch):
    path = tmp_path / "custom.toml"
    path.write_text("[tsm]\nmax_alpha = 3.0\n")
    monkeypatch.setenv("SOLATSM_TSM__MAX_ALPHA", "4.5")
    monkeypatch.setenv("SOLATSM_TSM__DEFAULT_FRAME_SIZE", "200")
    monkeypatch.setenv("SOLATSM_LOGGING__LOG_FILE_ENABLED", "false")
    config = _load(config_files=[path])
    assert config.tsm.max_alpha == 4.5
    assert config.tsm.default_frame_size == 200
    assert config.logging.log_file_enabled is False


def test_environment_variable_without_section_is_ignored(monkeypatch):
    monkeypatch.setenv("SOLATSM_DEBUG", "1")
    assert _load() == SolaConfig()


def test_invalid_values_fall_back_to_defaults(tmp_path):
    path = tmp_path / "bad.toml"
    path.write_text("[tsm]\ndefault_frame_size = 5000\n")
    config = _load(config_files=[path])
    assert config.tsm.default_frame_size == 160


def test_malformed_toml_is_skipped(tmp_path):
    path = tmp_path / "broken.toml"
    path.write_text("[tsm\nmax_alpha = ")
    assert _load(config_files=[path]).tsm.max_alpha == 2.0


def test_tsm_config_range_checks():
    with pytest.raises(ValidationError):
        TsmConfig(min_alpha=2.5, max_alpha=2.0)
    with pytest.raises(ValidationError):
        TsmConfig(min_frame_size=0)


def test_invalid_log_level_rejected():
    with pytest.raises(ValidationError):
        SolaConfig(logging={"log_level_console": "LOUD"})
