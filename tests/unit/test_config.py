"""
Tests for configuration management.
"""
import pytest
from pathlib import Path
from pydantic import ValidationError
from geohash_index.utils.config import (
    load_config,
    GeohashConfig,
    CodecSettings,
    CoverageSettings,
    LoggingSettings,
    get_default_config,
)
from geohash_index.utils.exceptions import ConfigurationError


def test_load_default_config():
    """Test loading the shipped default configuration."""
    config = load_config(Path(__file__).parents[2] / "config" / "default.yaml")

    assert config.codec.default_length == 12
    assert config.coverage.max_hashes == 12
    assert config.logging.level == "INFO"
    assert config.logging.log_file is None


def test_load_partial_config(tmp_path):
    """Sections left out fall back to defaults."""
    config_file = tmp_path / "partial.yaml"
    config_file.write_text("coverage:\n  max_hashes: 40\n")

    config = load_config(config_file)

    assert config.coverage.max_hashes == 40
    assert config.codec.default_length == 12


def test_empty_config_file(tmp_path):
    config_file = tmp_path / "empty.yaml"
    config_file.write_text("")

    assert load_config(config_file) == get_default_config()


def test_config_file_not_found():
    """Test error handling when config file doesn't exist."""
    with pytest.raises(FileNotFoundError):
        load_config(Path("config/nonexistent.yaml"))


def test_config_not_a_mapping(tmp_path):
    config_file = tmp_path / "list.yaml"
    config_file.write_text("- 1\n- 2\n")

    with pytest.raises(ConfigurationError):
        load_config(config_file)


def test_codec_settings_validation():
    """Test validation of codec settings."""
    assert CodecSettings(default_length=20).default_length == 20

    with pytest.raises(ValidationError):
        CodecSettings(default_length=0)

    with pytest.raises(ValidationError):
        CodecSettings(default_length=21)


def test_coverage_settings_validation():
    with pytest.raises(ValidationError):
        CoverageSettings(max_hashes=0)


def test_logging_level_normalised():
    assert LoggingSettings(level="debug").level == "DEBUG"

    with pytest.raises(ValidationError):
        LoggingSettings(level="verbose")


def test_log_file_env_expansion(monkeypatch, tmp_path):
    """Test ${VAR} expansion in log file paths."""
    monkeypatch.setenv("DATA_ROOT", str(tmp_path))

    settings = LoggingSettings(log_file="${DATA_ROOT}/logs/run.log")

    assert settings.log_file == tmp_path / "logs" / "run.log"


def test_invalid_section_type(tmp_path):
    config_file = tmp_path / "bad.yaml"
    config_file.write_text("codec:\n  default_length: many\n")

    with pytest.raises(ValidationError):
        load_config(config_file)


def test_default_config():
    """Test getting default configuration."""
    config = get_default_config()

    assert isinstance(config, GeohashConfig)
    assert config.codec.default_length == 12
    assert config.coverage.max_hashes == 12
    assert config.logging.json_output is False
