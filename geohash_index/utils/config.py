"""
Configuration management using Pydantic for validation.

This module provides type-safe configuration loading and validation
for the geohash-index command line tools.
"""
from pathlib import Path
from typing import Optional
from pydantic import BaseModel, Field, field_validator
import yaml
import os

from geohash_index.core.codec import DEFAULT_HASH_LENGTH, MAX_STRING_HASH_LENGTH
from geohash_index.core.coverage import DEFAULT_MAX_HASHES
from geohash_index.utils.exceptions import ConfigurationError
from geohash_index.utils.logging_config import get_logger

logger = get_logger(__name__)

_EXPANDABLE_VARS = ['DATA_ROOT', 'HOME', 'PWD']


class CodecSettings(BaseModel):
    """Defaults for point encoding."""
    default_length: int = Field(
        DEFAULT_HASH_LENGTH, ge=1, le=MAX_STRING_HASH_LENGTH,
        description="Hash length used when none is given"
    )


class CoverageSettings(BaseModel):
    """Defaults for bounding box coverage."""
    max_hashes: int = Field(DEFAULT_MAX_HASHES, ge=1, description="Cell budget per coverage")


class LoggingSettings(BaseModel):
    """Logging output."""
    level: str = Field("INFO", description="Logging level name")
    json_output: bool = Field(False, description="Render logs as JSON")
    log_file: Optional[Path] = None

    @field_validator('level')
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Accept standard logging level names in any case."""
        v = v.upper()
        if v not in ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'):
            raise ValueError(f"Unknown logging level: {v}")
        return v

    @field_validator('log_file', mode='before')
    @classmethod
    def expand_env_vars(cls, v):
        """Expand environment variables in paths."""
        if isinstance(v, str):
            # Replace ${VAR} with environment variable
            for var in _EXPANDABLE_VARS:
                if f'${{{var}}}' in v:
                    v = v.replace(f'${{{var}}}', os.environ.get(var, ''))
            return Path(v)
        return v


class GeohashConfig(BaseModel):
    """Complete configuration for the command line tools."""
    codec: CodecSettings = Field(default_factory=CodecSettings)
    coverage: CoverageSettings = Field(default_factory=CoverageSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


def load_config(config_path: Path) -> GeohashConfig:
    """
    Load and validate configuration from YAML file.

    Args:
        config_path: Path to YAML config file

    Returns:
        Validated GeohashConfig object

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If YAML is malformed
        ConfigurationError: If the document is not a mapping
        ValidationError: If config validation fails

    Example:
        >>> config = load_config(Path("config/default.yaml"))
        >>> config.coverage.max_hashes
        12
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, 'r') as f:
        config_dict = yaml.safe_load(f)

    if config_dict is None:
        config_dict = {}
    if not isinstance(config_dict, dict):
        raise ConfigurationError(
            f"Config file {config_path} must contain a mapping, got {type(config_dict).__name__}"
        )

    config = GeohashConfig(**config_dict)
    logger.debug(
        "Configuration loaded",
        config_file=str(config_path),
        default_length=config.codec.default_length,
        max_hashes=config.coverage.max_hashes,
    )
    return config


def get_default_config() -> GeohashConfig:
    """
    Get default configuration template.

    Returns:
        Default GeohashConfig
    """
    return GeohashConfig(
        codec=CodecSettings(),
        coverage=CoverageSettings(),
        logging=LoggingSettings(),
    )
