"""
Configuration management for the pumi gazetteer.

This module provides the dataclass holding data locations, the remote source
of the YAML files and logging options.
"""

from dataclasses import dataclass, asdict
from typing import Dict, Optional
import os
from pathlib import Path

from .exceptions import ConfigurationError

PACKAGE_DATA_DIRECTORY = Path(__file__).parent / "data"
DEFAULT_SOURCE_URL = "https://raw.githubusercontent.com/dwilkie/pumi/master/data"
VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

ENV_PREFIX = "PUMI_"


@dataclass
class GazetteerConfig:
    """Configuration for loading and building the gazetteer data."""

    # JSON tables read by the gazetteer
    data_directory: str = str(PACKAGE_DATA_DIRECTORY / "json")

    # YAML files downloaded from the upstream source
    source_directory: str = str(PACKAGE_DATA_DIRECTORY / "yaml")
    source_url: str = DEFAULT_SOURCE_URL
    request_timeout: float = 30.0

    show_progress: bool = True

    # Logging configuration
    log_level: str = "INFO"
    log_file: Optional[str] = None

    def __post_init__(self):
        """Validate configuration after initialization."""
        self.log_level = str(self.log_level).upper()
        if self.log_level not in VALID_LOG_LEVELS:
            raise ConfigurationError(
                f"Invalid log level: {self.log_level}",
                config_key='log_level',
                config_value=self.log_level,
                valid_values=VALID_LOG_LEVELS
            )

        try:
            self.request_timeout = float(self.request_timeout)
        except (TypeError, ValueError):
            raise ConfigurationError(
                f"Request timeout must be a number: {self.request_timeout}",
                config_key='request_timeout',
                config_value=self.request_timeout
            )
        if self.request_timeout <= 0:
            raise ConfigurationError(
                f"Request timeout must be positive: {self.request_timeout}",
                config_key='request_timeout',
                config_value=self.request_timeout
            )

        if not self.source_url:
            raise ConfigurationError("Source URL must not be empty", config_key='source_url')
        self.source_url = self.source_url.rstrip('/')

    @classmethod
    def from_dict(cls, config_dict: Dict) -> 'GazetteerConfig':
        """Create configuration from dictionary."""
        unknown = set(config_dict) - set(cls.__dataclass_fields__)
        if unknown:
            raise ConfigurationError(
                f"Unknown configuration keys: {', '.join(sorted(unknown))}",
                config_key=sorted(unknown)[0],
                valid_values=sorted(cls.__dataclass_fields__)
            )
        return cls(**config_dict)

    @classmethod
    def from_env(cls, environ: Optional[Dict[str, str]] = None) -> 'GazetteerConfig':
        """
        Create configuration from PUMI_* environment variables.

        Recognised variables: PUMI_DATA_DIR, PUMI_SOURCE_DIR, PUMI_SOURCE_URL,
        PUMI_REQUEST_TIMEOUT, PUMI_LOG_LEVEL and PUMI_LOG_FILE.
        """
        environ = os.environ if environ is None else environ
        mapping = {
            'DATA_DIR': 'data_directory',
            'SOURCE_DIR': 'source_directory',
            'SOURCE_URL': 'source_url',
            'REQUEST_TIMEOUT': 'request_timeout',
            'LOG_LEVEL': 'log_level',
            'LOG_FILE': 'log_file',
        }
        values = {
            field_name: environ[ENV_PREFIX + name]
            for name, field_name in mapping.items()
            if environ.get(ENV_PREFIX + name)
        }
        return cls(**values)

    def to_dict(self) -> Dict:
        """Convert configuration to dictionary."""
        return asdict(self)
