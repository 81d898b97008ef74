"""
Configuration and parameter loading using Pydantic.

This module provides centralized settings management for the application.
Settings are loaded from an optional YAML file and validated using Pydantic
models. A missing file yields defaults; a malformed file is fatal.
"""

from pathlib import Path
from typing import Any

import pytz
import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from weight_ledger.utils.exceptions import ConfigSyntaxError

DEFAULT_CONFIG_PATH = Path.home() / ".weight_ledger.yaml"


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field("WARNING", pattern="(?i)^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    file: str | None = None
    console: bool = False


class AppConfig(BaseSettings):
    """Main application configuration."""

    data_file: str = ""
    verbose: bool = False
    summary_days: int = Field(5, ge=1)
    timezone: str | None = None
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = SettingsConfigDict(env_prefix="WEIGHT_LEDGER_", case_sensitive=False)

    @field_validator("timezone")
    @classmethod
    def _check_timezone(cls, value: str | None) -> str | None:
        if value is not None and value not in pytz.all_timezones_set:
            raise ValueError(f"unknown timezone: {value}")
        return value


class ParameterLoader:
    """
    Centralized parameter loader for the application.

    Loads and validates settings from a YAML file using Pydantic models.
    Top-level keys are matched case-insensitively, so ``DATA_FILE`` and
    ``data_file`` are equivalent.
    """

    def __init__(self, config_path: str | Path | None = None) -> None:
        """
        Initialize parameter loader.

        Args:
            config_path: Path to the YAML settings file. Defaults to
                ``~/.weight_ledger.yaml``.

        Raises:
            ConfigSyntaxError: If the settings file exists but is invalid.
        """
        self.config_path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
        self.config: AppConfig
        self._load_config()

    def _load_config(self) -> None:
        """
        Load settings from the YAML file, if there is one.

        Raises:
            ConfigSyntaxError: If the file cannot be parsed or validated.
        """
        if not self.config_path.exists():
            self.config = AppConfig()
            return

        try:
            with open(self.config_path, encoding="utf-8") as f:
                config_dict = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigSyntaxError(f"syntax error in {self.config_path}: {e}") from e
        except OSError as e:
            raise ConfigSyntaxError(f"cannot read {self.config_path}: {e}") from e

        if config_dict is None:
            config_dict = {}
        if not isinstance(config_dict, dict):
            raise ConfigSyntaxError(f"syntax error in {self.config_path}: expected key/value pairs")

        normalized = {str(key).lower(): value for key, value in config_dict.items()}

        try:
            self.config = AppConfig(**normalized)
        except PydanticValidationError as e:
            raise ConfigSyntaxError(f"invalid settings in {self.config_path}: {e}") from e

    def get_app_config(self) -> AppConfig:
        """Get the full application configuration."""
        return self.config

    def get_logging_config(self) -> LoggingConfig:
        """Get logging configuration."""
        return self.config.logging

    def get_raw_config(self) -> dict[str, Any]:
        """
        Get raw configuration dictionary.

        Returns:
            Dictionary representation of the configuration.
        """
        return self.config.model_dump()
