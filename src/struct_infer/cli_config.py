#!/usr/bin/env python3
"""
Configuration management for struct-infer.

Supports:
- YAML configuration files
- Environment variable overrides
- Default values
- Validation

Precedence, lowest first: defaults, config file, STRUCT_INFER_* environment
variables, command-line flags.
"""
from __future__ import annotations

import os
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .config import Config
from .constants import (
    COLOR_MODES,
    CONFIG_FILE_CANDIDATES,
    DEFAULT_LOG_LEVEL,
    DEFAULT_OUTPUT_FORMAT,
    DEFAULT_RECORD_PREFIX,
    SUPPORTED_OUTPUT_FORMATS,
)
from .exceptions import ConfigurationError
from .logging_config import get_logger

logger = get_logger(__name__)

TRUE_VALUES = ("true", "1", "yes", "on")
FALSE_VALUES = ("false", "0", "no", "off")

ENV_MAPPING = {
    "STRUCT_INFER_FORMAT": "output_format",
    "STRUCT_INFER_COLOR": "color_mode",
    "STRUCT_INFER_OPTIONAL_FIELDS": "optional_fields",
    "STRUCT_INFER_NUMERIC_STRINGS": "coerce_numeric_strings",
    "STRUCT_INFER_RECORD_PREFIX": "record_prefix",
    "STRUCT_INFER_LOG_LEVEL": "log_level",
}


@dataclass
class StructInferSettings:
    """User-facing settings for struct-infer with defaults."""

    # Output settings
    output_format: str = DEFAULT_OUTPUT_FORMAT
    color_mode: str = "auto"  # auto, always, never
    record_prefix: str = DEFAULT_RECORD_PREFIX

    # Inference settings
    optional_fields: bool = False
    coerce_numeric_strings: bool = True

    # Logging
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def load(cls, config_path: Optional[str] = None) -> "StructInferSettings":
        """Load settings from a config file and the environment."""
        settings = cls()

        config_file = config_path or cls.find_config_file()
        if config_file:
            if not Path(config_file).exists():
                raise ConfigurationError(
                    "Config file not found", config_key="config", config_value=config_file
                )
            settings._load_from_file(config_file)

        settings._load_from_env()
        settings.validate()
        return settings

    @staticmethod
    def find_config_file() -> Optional[str]:
        """Find a config file in the standard locations."""
        for candidate in CONFIG_FILE_CANDIDATES:
            path = Path(os.path.expanduser(candidate))
            if path.exists():
                return str(path)
        return None

    def _load_from_file(self, config_path: str) -> None:
        """Load settings from a YAML file; unknown keys are ignored."""
        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(
                f"Invalid YAML in {config_path}", config_key="config", cause=e
            ) from e

        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Config file {config_path} must contain a mapping",
                config_key="config",
            )

        known = {f.name for f in fields(self)}
        for key, value in data.items():
            if key in known:
                setattr(self, key, value)
            else:
                logger.warning("Ignoring unknown config key %r in %s", key, config_path)
        logger.debug("Loaded settings from %s", config_path)

    def _load_from_env(self) -> None:
        """Load settings from STRUCT_INFER_* environment variables."""
        for env_var, attr_name in ENV_MAPPING.items():
            value = os.getenv(env_var)
            if value is None:
                continue
            if isinstance(getattr(self, attr_name), bool):
                setattr(self, attr_name, _parse_bool(env_var, value))
            else:
                setattr(self, attr_name, value)

    def apply_overrides(self, **overrides: Any) -> "StructInferSettings":
        """Apply command-line values; None means "not given"."""
        for key, value in overrides.items():
            if value is not None:
                setattr(self, key, value)
        self.validate()
        return self

    def validate(self) -> None:
        """Raise ConfigurationError for out-of-range values."""
        if self.output_format not in SUPPORTED_OUTPUT_FORMATS:
            raise ConfigurationError(
                "Unsupported output format",
                config_key="output_format",
                config_value=self.output_format,
            )
        if self.color_mode not in COLOR_MODES:
            raise ConfigurationError(
                "Unknown color mode", config_key="color_mode", config_value=self.color_mode
            )
        for key in ("optional_fields", "coerce_numeric_strings"):
            if not isinstance(getattr(self, key), bool):
                raise ConfigurationError(
                    "Expected a boolean", config_key=key, config_value=getattr(self, key)
                )
        if not isinstance(self.record_prefix, str) or not self.record_prefix.isidentifier():
            raise ConfigurationError(
                "Record prefix must be an identifier",
                config_key="record_prefix",
                config_value=self.record_prefix,
            )
        if not isinstance(self.log_level, str) or self.log_level.upper() not in (
            "DEBUG",
            "INFO",
            "WARNING",
            "ERROR",
            "CRITICAL",
        ):
            raise ConfigurationError(
                "Unknown log level", config_key="log_level", config_value=self.log_level
            )

    def to_config(self) -> Config:
        """Build the engine Config from these settings."""
        return Config(
            optional_fields=self.optional_fields,
            coerce_numeric_strings=self.coerce_numeric_strings,
            record_prefix=self.record_prefix,
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def save(self, config_path: str) -> None:
        """Save current settings to a YAML file."""
        Path(config_path).parent.mkdir(parents=True, exist_ok=True)
        with open(config_path, "w", encoding="utf-8") as f:
            yaml.safe_dump(self.to_dict(), f, default_flow_style=False, sort_keys=True)


def _parse_bool(name: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in TRUE_VALUES:
        return True
    if lowered in FALSE_VALUES:
        return False
    raise ConfigurationError("Expected a boolean", config_key=name, config_value=value)
