"""
Configuration System for pikegen.

Options are grouped into dataclass sections and loaded from a single
JSON or YAML file, with a few environment variable overrides.
"""

import json
import os
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from ..utils.constants import DEFAULT_CONVERT_CLASS_NAME, DEFAULT_INDENT_SIZE
from ..utils.exceptions import ConfigError
from ..utils.logging import get_logger
from ..utils.string_utils import is_legal_identifier

logger = get_logger(__name__)

_TRUE_VALUES = ("1", "true", "yes")


@dataclass
class OutputConfig:
    """Generated output configuration."""

    indent_size: int = DEFAULT_INDENT_SIZE
    leading_comments: bool = True
    emit_descriptions: bool = True
    convert_class_name: str = DEFAULT_CONVERT_CLASS_NAME


@dataclass
class NamingConfig:
    """Naming configuration."""

    extra_forbidden_names: List[str] = field(default_factory=list)


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"
    enable_file_logging: bool = False
    log_file: str = "pikegen.log"


class PikegenConfig:
    """
    Configuration manager for pikegen.

    Reads one JSON or YAML file (``PIKEGEN_CONFIG`` when no path is
    given); a missing file means defaults. ``PIKEGEN_INDENT_SIZE`` and
    ``PIKEGEN_NO_LEADING_COMMENTS`` override the file.
    """

    def __init__(self, config_file: Optional[str] = None):
        """
        Initialize configuration.

        Args:
            config_file: Path to configuration file. If None, uses PIKEGEN_CONFIG when set.

        Raises:
            ConfigError: If the file cannot be parsed or holds invalid values
        """
        self.config_file = self._get_config_file_path(config_file)
        self._config_data = self._load_config()

        self.output = self._create_output_config()
        self.naming = self._create_naming_config()
        self.logging = self._create_logging_config()

        validate_config(self)

    def _get_config_file_path(self, config_file: Optional[str]) -> Optional[Path]:
        """Get the configuration file path."""
        if config_file:
            return Path(config_file)

        env_file = os.getenv("PIKEGEN_CONFIG")
        if env_file:
            return Path(env_file)
        return None

    def _load_config(self) -> Dict[str, Any]:
        """Load configuration from file (JSON or YAML)."""
        if self.config_file is None:
            return {}

        if not self.config_file.exists():
            logger.warning(f"Configuration file {self.config_file} not found, using defaults")
            return {}

        try:
            with open(self.config_file, "r", encoding="utf-8") as f:
                if self.config_file.suffix.lower() in (".yaml", ".yml"):
                    config_data = yaml.safe_load(f)
                else:
                    config_data = json.load(f)
        except (OSError, yaml.YAMLError, json.JSONDecodeError) as e:
            raise ConfigError(f"Failed to load configuration: {e}", str(self.config_file)) from e

        if config_data is None:
            config_data = {}
        if not isinstance(config_data, dict):
            raise ConfigError("Configuration must be a mapping", str(self.config_file))

        logger.info(f"Loaded configuration from {self.config_file}")
        return config_data

    def _section(self, key: str) -> Dict[str, Any]:
        data = self._config_data.get(key, {}) or {}
        if not isinstance(data, dict):
            raise ConfigError(f"Configuration section '{key}' must be a mapping", self._file_str())
        return data

    def _file_str(self) -> Optional[str]:
        return str(self.config_file) if self.config_file else None

    def _create_output_config(self) -> OutputConfig:
        """Create output configuration from loaded data."""
        output_data = self._section("output")

        indent_size = output_data.get("indent_size", DEFAULT_INDENT_SIZE)
        env_indent = os.getenv("PIKEGEN_INDENT_SIZE")
        if env_indent:
            try:
                indent_size = int(env_indent)
            except ValueError as e:
                raise ConfigError(f"PIKEGEN_INDENT_SIZE must be an integer, got {env_indent!r}") from e

        # Check environment variable override
        env_no_comments = os.getenv("PIKEGEN_NO_LEADING_COMMENTS", "").lower() in _TRUE_VALUES
        leading_comments = not env_no_comments and output_data.get("leading_comments", True)

        return OutputConfig(
            indent_size=indent_size,
            leading_comments=leading_comments,
            emit_descriptions=output_data.get("emit_descriptions", True),
            convert_class_name=output_data.get("convert_class_name", DEFAULT_CONVERT_CLASS_NAME),
        )

    def _create_naming_config(self) -> NamingConfig:
        """Create naming configuration from loaded data."""
        naming_data = self._section("naming")

        return NamingConfig(
            extra_forbidden_names=list(naming_data.get("extra_forbidden_names", [])),
        )

    def _create_logging_config(self) -> LoggingConfig:
        """Create logging configuration from loaded data."""
        log_data = self._section("logging")

        return LoggingConfig(
            level=log_data.get("level", "INFO"),
            enable_file_logging=log_data.get("enable_file_logging", False),
            log_file=log_data.get("log_file", "pikegen.log"),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert the configuration to a dictionary."""
        return {
            "output": asdict(self.output),
            "naming": asdict(self.naming),
            "logging": asdict(self.logging),
        }

    def save_config(self, config_file: Optional[str] = None) -> None:
        """Save current configuration to a JSON or YAML file."""
        path = Path(config_file) if config_file else self.config_file
        if path is None:
            raise ConfigError("No configuration file to save to")

        try:
            with open(path, "w", encoding="utf-8") as f:
                if path.suffix.lower() in (".yaml", ".yml"):
                    yaml.safe_dump(self.to_dict(), f, sort_keys=False)
                else:
                    json.dump(self.to_dict(), f, indent=2)
        except OSError as e:
            raise ConfigError(f"Failed to save configuration: {e}", str(path)) from e
        logger.info(f"Configuration saved to {path}")


def validate_config(config: PikegenConfig) -> None:
    """Validate a configuration; raise ConfigError on the first bad value."""
    output = config.output
    config_file = str(config.config_file) if config.config_file else None

    if not isinstance(output.indent_size, int) or output.indent_size < 0:
        raise ConfigError("Indent size must be a non-negative integer", config_file)

    if not isinstance(output.convert_class_name, str) or not is_legal_identifier(output.convert_class_name):
        raise ConfigError(
            f"Convert class name must be a legal identifier, got {output.convert_class_name!r}",
            config_file,
        )

    if not all(isinstance(name, str) for name in config.naming.extra_forbidden_names):
        raise ConfigError("Extra forbidden names must be strings", config_file)


# Global configuration instance
_global_config: Optional[PikegenConfig] = None


def get_config() -> PikegenConfig:
    """Get the global configuration instance."""
    global _global_config
    if _global_config is None:
        _global_config = PikegenConfig()
    return _global_config


def set_config(config: Optional[PikegenConfig]) -> None:
    """Set the global configuration instance; None resets to defaults on next use."""
    global _global_config
    _global_config = config


def load_config(config_file: str) -> PikegenConfig:
    """Load configuration from a specific file."""
    return PikegenConfig(config_file)
