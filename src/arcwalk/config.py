"""Configuration Management with Pydantic.

This module implements configuration models using Pydantic for parsing and
validation of YAML configuration files with environment variable overrides.
The library works without any configuration file; defaults apply when none
is found.
"""

import copy
import os
import sys
import threading
from pathlib import Path

import yaml
from pydantic import BaseModel, Field

from arcwalk.log_config import configure_logging, get_logger

logger = get_logger(__name__)

# Constants
DEFAULT_CONFIG_NAMES = ("arcwalk.yaml", "arcwalk.yml")
MIN_RECURSION_LIMIT = 100
HIGH_RECURSION_LIMIT = 100_000


class LoggingConfig(BaseModel):
    """Logging configuration settings.

    Attributes:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_logs: Render JSON lines when True, console output otherwise
    """

    level: str = Field(
        default="INFO",
        description="Logging level",
        pattern=r"^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
    )
    json_logs: bool = Field(
        default=True,
        description="Use the JSON renderer",
    )

    model_config = {"str_strip_whitespace": True}


class TraversalConfig(BaseModel):
    """Traversal engine settings.

    Attributes:
        recursion_limit: Interpreter recursion limit a caller may pass to
            depth_first_traverse for visitors that nest deeply through the
            visit continuation. The engine never reads it on its own.
    """

    recursion_limit: int = Field(
        default=10_000,
        ge=MIN_RECURSION_LIMIT,
        description="Recursion limit for visitor-driven nesting",
    )


class ArcwalkConfig(BaseModel):
    """Main library configuration combining all settings.

    Attributes:
        logging: Logging configuration
        traversal: Traversal engine configuration
    """

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    traversal: TraversalConfig = Field(default_factory=TraversalConfig)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "ArcwalkConfig":
        """Load configuration from a YAML file.

        Args:
            path: Path to the YAML configuration file

        Returns:
            Parsed and validated ArcwalkConfig instance

        Raises:
            FileNotFoundError: If configuration file doesn't exist
            ValueError: If configuration is invalid
        """
        config_path = Path(path)

        if not config_path.exists():
            msg = f"Configuration file not found: {config_path}"
            raise FileNotFoundError(msg)

        logger.info("loading_configuration", path=str(config_path))

        try:
            with config_path.open() as f:
                config_data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            msg = f"Invalid YAML in configuration file: {e}"
            raise ValueError(msg) from e

        if config_data is None:
            config_data = {}
        if not isinstance(config_data, dict):
            msg = "Configuration file must contain a mapping"
            raise ValueError(msg)

        config = cls.from_dict(config_data)

        logger.info(
            "configuration_loaded",
            logging_level=config.logging.level,
            recursion_limit=config.traversal.recursion_limit,
        )

        return config

    @classmethod
    def from_dict(cls, config_data: dict) -> "ArcwalkConfig":
        """Build configuration from a dictionary, applying environment overrides.

        The caller's dictionary is not modified.
        """
        return cls(**cls._apply_env_overrides(copy.deepcopy(config_data)))

    @classmethod
    def _apply_env_overrides(cls, config_data: dict) -> dict:
        """Apply environment variable overrides to configuration.

        Environment variables follow the pattern: ARCWALK_<SECTION>_<KEY>
        Example: ARCWALK_LOGGING_LEVEL, ARCWALK_TRAVERSAL_RECURSION_LIMIT

        Args:
            config_data: Base configuration dictionary

        Returns:
            Configuration dictionary with environment overrides applied
        """
        env_overrides = {
            ("logging", "level"): "ARCWALK_LOGGING_LEVEL",
            ("logging", "json_logs"): "ARCWALK_LOGGING_JSON",
            ("traversal", "recursion_limit"): "ARCWALK_TRAVERSAL_RECURSION_LIMIT",
        }

        for path, env_var in env_overrides.items():
            value = os.environ.get(env_var)
            if value is not None:
                # Navigate to nested config section
                current = config_data
                for key in path[:-1]:
                    if current.get(key) is None:
                        current[key] = {}
                    current = current[key]

                # Convert string values to appropriate types
                final_key = path[-1]
                if env_var.endswith("_LIMIT"):
                    try:
                        value = int(value)
                    except ValueError:
                        msg = f"Environment variable {env_var} must be an integer, got {value!r}"
                        raise ValueError(msg) from None
                elif env_var.endswith("_JSON"):
                    value = value.lower() in ("true", "1", "yes")

                current[final_key] = value
                logger.debug(
                    "env_override_applied",
                    env_var=env_var,
                    config_path=".".join(path),
                )

        return config_data

    def apply_logging(self) -> None:
        """Configure structlog with these logging settings."""
        configure_logging(level=self.logging.level, json_logs=self.logging.json_logs)

    def validate_config(self) -> list[str]:
        """Validate configuration and return list of warnings.

        Returns:
            List of validation warning messages (empty if no warnings)
        """
        warnings = []

        if self.traversal.recursion_limit > HIGH_RECURSION_LIMIT:
            warnings.append(
                f"Recursion limit is high ({self.traversal.recursion_limit}) - "
                "deep traversals may exhaust the C stack",
            )

        if self.traversal.recursion_limit < sys.getrecursionlimit():
            warnings.append(
                f"Recursion limit ({self.traversal.recursion_limit}) is below the "
                f"interpreter default ({sys.getrecursionlimit()}) and has no effect",
            )

        if self.logging.level == "DEBUG" and self.logging.json_logs:
            warnings.append("DEBUG logging emits one event per traversal - expect verbose output")

        return warnings


class ConfigManager:
    """Configuration manager using singleton pattern."""

    _instance: ArcwalkConfig | None = None
    _init_lock: threading.Lock = threading.Lock()

    @classmethod
    def load_config(cls, config_path: str | Path | None = None) -> ArcwalkConfig:
        """Load configuration from file, or defaults when no file exists.

        Args:
            config_path: Path to configuration file. If None, looks for
                arcwalk.yaml or arcwalk.yml in the current directory and
                falls back to defaults.

        Returns:
            Loaded ArcwalkConfig instance

        Raises:
            FileNotFoundError: If an explicit config file is not found
            ValueError: If the config file is invalid
        """
        if config_path is None:
            for default_name in DEFAULT_CONFIG_NAMES:
                default_path = Path(default_name)
                if default_path.exists():
                    config_path = default_path
                    break
            else:
                logger.debug("no_configuration_file_found", using="defaults")
                return ArcwalkConfig.from_dict({})

        return ArcwalkConfig.from_yaml(config_path)

    @classmethod
    def get_config(
        cls,
        config_path: str | Path | None = None,
        reload: bool = False,
    ) -> ArcwalkConfig:
        """Get configuration instance (singleton pattern).

        Uses double-checked locking so concurrent first calls load once.

        Args:
            config_path: Path to configuration file. Only used on first call or when reload=True.
            reload: If True, force reload configuration from file.

        Returns:
            ArcwalkConfig instance
        """
        if cls._instance is not None and not reload:
            return cls._instance

        with cls._init_lock:
            if cls._instance is None or reload:
                cls._instance = cls.load_config(config_path)

            return cls._instance

    @classmethod
    def reset_config(cls) -> None:
        """Reset the configuration instance."""
        cls._instance = None


def load_config(config_path: str | Path | None = None) -> ArcwalkConfig:
    """Load configuration from file."""
    return ConfigManager.load_config(config_path)


def get_config(config_path: str | Path | None = None, reload: bool = False) -> ArcwalkConfig:
    """Get configuration instance (singleton pattern)."""
    return ConfigManager.get_config(config_path, reload)


def reset_config() -> None:
    """Reset the configuration instance."""
    ConfigManager.reset_config()


__all__ = [
    "ArcwalkConfig",
    "ConfigManager",
    "LoggingConfig",
    "TraversalConfig",
    "get_config",
    "load_config",
    "reset_config",
]
