"""Configuration loader for the Cosense sync pipeline."""

import os
import re
from pathlib import Path
from typing import Any, Dict, Optional

import structlog
import yaml
from dotenv import load_dotenv
from pydantic import ValidationError

from cosense_sync.errors import ConfigurationError
from cosense_sync.models.config import AppConfig

log = structlog.stdlib.get_logger()

# Used when no configuration file is given: the three required settings come
# straight from the environment, everything else from defaults or APP_* vars.
DEFAULT_CONFIG_TEMPLATE: Dict[str, Any] = {
    "cosense": {
        "sid": "${SID}",
        "source_project": "${SOURCE_PROJECT_NAME}",
        "destination_project": "${DESTINATION_PROJECT_NAME}",
    },
}


class ConfigLoader:
    """Loads and validates application configuration from YAML files and environment variables."""

    def __init__(self, env_file: Optional[str] = ".env") -> None:
        """Initialize the ConfigLoader.

        Args:
            env_file: Optional dotenv file merged into the environment before
                substitution. Variables already set are not overridden.
        """
        self.env_var_pattern = re.compile(r"\$\{([^}]+)\}")
        self.env_file = env_file

    def load_config(self, config_path: Optional[str] = None) -> AppConfig:
        """Load configuration, substituting ${VAR} references from the environment.

        Args:
            config_path: Path to a YAML configuration file. If None, the
                built-in template is used (SID, SOURCE_PROJECT_NAME and
                DESTINATION_PROJECT_NAME must be set).

        Returns:
            AppConfig: Validated application configuration

        Raises:
            ConfigurationError: If a required value is missing or invalid
        """
        if self.env_file and Path(self.env_file).is_file():
            load_dotenv(self.env_file, override=False)
            log.debug("env_file_loaded", env_file=self.env_file)

        if config_path is None:
            log.info("loading_configuration", source="environment")
            config_dict = DEFAULT_CONFIG_TEMPLATE
        else:
            log.info("loading_configuration", config_path=config_path)
            config_dict = self._load_yaml_file(config_path)

        config_dict = self._substitute_env_vars(config_dict)

        try:
            app_config = AppConfig(**config_dict)
        except ValidationError as e:
            log.error("configuration_validation_failed", error=str(e))
            raise ConfigurationError(f"Configuration validation failed: {e}") from e

        log.info(
            "configuration_loaded_successfully",
            source_project=app_config.cosense.source_project,
            destination_project=app_config.cosense.destination_project,
            batch_size=app_config.sync.batch_size,
        )
        return app_config

    def _load_yaml_file(self, config_path: str) -> Dict[str, Any]:
        """Load YAML configuration file.

        Raises:
            ConfigurationError: If file cannot be read or parsed
        """
        try:
            with open(config_path, "r", encoding="utf-8") as f:
                config_dict = yaml.safe_load(f)
        except FileNotFoundError as e:
            raise ConfigurationError(f"Configuration file not found: {config_path}") from e
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Failed to parse YAML file {config_path}: {e}") from e
        except OSError as e:
            raise ConfigurationError(f"Failed to read configuration file {config_path}: {e}") from e

        if not isinstance(config_dict, dict):
            raise ConfigurationError(f"Configuration file is empty or not a mapping: {config_path}")

        log.debug("yaml_file_loaded", config_path=config_path)
        return config_dict

    def _substitute_env_vars(self, config: Any) -> Any:
        """Recursively substitute ${VAR_NAME} references in configuration values."""
        if isinstance(config, dict):
            return {key: self._substitute_env_vars(value) for key, value in config.items()}
        elif isinstance(config, list):
            return [self._substitute_env_vars(item) for item in config]
        elif isinstance(config, str):
            return self._substitute_env_var_in_string(config)
        else:
            return config

    def _substitute_env_var_in_string(self, value: str) -> str:
        """Substitute environment variables in a string.

        Raises:
            ConfigurationError: If a referenced variable is unset or empty
        """
        for var_name in self.env_var_pattern.findall(value):
            env_value = os.getenv(var_name)
            if not env_value:
                raise ConfigurationError(
                    f"Required environment variable not set: {var_name}. "
                    f"Please set {var_name} in your environment or .env file."
                )
            value = value.replace(f"${{{var_name}}}", env_value)

        return value
